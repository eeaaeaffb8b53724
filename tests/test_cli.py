"""Tests for the Typer command-line interface."""
import pytest
from conftest import FakeDispatcher
from typer.testing import CliRunner

from chatreveal.cli import app as cli_app
from chatreveal.cli.providers import console_debug_callback, get_backend, get_dispatcher
from chatreveal.config import DEFAULT_QUESTIONS
from chatreveal.llm import OpenAIProvider, ProxyProvider

runner = CliRunner()


@pytest.fixture
def fake_dispatcher(monkeypatch):
    """Route the CLI to a fake dispatcher."""
    dispatcher = FakeDispatcher()
    monkeypatch.setattr(cli_app, "get_dispatcher", lambda *args, **kwargs: dispatcher)
    return dispatcher


class TestAskCommand:
    """Tests for the ask command."""

    def test_ask_reveals_reply(self, fake_dispatcher):
        """Test that the reply is printed after the prompt."""
        result = runner.invoke(cli_app.app, ["ask", "Olá", "--interval", "0"])

        assert result.exit_code == 0, result.output
        assert "Olá" in result.output
        assert "Oi!" in result.output
        assert fake_dispatcher.prompts == ["Olá"]
        assert fake_dispatcher.closed

    def test_ask_canned_question(self, fake_dispatcher):
        """Test that --question sends the chosen canned question."""
        result = runner.invoke(cli_app.app, ["ask", "-q", "1", "-i", "0"])

        assert result.exit_code == 0, result.output
        assert fake_dispatcher.prompts == [DEFAULT_QUESTIONS[0]]

    def test_ask_question_out_of_range(self, fake_dispatcher):
        """Test that an unknown question number fails."""
        result = runner.invoke(cli_app.app, ["ask", "-q", "9"])

        assert result.exit_code == 1
        assert fake_dispatcher.prompts == []

    def test_ask_without_prompt(self, fake_dispatcher):
        """Test that a prompt or a question is required."""
        result = runner.invoke(cli_app.app, ["ask"])

        assert result.exit_code == 1
        assert "Error" in result.output

    def test_ask_failure_is_shown_as_reply(self, fake_dispatcher):
        """Test that a failed request still exits cleanly with a readable message."""
        from chatreveal.errors import HttpError

        fake_dispatcher.error = HttpError(500)
        result = runner.invoke(cli_app.app, ["ask", "Olá", "-i", "0"])

        assert result.exit_code == 0, result.output
        assert "Ocorreu um erro" in result.output

    def test_ask_without_api_key(self, monkeypatch):
        """Test that a backend needing a key exits with an error when none is set."""
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)
        dispatcher = FakeDispatcher(requires_api_key=True)
        monkeypatch.setattr(cli_app, "get_dispatcher", lambda *args, **kwargs: dispatcher)

        result = runner.invoke(cli_app.app, ["ask", "Olá", "-i", "0"])

        assert result.exit_code == 1
        assert dispatcher.prompts == []
        assert dispatcher.closed

    def test_ask_uses_env_api_key(self, monkeypatch):
        """Test that OPENAI_API_KEY pre-fills the session key."""
        monkeypatch.setenv("OPENAI_API_KEY", "sk-env")
        dispatcher = FakeDispatcher(requires_api_key=True)
        monkeypatch.setattr(cli_app, "get_dispatcher", lambda *args, **kwargs: dispatcher)

        result = runner.invoke(cli_app.app, ["ask", "Olá", "-i", "0"])

        assert result.exit_code == 0, result.output
        assert dispatcher.api_keys == ["sk-env"]


def test_questions_command():
    """Test that every canned question is listed."""
    result = runner.invoke(cli_app.app, ["questions"])

    assert result.exit_code == 0
    for question in DEFAULT_QUESTIONS:
        assert question in result.output


class TestProviders:
    """Tests for the CLI wiring helpers."""

    def test_backend_from_env(self, monkeypatch):
        """Test CHAT_BACKEND and the explicit override."""
        monkeypatch.setenv("CHAT_BACKEND", "PROXY")
        assert get_backend() == "proxy"
        assert get_backend("openai") == "openai"

    def test_backend_default(self, monkeypatch):
        monkeypatch.delenv("CHAT_BACKEND", raising=False)
        assert get_backend() == "openai"

    def test_dispatcher_for_openai(self, monkeypatch):
        """Test the OpenAI backend configuration from the environment."""
        monkeypatch.setenv("OPENAI_CHAT_MODEL", "gpt-4o-mini")
        monkeypatch.delenv("OPENAI_BASE_URL", raising=False)

        dispatcher = get_dispatcher("openai")

        assert isinstance(dispatcher.provider, OpenAIProvider)
        assert dispatcher.provider.model == "gpt-4o-mini"
        assert dispatcher.requires_api_key

    def test_dispatcher_for_proxy(self, monkeypatch):
        """Test the proxy backend URL override."""
        monkeypatch.setenv("CHAT_PROXY_URL", "http://env.test")

        assert get_dispatcher("proxy").provider.base_url == "http://env.test"
        assert get_dispatcher("proxy", proxy_url="http://flag.test").provider.base_url == "http://flag.test"
        assert isinstance(get_dispatcher("proxy").provider, ProxyProvider)

    def test_unknown_backend_exits(self):
        """Test that an unknown backend stops the command."""
        import typer

        with pytest.raises(typer.Exit):
            get_dispatcher("gemini")

    def test_console_debug_callback_filters_levels(self):
        """Test that traces below the threshold are dropped."""
        from rich.console import Console

        console = Console(record=True, width=120)
        callback = console_debug_callback(console, "warning")

        callback("info", "Chat", "Prompt submitted")
        callback("error", "Chat", "HttpError: [500]")

        text = console.export_text()
        assert "Prompt submitted" not in text
        assert "HttpError: [500]" in text
