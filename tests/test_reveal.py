"""Unit and property-based tests for the reveal controller."""
import asyncio

import pytest
from conftest import settle
from hypothesis import given
from hypothesis import strategies as st

from chatreveal.conversation import ConversationStore
from chatreveal.errors import RevealInProgressError
from chatreveal.reveal import RevealController, RevealSession


def _recording_store():
    """Return a store, a placeholder bound for reveal, and the list of writes."""
    store = ConversationStore()
    target = store.append_placeholder_ai_message()
    writes: list[str] = []
    store.subscribe(lambda message: writes.append(message.text))
    return store, target, writes


class TestRevealController:
    """Tests for RevealController."""

    @pytest.mark.asyncio
    async def test_reveal_writes_each_prefix_once(self):
        """Test that 'Oi!' is revealed as 'O', 'Oi', 'Oi!'."""
        store, target, writes = _recording_store()
        controller = RevealController(store, interval=0)

        controller.start(target.id, "Oi!")
        assert controller.active
        await controller.wait()

        assert writes == ["O", "Oi", "Oi!"]
        assert store.get(target.id).text == "Oi!"
        assert not controller.active
        assert controller.session is None

    @pytest.mark.asyncio
    async def test_empty_text_finishes_without_timer(self):
        """Test that an empty reveal ends at once and schedules nothing."""
        store, target, writes = _recording_store()
        finished: list[RevealSession] = []
        controller = RevealController(store, interval=10, on_finished=finished.append)

        session = controller.start(target.id, "")

        assert not controller.active
        assert session.task is None
        assert writes == []
        assert len(finished) == 1
        assert not finished[0].cancelled
        await asyncio.wait_for(controller.wait(), timeout=1)

    @pytest.mark.asyncio
    async def test_start_while_active_raises(self):
        """Test that a second session cannot start before the first ends."""
        store, target, _ = _recording_store()
        other = store.append_placeholder_ai_message()
        controller = RevealController(store, interval=10)

        controller.start(target.id, "abc")
        with pytest.raises(RevealInProgressError):
            controller.start(other.id, "xyz")
        controller.stop()

    @pytest.mark.asyncio
    async def test_stop_keeps_partial_text(self):
        """Test that stopping mid-reveal freezes the text revealed so far."""
        store, target, writes = _recording_store()
        controller = RevealController(store, interval=0)

        def stop_after_two(message):
            if len(writes) == 2:
                controller.stop()

        store.subscribe(stop_after_two)
        controller.start(target.id, "abcdef")
        await controller.wait()
        await settle()

        assert writes == ["a", "ab"]
        assert store.get(target.id).text == "ab"

    @pytest.mark.asyncio
    async def test_stop_before_first_tick(self):
        """Test that stopping right after start writes nothing."""
        store, target, writes = _recording_store()
        controller = RevealController(store, interval=0)

        controller.start(target.id, "abc")
        assert controller.stop()
        await settle()

        assert writes == []
        assert store.get(target.id).text == ""

    @pytest.mark.asyncio
    async def test_stop_is_idempotent(self):
        """Test that stop without an active session is a no-op."""
        store, target, _ = _recording_store()
        finished: list[RevealSession] = []
        controller = RevealController(store, interval=0, on_finished=finished.append)

        assert controller.stop() is False
        controller.start(target.id, "ab")
        assert controller.stop() is True
        assert controller.stop() is False

        assert len(finished) == 1
        assert finished[0].cancelled

    @pytest.mark.asyncio
    async def test_finished_callback_runs_once_on_completion(self):
        """Test the completion callback after a full reveal."""
        store, target, _ = _recording_store()
        finished: list[RevealSession] = []
        controller = RevealController(store, interval=0, on_finished=finished.append)

        controller.start(target.id, "xyz")
        await controller.wait()
        await settle()

        assert len(finished) == 1
        assert finished[0].revealed_count == 3
        assert finished[0].revealed_text == "xyz"
        assert not finished[0].cancelled

    @pytest.mark.asyncio
    async def test_close_cancels_running_session(self):
        """Test that teardown leaves no task writing into the store."""
        store, target, writes = _recording_store()
        controller = RevealController(store, interval=10)

        session = controller.start(target.id, "long answer")
        task = session.task
        controller.close()
        await settle()

        assert task.cancelled()
        assert writes == []
        assert not controller.active

    @pytest.mark.asyncio
    async def test_new_session_after_previous_ends(self):
        """Test that the controller is reusable once idle."""
        store, target, _ = _recording_store()
        second = store.append_placeholder_ai_message()
        controller = RevealController(store, interval=0)

        controller.start(target.id, "um")
        await controller.wait()
        controller.start(second.id, "dois")
        await controller.wait()

        assert store.get(target.id).text == "um"
        assert store.get(second.id).text == "dois"

    def test_negative_interval_rejected(self):
        """Test that a negative tick interval fails fast."""
        with pytest.raises(ValueError):
            RevealController(ConversationStore(), interval=-0.1)


class TestRevealSession:
    """Tests for RevealSession."""

    def test_revealed_text_and_done(self):
        """Test the derived properties of a session."""
        session = RevealSession(message_id=1, target_text="abc")
        assert session.revealed_text == ""
        assert not session.done

        session.revealed_count = 3
        assert session.revealed_text == "abc"
        assert session.done

    def test_empty_session_is_done(self):
        """Test that an empty target is already complete."""
        assert RevealSession(message_id=1, target_text="").done


@given(st.text(max_size=40))
def test_reveal_is_monotonic(text: str):
    """Property test: writes are text[:1], text[:2], ... text[:n], nothing else."""
    async def _reveal():
        store, target, writes = _recording_store()
        controller = RevealController(store, interval=0)
        controller.start(target.id, text)
        await controller.wait()
        return writes, store.get(target.id).text

    writes, final = asyncio.run(_reveal())

    assert writes == [text[:i] for i in range(1, len(text) + 1)]
    assert final == text


@given(st.text(min_size=1, max_size=30), st.data())
def test_stop_freezes_text_at_any_length(text: str, data):
    """Property test: stopping after k writes leaves text[:k] for good."""
    k = data.draw(st.integers(min_value=0, max_value=len(text) - 1))

    async def _reveal():
        store, target, writes = _recording_store()
        controller = RevealController(store, interval=0)

        def stop_at_k(message):
            if len(writes) == k:
                controller.stop()

        store.subscribe(stop_at_k)
        controller.start(target.id, text)
        if k == 0:
            controller.stop()
        await controller.wait()
        await settle(len(text) + 5)
        return writes, store.get(target.id).text, controller.active

    writes, final, active = asyncio.run(_reveal())

    assert len(writes) == k
    assert final == text[:k]
    assert not active
