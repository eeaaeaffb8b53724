"""Configuration constants.

Centralizes magic numbers and configuration values for chatreveal.
"""


class LogLevel:
    """Log level constants with numeric values for comparison.

    Standard logging hierarchy: DEBUG < INFO < WARNING < ERROR
    Lower numeric value = more verbose (shows more messages).
    """

    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40

    _names = {
        DEBUG: "DEBUG",
        INFO: "INFO",
        WARNING: "WARNING",
        ERROR: "ERROR",
    }

    _from_string = {
        "debug": DEBUG,
        "info": INFO,
        "warning": WARNING,
        "error": ERROR,
    }

    @classmethod
    def name(cls, level: int) -> str:
        """Get the name for a log level."""
        return cls._names.get(level, "UNKNOWN")

    @classmethod
    def from_string(cls, level_str: str) -> int:
        """Convert string to log level. Returns DEBUG if invalid."""
        return cls._from_string.get(level_str.lower(), cls.DEBUG)


# Reveal configuration
REVEAL_INTERVAL_SECONDS = 0.03  # Delay between two revealed characters

# Request configuration
DEFAULT_MAX_TOKENS = 150
DEFAULT_OPENAI_MODEL = "gpt-4o"
DEFAULT_PROXY_URL = "http://localhost:3001"
REQUEST_TIMEOUT_SECONDS = 60.0

# Backends
BACKEND_OPENAI = "openai"  # Direct call with a bearer API key
BACKEND_PROXY = "proxy"  # Proxying backend, no credential

# API key field configuration
API_KEY_FLASH_SECONDS = 1.5  # How long the key field flashes when empty

# Canned questions shown under the conversation
DEFAULT_QUESTIONS = (
    "O que é inteligência artificial?",
    "Como funciona o aprendizado de máquina?",
    "Quais são as aplicações práticas da IA?",
    "Como a IA está mudando o mundo do trabalho?",
)

# Chat display configuration
USER_PREFIX = "Você"
AI_PREFIX = "IA"
EMPTY_CONVERSATION_HINT = "Selecione uma pergunta abaixo ou digite sua própria pergunta."
LOADING_TEXT = "Carregando resposta..."
LOG_TIMESTAMP_FORMAT = "%H:%M:%S"
