"""Conversational error messages.

A failed request is shown as an ordinary AI message. This module decides
what that message says; the raw error detail is included only on request.
"""

from ..errors import DispatchError, NetworkError

ERROR_PREFIX = "Ocorreu um erro ao processar sua solicitação."
NETWORK_HINT = "Verifique sua conexão com a internet ou se o servidor está acessível."
DETAIL_TEMPLATE = "Erro: {detail}"
CHECK_API_KEY_HINT = "Por favor, verifique sua chave API e tente novamente."
RETRY_HINT = "Por favor, tente novamente."


def format_error_message(
    error: Exception,
    include_detail: bool = True,
    uses_api_key: bool = True,
) -> str:
    """Build the human-readable text revealed in place of a reply.

    Args:
        error: The failure raised by the dispatcher, or an unexpected exception
        include_detail: Append the error's own message (not for network errors)
        uses_api_key: Ask the user to re-check their key instead of a plain retry

    Returns:
        A non-empty, multi-clause message
    """
    parts = [ERROR_PREFIX]
    if isinstance(error, NetworkError):
        parts.append(NETWORK_HINT)
    elif include_detail:
        detail = error.detail if isinstance(error, DispatchError) else str(error)
        parts.append(DETAIL_TEMPLATE.format(detail=detail or type(error).__name__))
    parts.append(CHECK_API_KEY_HINT if uses_api_key else RETRY_HINT)
    return " ".join(parts)
