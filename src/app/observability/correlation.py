"""Gerenciamento de correlation_id e kiosk_session_id para logs.

Ambos são propagados via ContextVar (thread/async-safe) e injetados em
todo log pelo ContextFilter.

Uso:
    from app.observability import set_correlation_id, reset_correlation_id

    # Em middleware/handler
    token = set_correlation_id(request.headers.get("x-correlation-id"))
    try:
        # processar request
    finally:
        reset_correlation_id(token)

    # Em handlers de sessão
    session_token = set_kiosk_session_id(session_id)
"""

from __future__ import annotations

import uuid
from contextvars import ContextVar, Token

_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")
_kiosk_session_id: ContextVar[str] = ContextVar("kiosk_session_id", default="")


def get_correlation_id() -> str:
    """Retorna o correlation_id do contexto atual.

    Returns:
        correlation_id ou string vazia se não definido.
    """
    return _correlation_id.get()


def set_correlation_id(correlation_id: str | None = None) -> Token[str]:
    """Define o correlation_id no contexto atual.

    Args:
        correlation_id: ID a definir. Se None, gera um novo UUID.

    Returns:
        Token para reset posterior via reset_correlation_id().
    """
    value = correlation_id or generate_correlation_id()
    return _correlation_id.set(value)


def reset_correlation_id(token: Token[str]) -> None:
    """Restaura o correlation_id ao valor anterior."""
    _correlation_id.reset(token)


def generate_correlation_id() -> str:
    """Gera um novo correlation_id (UUID v4)."""
    return str(uuid.uuid4())


def get_kiosk_session_id() -> str:
    """Retorna o id da sessão de quiosque do contexto atual (ou "")."""
    return _kiosk_session_id.get()


def set_kiosk_session_id(session_id: str) -> Token[str]:
    """Define a sessão de quiosque do contexto atual."""
    return _kiosk_session_id.set(session_id)


def reset_kiosk_session_id(token: Token[str]) -> None:
    """Restaura a sessão de quiosque ao valor anterior."""
    _kiosk_session_id.reset(token)
