"""Exceções do registro de sessões de quiosque."""

from __future__ import annotations


class KioskSessionError(RuntimeError):
    """Base para falhas do registro de sessões."""


class SessionNotFoundError(KioskSessionError):
    """Sessão inexistente, encerrada ou expirada."""

    def __init__(self, session_id: str) -> None:
        super().__init__(f"Sessão não encontrada: {session_id}")
        self.session_id = session_id


class SessionLimitExceededError(KioskSessionError):
    """Limite de sessões vivas atingido."""

    def __init__(self, max_sessions: int) -> None:
        super().__init__(f"Limite de sessões atingido ({max_sessions})")
        self.max_sessions = max_sessions
