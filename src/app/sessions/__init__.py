"""Módulo de sessões de quiosque.

Exporta runtime de sessão, registro, payload de enqueue e exceções.
"""

from app.sessions.enqueue import (
    EnqueuePayload,
    EnqueueSinkProtocol,
    LoggingEnqueueSink,
    build_enqueue_payload,
)
from app.sessions.errors import (
    KioskSessionError,
    SessionLimitExceededError,
    SessionNotFoundError,
)
from app.sessions.manager import (
    DEFAULT_MAX_SESSIONS,
    DEFAULT_SESSION_TTL_SECONDS,
    KioskSessionManager,
)
from app.sessions.runtime import KioskSession

__all__ = [
    "DEFAULT_MAX_SESSIONS",
    "DEFAULT_SESSION_TTL_SECONDS",
    "EnqueuePayload",
    "EnqueueSinkProtocol",
    "KioskSession",
    "KioskSessionError",
    "KioskSessionManager",
    "LoggingEnqueueSink",
    "SessionLimitExceededError",
    "SessionNotFoundError",
    "build_enqueue_payload",
]
