"""
Exports públicos do módulo navigation/states.

Valor de sessão e status derivado.
"""

from navigation.states.session import (
    PendingEffect,
    Session,
    SessionStatus,
    new_session,
)

__all__ = [
    "PendingEffect",
    "Session",
    "SessionStatus",
    "new_session",
]
