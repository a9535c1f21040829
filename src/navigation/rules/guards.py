"""
Guards para eventos de navegação.

Guards decidem se um evento pode ser aplicado no estado atual da
sessão; o primeiro que negar interrompe a avaliação.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence

from navigation.states.session import Session


class GuardResult:
    """
    Resultado da avaliação de um guard.

    Attributes:
        allowed: Se o evento é permitido
        reason: Motivo do bloqueio (se allowed=False)
    """

    __slots__ = ("allowed", "reason")

    def __init__(self, allowed: bool, reason: str | None = None) -> None:
        self.allowed = allowed
        self.reason = reason

    @classmethod
    def allow(cls) -> GuardResult:
        """Cria resultado permitindo o evento."""
        return cls(allowed=True)

    @classmethod
    def deny(cls, reason: str) -> GuardResult:
        """Cria resultado negando o evento."""
        return cls(allowed=False, reason=reason)


Guard = Callable[[Session], GuardResult]


def guard_not_degraded(session: Session) -> GuardResult:
    """Guard: sessão degradada só aceita restart."""
    if session.is_degraded:
        return GuardResult.deny("session_degraded")
    return GuardResult.allow()


def guard_effect_idle(session: Session) -> GuardResult:
    """Guard: um efeito por vez; nada é despachado enquanto há efeito pendente."""
    if session.effect_in_progress:
        return GuardResult.deny("effect_in_progress")
    return GuardResult.allow()


def guard_history_not_empty(session: Session) -> GuardResult:
    """Guard: a tela inicial não tem voltar."""
    if not session.history:
        return GuardResult.deny("history_empty")
    return GuardResult.allow()


# Guards aplicados em ordem; todos devem permitir
DISPATCH_GUARDS: tuple[Guard, ...] = (guard_not_degraded, guard_effect_idle)
INPUT_GUARDS: tuple[Guard, ...] = (guard_not_degraded, guard_effect_idle)
BACK_GUARDS: tuple[Guard, ...] = (
    guard_not_degraded,
    guard_effect_idle,
    guard_history_not_empty,
)


def evaluate_guards(
    session: Session,
    guards: Sequence[Guard] = DISPATCH_GUARDS,
) -> GuardResult:
    """
    Avalia os guards para a sessão.

    Args:
        session: Sessão atual
        guards: Guards a aplicar (DISPATCH_GUARDS por padrão)

    Returns:
        GuardResult do primeiro guard que negar, ou allow() se todos passarem
    """
    for guard in guards:
        result = guard(session)
        if not result.allowed:
            return result
    return GuardResult.allow()
