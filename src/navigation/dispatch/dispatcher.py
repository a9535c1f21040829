"""Despachante de ações declarativas.

Traduz o acionamento de um componente em um efeito:

    goto_screen → (valida formulário) → Navigate(target)
    enqueue     → (valida formulário) → BeginAsyncEffect(target)
    restart     → ResetFlow
    demais      → NoOp

Não altera a sessão; a máquina de navegação aplica o efeito.
"""

from __future__ import annotations

import logging

from flowdoc.models import ButtonComponent, Component, Screen
from navigation.rules.guards import DISPATCH_GUARDS, evaluate_guards
from navigation.rules.validation import validate_screen
from navigation.states.session import Session
from navigation.types.effects import (
    BeginAsyncEffect,
    Effect,
    Navigate,
    NoOp,
    ResetFlow,
)

logger = logging.getLogger(__name__)


def dispatch(component: Component, screen: Screen, session: Session) -> Effect:
    """
    Resolve o efeito do acionamento de um componente.

    Args:
        component: Componente acionado
        screen: Tela que contém o componente
        session: Sessão atual

    Returns:
        Efeito a aplicar; falhas de validação voltam como NoOp com erros
    """
    if not isinstance(component, ButtonComponent):
        return NoOp(reason="not_actionable")

    guard_result = evaluate_guards(session, DISPATCH_GUARDS)
    if not guard_result.allowed:
        return NoOp(reason=guard_result.reason or "blocked")

    if component.action == "restart":
        return ResetFlow()

    errors = validate_screen(screen, session.inputs)
    if errors:
        logger.info(
            "dispatch_validation_failed",
            extra={
                "screen_id": screen.id,
                "component_id": component.id,
                "failed_fields": sorted(errors),
            },
        )
        return NoOp(reason="validation_failed", validation_errors=errors)

    # target garantido pelo modelo para goto_screen/enqueue
    if component.action == "goto_screen" and component.target:
        return Navigate(target=component.target)
    if component.action == "enqueue" and component.target:
        return BeginAsyncEffect(completion_target=component.target)

    return NoOp(reason="unsupported_action")
