"""
Máquina de navegação: redutor puro (Session, evento) → StepResult.

O redutor combina a máquina de estados de telas com o despachante de
ações. NavigationMachine é o invólucro com estado que guarda a sessão
corrente e o histórico de transições para auditoria.

Regras principais:
    - goto_screen: empilha a tela atual, troca de tela, limpa erros, mantém inputs
    - back: desempilha; no-op com histórico vazio
    - restart: volta ao início, limpa tudo e cancela efeito pendente
    - flow_id diferente: reinício implícito
    - target inexistente: estado degradado (recuperação só por restart)
    - conclusão de efeito com geração antiga: descartada
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any

from flowdoc.models import (
    ComponentId,
    Flow,
    InputCpfComponent,
    InputTextComponent,
    ScreenId,
)
from navigation.dispatch.dispatcher import dispatch
from navigation.rules.guards import BACK_GUARDS, INPUT_GUARDS, evaluate_guards
from navigation.states.session import PendingEffect, Session, new_session
from navigation.types.effects import (
    BeginAsyncEffect,
    Effect,
    Navigate,
    NoOp,
    ResetFlow,
)
from navigation.types.events import (
    BackRequested,
    ComponentActivated,
    EffectCompleted,
    EffectFailed,
    FlowLoaded,
    InputChanged,
    NavigationEvent,
    RestartRequested,
)
from navigation.types.transition import ScreenTransition, StepResult

logger = logging.getLogger(__name__)


def reduce(session: Session, event: NavigationEvent) -> StepResult:
    """
    Aplica um evento à sessão.

    Args:
        session: Sessão atual (não é modificada)
        event: Evento de navegação

    Returns:
        StepResult com a nova sessão e o que o runtime precisa agendar/cancelar

    Raises:
        TypeError: Se o evento não for um NavigationEvent conhecido
    """
    if isinstance(event, InputChanged):
        return _apply_input(session, event)
    if isinstance(event, ComponentActivated):
        return _apply_activation(session, event)
    if isinstance(event, BackRequested):
        return _apply_back(session)
    if isinstance(event, RestartRequested):
        return _restart(session, trigger=RestartRequested.TRIGGER)
    if isinstance(event, EffectCompleted):
        return _apply_effect_completion(session, event)
    if isinstance(event, EffectFailed):
        return _apply_effect_failure(session, event)
    if isinstance(event, FlowLoaded):
        return _apply_flow_loaded(session, event.flow)
    raise TypeError(f"Evento de navegação desconhecido: {type(event).__name__}")


def _apply_input(session: Session, event: InputChanged) -> StepResult:
    guard_result = evaluate_guards(session, INPUT_GUARDS)
    if not guard_result.allowed:
        return StepResult(session=session, rejected_reason=guard_result.reason)

    screen = session.current_screen
    component = screen.find_component(event.component_id) if screen else None
    if not isinstance(component, (InputTextComponent, InputCpfComponent)):
        return StepResult(session=session, rejected_reason="unknown_input")

    inputs = dict(session.inputs)
    previous = inputs.get(event.component_id)
    inputs[event.component_id] = event.value

    errors = dict(session.validation_errors)
    if previous != event.value:
        errors.pop(event.component_id, None)

    return StepResult(
        session=replace(session, inputs=inputs, validation_errors=errors)
    )


def _apply_activation(session: Session, event: ComponentActivated) -> StepResult:
    screen = session.current_screen
    if screen is None:
        return StepResult(session=session, rejected_reason="session_degraded")

    component = screen.find_component(event.component_id)
    if component is None:
        return StepResult(session=session, rejected_reason="unknown_component")

    effect = dispatch(component, screen, session)
    return _apply_effect(session, effect, component.id)


def _apply_effect(
    session: Session,
    effect: Effect,
    component_id: ComponentId,
) -> StepResult:
    if isinstance(effect, Navigate):
        result = _goto(
            session,
            effect.target,
            trigger="goto_screen",
            metadata={"component_id": component_id},
        )
        return replace(result, effect=effect)

    if isinstance(effect, ResetFlow):
        result = _restart(session, trigger="restart_action")
        return replace(result, effect=effect)

    if isinstance(effect, BeginAsyncEffect):
        generation = session.effect_generation + 1
        pending = PendingEffect(
            generation=generation,
            completion_target=effect.completion_target,
            source_component_id=component_id,
        )
        logger.info(
            "async_effect_started",
            extra={
                "screen_id": session.current_screen_id,
                "component_id": component_id,
                "completion_target": effect.completion_target,
                "generation": generation,
            },
        )
        return StepResult(
            session=replace(
                session,
                pending_effect=pending,
                effect_generation=generation,
                validation_errors={},
            ),
            effect=effect,
            started_effect=pending,
        )

    if isinstance(effect, NoOp):
        if effect.validation_errors:
            return StepResult(
                session=replace(
                    session, validation_errors=dict(effect.validation_errors)
                ),
                effect=effect,
                rejected_reason=effect.reason,
            )
        return StepResult(session=session, effect=effect, rejected_reason=effect.reason)

    raise TypeError(f"Efeito desconhecido: {type(effect).__name__}")


def _goto(
    session: Session,
    target: ScreenId,
    *,
    trigger: str,
    metadata: dict[str, Any] | None = None,
) -> StepResult:
    """Troca de tela; target inexistente leva ao estado degradado."""
    dangling = not session.flow.has_screen(target)
    transition = ScreenTransition(
        from_screen=session.current_screen_id,
        to_screen=target,
        trigger=trigger,
        metadata={**(metadata or {}), "dangling": dangling},
    )

    if dangling:
        logger.warning(
            "dangling_target_detected",
            extra={
                "flow_id": session.flow.flow_id,
                "screen_id": session.current_screen_id,
                "target": target,
            },
        )

    new = replace(
        session,
        current_screen_id=target,
        history=(*session.history, session.current_screen_id),
        validation_errors={},
        dangling_target=target if dangling else None,
    )
    return StepResult(session=new, transition=transition)


def _apply_back(session: Session) -> StepResult:
    guard_result = evaluate_guards(session, BACK_GUARDS)
    if not guard_result.allowed:
        return StepResult(session=session, rejected_reason=guard_result.reason)

    previous = session.history[-1]
    # Histórico pode citar telas removidas por uma edição ao vivo
    dangling = not session.flow.has_screen(previous)
    if dangling:
        logger.warning(
            "dangling_target_detected",
            extra={
                "flow_id": session.flow.flow_id,
                "screen_id": session.current_screen_id,
                "target": previous,
            },
        )

    new = replace(
        session,
        current_screen_id=previous,
        history=session.history[:-1],
        validation_errors={},
        dangling_target=previous if dangling else None,
    )
    transition = ScreenTransition(
        from_screen=session.current_screen_id,
        to_screen=previous,
        trigger=BackRequested.TRIGGER,
        metadata={"dangling": dangling},
    )
    return StepResult(session=new, transition=transition)


def _restart(session: Session, *, trigger: str) -> StepResult:
    """Reinício: sempre aceito, cancela efeito pendente."""
    cancelled = session.pending_effect
    if cancelled is not None:
        logger.info(
            "async_effect_cancelled",
            extra={"generation": cancelled.generation, "trigger": trigger},
        )

    new = new_session(session.flow, effect_generation=session.effect_generation)
    transition = ScreenTransition(
        from_screen=session.current_screen_id,
        to_screen=new.current_screen_id,
        trigger=trigger,
    )
    return StepResult(session=new, transition=transition, cancelled_effect=cancelled)


def _apply_effect_completion(session: Session, event: EffectCompleted) -> StepResult:
    pending = session.pending_effect
    if pending is None or pending.generation != event.generation:
        logger.info(
            "effect_completion_discarded",
            extra={
                "generation": event.generation,
                "pending_generation": pending.generation if pending else None,
            },
        )
        return StepResult(session=session, rejected_reason="stale_effect_completion")

    # Validação já ocorreu no início do efeito e inputs ficam congelados
    cleared = replace(session, pending_effect=None)
    return _goto(
        cleared,
        pending.completion_target,
        trigger=EffectCompleted.TRIGGER,
        metadata={
            "component_id": pending.source_component_id,
            "generation": pending.generation,
        },
    )


def _apply_effect_failure(session: Session, event: EffectFailed) -> StepResult:
    """Efeito abortado: libera a sessão na mesma tela, inputs preservados."""
    pending = session.pending_effect
    if pending is None or pending.generation != event.generation:
        return StepResult(session=session, rejected_reason="stale_effect_completion")

    logger.warning(
        "async_effect_failed",
        extra={
            "screen_id": session.current_screen_id,
            "generation": pending.generation,
            "reason": event.reason,
        },
    )
    return StepResult(session=replace(session, pending_effect=None))


def _apply_flow_loaded(session: Session, flow: Flow) -> StepResult:
    """Troca de documento sempre gera uma nova sessão.

    Mesma identidade (edição ao vivo): preserva posição, histórico e inputs.
    Identidade diferente: reinício implícito.
    """
    cancelled = session.pending_effect

    if flow.flow_id != session.flow.flow_id:
        new = new_session(flow, effect_generation=session.effect_generation)
        trigger = "flow_identity_changed"
    else:
        current = session.current_screen_id
        new = replace(
            session,
            flow=flow,
            validation_errors={},
            pending_effect=None,
            dangling_target=None if flow.has_screen(current) else current,
        )
        trigger = "flow_updated"

    logger.info(
        "navigation_flow_loaded",
        extra={
            "previous_flow_id": session.flow.flow_id,
            "flow_id": flow.flow_id,
            "trigger": trigger,
            "screen_count": flow.screen_count(),
        },
    )
    transition = ScreenTransition(
        from_screen=session.current_screen_id,
        to_screen=new.current_screen_id,
        trigger=trigger,
        metadata={"flow_id": flow.flow_id},
    )
    return StepResult(session=new, transition=transition, cancelled_effect=cancelled)


class NavigationMachine:
    """
    Máquina de navegação com estado.

    Guarda a sessão corrente e o histórico de transições aplicadas.

    Attributes:
        session: Sessão atual
        history_log: Transições aplicadas (auditoria)
    """

    __slots__ = ("_history_log", "_session", "_session_key")

    def __init__(self, flow: Flow, session_key: str = "") -> None:
        """
        Inicializa a máquina na tela inicial do fluxo.

        Args:
            flow: Documento validado
            session_key: Identificador da sessão para logs
        """
        self._session = new_session(flow)
        self._history_log: list[ScreenTransition] = []
        self._session_key = session_key

    @property
    def session(self) -> Session:
        """Sessão atual."""
        return self._session

    @property
    def flow(self) -> Flow:
        """Documento ativo."""
        return self._session.flow

    @property
    def current_screen_id(self) -> ScreenId:
        """Tela atual."""
        return self._session.current_screen_id

    @property
    def history_log(self) -> list[ScreenTransition]:
        """Transições aplicadas (cópia para evitar mutação externa)."""
        return list(self._history_log)

    @property
    def session_key(self) -> str:
        """Identificador da sessão."""
        return self._session_key

    def apply(self, event: NavigationEvent) -> StepResult:
        """Aplica o evento e guarda a nova sessão."""
        result = reduce(self._session, event)
        self._session = result.session

        if result.transition is not None:
            self._history_log.append(result.transition)
            logger.info(
                "navigation_transition_applied",
                extra={
                    "kiosk_session_id": self._session_key,
                    **result.transition.to_log_dict(),
                },
            )
        elif not result.accepted:
            logger.debug(
                "navigation_event_rejected",
                extra={
                    "kiosk_session_id": self._session_key,
                    "event": event.TRIGGER,
                    "reason": result.rejected_reason,
                },
            )
        return result

    def set_input(self, component_id: str, value: str) -> StepResult:
        """Atalho para InputChanged."""
        return self.apply(InputChanged(ComponentId(component_id), value))

    def activate(self, component_id: str) -> StepResult:
        """Atalho para ComponentActivated."""
        return self.apply(ComponentActivated(ComponentId(component_id)))

    def back(self) -> StepResult:
        """Atalho para BackRequested."""
        return self.apply(BackRequested())

    def restart(self) -> StepResult:
        """Atalho para RestartRequested."""
        return self.apply(RestartRequested())

    def complete_effect(self, generation: int) -> StepResult:
        """Atalho para EffectCompleted."""
        return self.apply(EffectCompleted(generation))

    def fail_effect(self, generation: int, reason: str) -> StepResult:
        """Atalho para EffectFailed."""
        return self.apply(EffectFailed(generation, reason))

    def load_flow(self, flow: Flow) -> StepResult:
        """Atalho para FlowLoaded."""
        return self.apply(FlowLoaded(flow))

    def get_state_summary(self) -> dict[str, Any]:
        """
        Resumo do estado atual para observability (sem valores digitados).

        Returns:
            Dict seguro para logs
        """
        session = self._session
        return {
            "kiosk_session_id": self._session_key,
            "flow_id": session.flow.flow_id,
            "current_screen_id": session.current_screen_id,
            "status": session.status.value,
            "history_depth": len(session.history),
            "input_count": len(session.inputs),
            "error_count": len(session.validation_errors),
            "transition_count": len(self._history_log),
        }

    def get_history_summary(self) -> list[dict[str, Any]]:
        """Histórico em formato seguro para logs."""
        return [t.to_log_dict() for t in self._history_log]


def create_machine(flow: Flow, session_key: str = "") -> NavigationMachine:
    """
    Factory function para criar uma NavigationMachine.

    Args:
        flow: Documento validado
        session_key: Identificador da sessão

    Returns:
        NavigationMachine na tela inicial
    """
    return NavigationMachine(flow=flow, session_key=session_key)
