"""Sessão viva de quiosque.

Liga a NavigationMachine (lógica pura) ao EffectSimulator (tempo) e ao
sink de enqueue (fila). Toda mudança de estado passa pela máquina; o
runtime só reage ao StepResult: agenda efeitos iniciados e cancela os
descartados por restart/troca de fluxo.

Os métodos que podem iniciar efeitos exigem event loop em execução.
"""

from __future__ import annotations

import logging
import time
from dataclasses import replace
from typing import TYPE_CHECKING

from app.observability import record_effect_outcome
from app.sessions.enqueue import EnqueuePayload, build_enqueue_payload
from navigation import NavigationMachine, render_session

if TYPE_CHECKING:
    from collections.abc import Callable

    from app.sessions.enqueue import EnqueueSinkProtocol
    from flowdoc import Flow
    from navigation import EffectHandle, EffectSimulator, Session, SessionView, StepResult

logger = logging.getLogger(__name__)


class KioskSession:
    """Sessão de quiosque com efeitos assíncronos reais (simulados)."""

    __slots__ = (
        "_clock",
        "_created_at",
        "_handle",
        "_last_activity",
        "_last_enqueue",
        "_machine",
        "_session_id",
        "_simulator",
        "_sink",
    )

    def __init__(
        self,
        session_id: str,
        flow: Flow,
        *,
        simulator: EffectSimulator,
        enqueue_sink: EnqueueSinkProtocol,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._session_id = session_id
        self._machine = NavigationMachine(flow, session_key=session_id)
        self._simulator = simulator
        self._sink = enqueue_sink
        self._clock = clock
        self._created_at = clock()
        self._last_activity = self._created_at
        self._handle: EffectHandle | None = None
        self._last_enqueue: EnqueuePayload | None = None

    @property
    def session_id(self) -> str:
        return self._session_id

    @property
    def machine(self) -> NavigationMachine:
        return self._machine

    @property
    def session(self) -> Session:
        return self._machine.session

    @property
    def last_activity(self) -> float:
        return self._last_activity

    @property
    def last_enqueue(self) -> EnqueuePayload | None:
        """Último payload entregue ao sink (None se nunca houve enqueue)."""
        return self._last_enqueue

    @property
    def has_running_effect(self) -> bool:
        return self._handle is not None and not self._handle.done

    def touch(self) -> None:
        """Marca atividade (renova o TTL)."""
        self._last_activity = self._clock()

    def idle_seconds(self) -> float:
        return self._clock() - self._last_activity

    def set_input(self, component_id: str, value: str) -> StepResult:
        return self._handle_result(self._machine.set_input(component_id, value))

    def activate(self, component_id: str) -> StepResult:
        return self._handle_result(self._machine.activate(component_id))

    def back(self) -> StepResult:
        return self._handle_result(self._machine.back())

    def restart(self) -> StepResult:
        return self._handle_result(self._machine.restart())

    def load_flow(self, flow: Flow) -> StepResult:
        return self._handle_result(self._machine.load_flow(flow))

    def render(self) -> SessionView:
        """Projeção renderizável da sessão atual."""
        return render_session(self._machine.session)

    def cancel_effect(self) -> bool:
        """Cancela o efeito em voo (usado ao encerrar a sessão)."""
        if self._handle is None or self._handle.done:
            return False
        cancelled = self._handle.cancel()
        if cancelled:
            record_effect_outcome("cancelled", self._handle.completion_target)
        self._handle = None
        return cancelled

    def _handle_result(self, result: StepResult) -> StepResult:
        self.touch()

        cancelled = result.cancelled_effect
        if (
            cancelled is not None
            and self._handle is not None
            and self._handle.generation == cancelled.generation
        ):
            self.cancel_effect()

        started = result.started_effect
        if started is not None:
            payload = build_enqueue_payload(result.session)
            try:
                self._sink.submit(payload)
            except Exception as exc:
                return self._abort_effect(result, exc)
            self._last_enqueue = payload
            self._handle = self._simulator.begin(started, self._on_effect_complete)
            record_effect_outcome("started", started.completion_target)

        return result

    def _abort_effect(self, result: StepResult, exc: Exception) -> StepResult:
        """Sink recusou o payload: libera a sessão na mesma tela."""
        started = result.started_effect
        logger.error(
            "enqueue_submit_failed",
            extra={
                "kiosk_session_id": self._session_id,
                "generation": started.generation,
                "error_type": type(exc).__name__,
            },
        )
        record_effect_outcome("failed", started.completion_target)
        failed = self._machine.fail_effect(started.generation, "enqueue_failed")
        return replace(
            result,
            session=failed.session,
            started_effect=None,
            rejected_reason="enqueue_failed",
        )

    def _on_effect_complete(self, generation: int) -> None:
        result = self._machine.complete_effect(generation)
        if result.accepted:
            record_effect_outcome("completed", result.session.current_screen_id)
            if self._handle is not None and self._handle.generation == generation:
                self._handle = None
            return
        logger.info(
            "effect_completion_ignored",
            extra={
                "kiosk_session_id": self._session_id,
                "generation": generation,
                "reason": result.rejected_reason,
            },
        )
