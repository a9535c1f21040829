"""Simulador de efeitos assíncronos (ex: impressão de senha, enqueue remoto).

Cada efeito é uma task asyncio que espera uma latência fixa e então
entrega a conclusão (com a geração do efeito) ao callback. Cancelar a
task impede a conclusão; se a conclusão já tiver escapado, a sessão a
descarta pela geração.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from flowdoc.models import ScreenId

if TYPE_CHECKING:
    from collections.abc import Callable

    from navigation.states.session import PendingEffect

logger = logging.getLogger(__name__)

DEFAULT_EFFECT_LATENCY_SECONDS = 2.0


@dataclass(slots=True)
class EffectHandle:
    """Handle de um efeito agendado."""

    generation: int
    completion_target: ScreenId
    task: asyncio.Task[None]

    @property
    def done(self) -> bool:
        return self.task.done()

    def cancel(self) -> bool:
        """Cancela o efeito; retorna False se já concluído."""
        return self.task.cancel()


class EffectSimulator:
    """Agenda conclusões de efeitos após uma latência fixa."""

    def __init__(self, latency_seconds: float = DEFAULT_EFFECT_LATENCY_SECONDS) -> None:
        if latency_seconds < 0:
            raise ValueError("latency_seconds deve ser >= 0")
        self._latency_seconds = latency_seconds
        self._active_tasks: set[asyncio.Task[Any]] = set()

    @property
    def latency_seconds(self) -> float:
        return self._latency_seconds

    @property
    def active_count(self) -> int:
        """Quantidade de efeitos ainda em voo."""
        return len(self._active_tasks)

    def begin(
        self,
        pending: PendingEffect,
        on_complete: Callable[[int], None],
    ) -> EffectHandle:
        """Agenda a conclusão do efeito.

        Deve ser chamado dentro de um event loop em execução.

        Args:
            pending: Efeito registrado na sessão
            on_complete: Recebe a geração do efeito ao concluir

        Returns:
            EffectHandle para cancelamento
        """
        loop = asyncio.get_running_loop()
        task = loop.create_task(self._run(pending.generation, on_complete))
        self._active_tasks.add(task)
        task.add_done_callback(self._on_task_done)
        logger.debug(
            "effect_scheduled",
            extra={
                "generation": pending.generation,
                "latency_seconds": self._latency_seconds,
                "active_effects": len(self._active_tasks),
            },
        )
        return EffectHandle(
            generation=pending.generation,
            completion_target=pending.completion_target,
            task=task,
        )

    async def _run(self, generation: int, on_complete: Callable[[int], None]) -> None:
        await asyncio.sleep(self._latency_seconds)
        on_complete(generation)

    def _on_task_done(self, task: asyncio.Task[Any]) -> None:
        self._active_tasks.discard(task)
        with contextlib.suppress(asyncio.CancelledError):
            exc = task.exception()
            if exc is not None:
                logger.error(
                    "effect_task_failed",
                    extra={
                        "error_type": type(exc).__name__,
                        "active_effects": len(self._active_tasks),
                    },
                )

    async def drain(self, timeout_seconds: float = 5.0) -> None:
        """Aguarda efeitos pendentes no shutdown; cancela o que sobrar."""
        if not self._active_tasks:
            return

        pending_now = list(self._active_tasks)
        logger.info(
            "effect_shutdown_wait",
            extra={"pending_effects": len(pending_now), "timeout_seconds": timeout_seconds},
        )
        _, pending = await asyncio.wait(pending_now, timeout=timeout_seconds)
        if not pending:
            return

        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)
        logger.warning(
            "effect_shutdown_cancelled",
            extra={"cancelled_effects": len(pending)},
        )
