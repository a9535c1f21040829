"""Payload de enqueue e contrato do destino (fila de atendimento).

O quiosque apenas simula o enqueue: o sink padrão registra ids e contagens
em log, sem IO de rede e sem os valores digitados.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from navigation import Session

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class EnqueuePayload:
    """Dados entregues à fila quando um botão de enqueue é acionado.

    Attributes:
        queue_target: Tela de conclusão (identifica a fila)
        flow_id: Fluxo em execução
        location_id: Unidade do quiosque
        inputs: Valores digitados na sessão (id do componente → valor)
        source_component_id: Botão que disparou o enqueue
    """

    queue_target: str
    flow_id: str
    location_id: str | None
    inputs: dict[str, str] = field(default_factory=dict)
    source_component_id: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "queue_target": self.queue_target,
            "flow_id": self.flow_id,
            "location_id": self.location_id,
            "inputs": dict(self.inputs),
            "source_component_id": self.source_component_id,
        }


def build_enqueue_payload(session: Session) -> EnqueuePayload:
    """Monta o payload a partir do efeito pendente da sessão.

    Raises:
        ValueError: Se a sessão não tiver efeito pendente
    """
    pending = session.pending_effect
    if pending is None:
        raise ValueError("sessão sem efeito pendente")
    return EnqueuePayload(
        queue_target=pending.completion_target,
        flow_id=session.flow.flow_id,
        location_id=session.flow.location_id,
        inputs=dict(session.inputs),
        source_component_id=pending.source_component_id,
    )


class EnqueueSinkProtocol(Protocol):
    """Contrato para destinos de enqueue."""

    def submit(self, payload: EnqueuePayload) -> None:
        """Entrega o payload à fila."""
        ...


class LoggingEnqueueSink:
    """Sink padrão: apenas registra o enqueue (ids e contagens)."""

    def submit(self, payload: EnqueuePayload) -> None:
        logger.info(
            "enqueue_submitted",
            extra={
                "queue_target": payload.queue_target,
                "flow_id": payload.flow_id,
                "location_id": payload.location_id,
                "input_count": len(payload.inputs),
                "source_component_id": payload.source_component_id,
            },
        )
