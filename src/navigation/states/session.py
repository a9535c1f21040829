"""Estado de navegação de uma sessão de quiosque.

Session é um valor imutável e serializável; só o redutor
(navigation.manager.machine.reduce) produz novas versões dele.

Ciclo de vida: criada quando um Flow é carregado, zerada em restart e em
troca de identidade do fluxo (flow_id), descartada ao fim da sessão.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum
from typing import Any

from flowdoc.models import ComponentId, Flow, Screen, ScreenId
from flowdoc.parser import flow_to_dict, parse_flow


class SessionStatus(StrEnum):
    """Status derivado da sessão.

    - ACTIVE: tela atual existe, nenhum efeito em andamento
    - EFFECT_PENDING: efeito assíncrono em andamento (dispatch suspenso)
    - DEGRADED: target inexistente; única recuperação é restart
    """

    ACTIVE = "ACTIVE"
    EFFECT_PENDING = "EFFECT_PENDING"
    DEGRADED = "DEGRADED"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class PendingEffect:
    """Efeito assíncrono em voo (ex: impressão de senha).

    Attributes:
        generation: Versão do efeito; conclusões de outra versão são descartadas
        completion_target: Tela para onde navegar ao concluir
        source_component_id: Botão que disparou o efeito
        started_at: Momento de início (UTC)
    """

    generation: int
    completion_target: ScreenId
    source_component_id: ComponentId
    started_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def to_dict(self) -> dict[str, Any]:
        """Serializa para persistência."""
        return {
            "generation": self.generation,
            "completion_target": self.completion_target,
            "source_component_id": self.source_component_id,
            "started_at": self.started_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PendingEffect:
        """Deserializa de persistência."""
        return cls(
            generation=int(data["generation"]),
            completion_target=ScreenId(data["completion_target"]),
            source_component_id=ComponentId(data.get("source_component_id", "")),
            started_at=(
                datetime.fromisoformat(data["started_at"])
                if "started_at" in data
                else datetime.now(UTC)
            ),
        )


@dataclass(frozen=True, slots=True)
class Session:
    """Estado de navegação de uma travessia do fluxo.

    Attributes:
        flow: Documento ativo (imutável durante a sessão)
        current_screen_id: Tela atual
        history: Pilha de telas visitadas (mais recente por último)
        inputs: Valores digitados por componente (escopo do fluxo)
        validation_errors: Mensagens por componente (escopo da tela atual)
        pending_effect: Efeito em andamento, se houver
        dangling_target: Target inexistente que levou ao estado degradado
        effect_generation: Contador monotônico de efeitos iniciados
    """

    flow: Flow
    current_screen_id: ScreenId
    history: tuple[ScreenId, ...] = ()
    inputs: Mapping[ComponentId, str] = field(default_factory=dict)
    validation_errors: Mapping[ComponentId, str] = field(default_factory=dict)
    pending_effect: PendingEffect | None = None
    dangling_target: ScreenId | None = None
    effect_generation: int = 0

    @property
    def status(self) -> SessionStatus:
        """Status derivado (degradado tem precedência)."""
        if self.dangling_target is not None:
            return SessionStatus.DEGRADED
        if self.pending_effect is not None:
            return SessionStatus.EFFECT_PENDING
        return SessionStatus.ACTIVE

    @property
    def is_degraded(self) -> bool:
        return self.dangling_target is not None

    @property
    def effect_in_progress(self) -> bool:
        return self.pending_effect is not None

    @property
    def can_go_back(self) -> bool:
        """Voltar só existe com histórico e sessão ociosa."""
        return bool(self.history) and self.status == SessionStatus.ACTIVE

    @property
    def current_screen(self) -> Screen | None:
        """Tela atual (None quando degradada)."""
        return self.flow.get_screen(self.current_screen_id)

    def to_dict(self) -> dict[str, Any]:
        """Serializa sessão completa (inclui o documento)."""
        return {
            "flow": flow_to_dict(self.flow),
            "current_screen_id": self.current_screen_id,
            "history": list(self.history),
            "inputs": dict(self.inputs),
            "validation_errors": dict(self.validation_errors),
            "pending_effect": (
                self.pending_effect.to_dict() if self.pending_effect else None
            ),
            "dangling_target": self.dangling_target,
            "effect_generation": self.effect_generation,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Session:
        """Deserializa sessão (o documento é revalidado)."""
        pending = data.get("pending_effect")
        return cls(
            flow=parse_flow(data["flow"]),
            current_screen_id=ScreenId(data["current_screen_id"]),
            history=tuple(ScreenId(s) for s in data.get("history", [])),
            inputs={ComponentId(k): str(v) for k, v in data.get("inputs", {}).items()},
            validation_errors={
                ComponentId(k): str(v)
                for k, v in data.get("validation_errors", {}).items()
            },
            pending_effect=PendingEffect.from_dict(pending) if pending else None,
            dangling_target=data.get("dangling_target"),
            effect_generation=int(data.get("effect_generation", 0)),
        )


def new_session(flow: Flow, *, effect_generation: int = 0) -> Session:
    """Cria sessão no estado inicial do fluxo.

    Args:
        flow: Documento já validado
        effect_generation: Contador herdado (para descartar conclusões antigas)

    Returns:
        Session na tela inicial, sem histórico, entradas ou erros
    """
    return Session(
        flow=flow,
        current_screen_id=flow.start_screen_id,
        effect_generation=effect_generation,
    )
