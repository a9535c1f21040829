"""Eventos de entrada do redutor de navegação.

Cada interação do usuário (ou do runtime) vira um evento imutável;
o redutor decide o novo valor de Session a partir dele.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from flowdoc.models import ComponentId, Flow


@dataclass(frozen=True, slots=True)
class InputChanged:
    """Usuário alterou o valor de um campo."""

    TRIGGER: ClassVar[str] = "input_changed"

    component_id: ComponentId
    value: str


@dataclass(frozen=True, slots=True)
class ComponentActivated:
    """Usuário acionou um componente da tela atual."""

    TRIGGER: ClassVar[str] = "component_activated"

    component_id: ComponentId


@dataclass(frozen=True, slots=True)
class BackRequested:
    """Voltar para a tela anterior."""

    TRIGGER: ClassVar[str] = "back"


@dataclass(frozen=True, slots=True)
class RestartRequested:
    """Reinício explícito da sessão (aceito em qualquer estado)."""

    TRIGGER: ClassVar[str] = "restart"


@dataclass(frozen=True, slots=True)
class EffectCompleted:
    """Conclusão do efeito assíncrono da geração informada."""

    TRIGGER: ClassVar[str] = "effect_completed"

    generation: int


@dataclass(frozen=True, slots=True)
class EffectFailed:
    """Efeito da geração informada não pôde ser entregue; sessão volta a ACTIVE."""

    TRIGGER: ClassVar[str] = "effect_failed"

    generation: int
    reason: str


@dataclass(frozen=True, slots=True)
class FlowLoaded:
    """Novo documento carregado (editor ou gerador)."""

    TRIGGER: ClassVar[str] = "flow_loaded"

    flow: Flow


NavigationEvent = (
    InputChanged
    | ComponentActivated
    | BackRequested
    | RestartRequested
    | EffectCompleted
    | EffectFailed
    | FlowLoaded
)
