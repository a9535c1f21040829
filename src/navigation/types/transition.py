"""Registro de transições e resultado de um passo do redutor.

Referência de auditoria: cada troca de tela aplicada gera um
ScreenTransition imutável, seguro para logs (sem valores digitados).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from flowdoc.models import ScreenId

if TYPE_CHECKING:
    from navigation.states.session import PendingEffect, Session
    from navigation.types.effects import Effect


@dataclass(frozen=True, slots=True)
class ScreenTransition:
    """
    Troca de tela aplicada pela máquina de navegação.

    Attributes:
        from_screen: Tela de origem
        to_screen: Tela de destino
        trigger: Gatilho (goto_screen, back, restart, effect_completed, ...)
        metadata: Dados de auditoria (ids apenas, nunca valores digitados)
        timestamp: Momento da transição (UTC)
    """

    from_screen: ScreenId
    to_screen: ScreenId
    trigger: str
    metadata: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(
        default_factory=lambda: datetime.now(UTC)
    )

    def __post_init__(self) -> None:
        """Valida invariantes do objeto após inicialização."""
        if not self.trigger or not self.trigger.strip():
            raise ValueError("trigger não pode ser vazio")

    def to_log_dict(self) -> dict[str, Any]:
        """Representação segura para logs estruturados."""
        return {
            "from_screen": self.from_screen,
            "to_screen": self.to_screen,
            "trigger": self.trigger,
            "timestamp": self.timestamp.isoformat(),
            "metadata": self.metadata,
        }


@dataclass(frozen=True, slots=True)
class StepResult:
    """
    Resultado de aplicar um evento à sessão.

    Attributes:
        session: Nova sessão (igual à anterior quando o evento foi ignorado)
        effect: Efeito resolvido pelo despachante (só para ComponentActivated)
        transition: Troca de tela aplicada, se houve
        rejected_reason: Motivo de o evento ter sido ignorado/bloqueado
        started_effect: Efeito assíncrono que o runtime deve agendar
        cancelled_effect: Efeito assíncrono que o runtime deve cancelar
    """

    session: Session
    effect: Effect | None = None
    transition: ScreenTransition | None = None
    rejected_reason: str | None = None
    started_effect: PendingEffect | None = None
    cancelled_effect: PendingEffect | None = None

    @property
    def accepted(self) -> bool:
        """True se o evento foi aplicado."""
        return self.rejected_reason is None
