"""Efeitos resolvidos pelo despachante de ações.

Um botão resolve para exatamente um efeito; componentes sem ação
resolvem para NoOp.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from flowdoc.models import ComponentId, ScreenId


@dataclass(frozen=True, slots=True)
class Navigate:
    """Ir para a tela alvo (target pode não existir: vira estado degradado)."""

    target: ScreenId


@dataclass(frozen=True, slots=True)
class ResetFlow:
    """Reiniciar o fluxo."""


@dataclass(frozen=True, slots=True)
class BeginAsyncEffect:
    """Iniciar efeito assíncrono que navega para completion_target ao concluir."""

    completion_target: ScreenId


@dataclass(frozen=True, slots=True)
class NoOp:
    """Nada a fazer.

    Attributes:
        reason: Motivo (ex: not_actionable, effect_in_progress, validation_failed)
        validation_errors: Erros por campo quando a validação bloqueou o avanço
    """

    reason: str
    validation_errors: Mapping[ComponentId, str] = field(default_factory=dict)


Effect = Navigate | ResetFlow | BeginAsyncEffect | NoOp
