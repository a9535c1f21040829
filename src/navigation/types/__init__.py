"""
Exports públicos do módulo navigation/types.

Eventos, efeitos e registros de transição.
"""

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

__all__ = [
    "BackRequested",
    "BeginAsyncEffect",
    "ComponentActivated",
    "Effect",
    "EffectCompleted",
    "EffectFailed",
    "FlowLoaded",
    "InputChanged",
    "Navigate",
    "NavigationEvent",
    "NoOp",
    "ResetFlow",
    "RestartRequested",
    "ScreenTransition",
    "StepResult",
]
