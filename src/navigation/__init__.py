"""
Módulo navigation — interpretador de fluxos SDUI.

Implementa a máquina de navegação determinística que percorre um Flow:
sessão imutável + redutor puro, validação de campos, despacho de ações
e simulação de efeitos assíncronos.

Estrutura:
    - states/: Session, PendingEffect, SessionStatus
    - types/: eventos, efeitos, ScreenTransition, StepResult
    - rules/: validador de campos e guards
    - dispatch/: despachante de ações de botões
    - manager/: redutor e NavigationMachine
    - effects/: EffectSimulator (latência fixa, cancelável)
    - projection/: views renderizáveis
"""

from navigation.dispatch import dispatch
from navigation.effects import DEFAULT_EFFECT_LATENCY_SECONDS, EffectHandle, EffectSimulator
from navigation.manager import NavigationMachine, create_machine, reduce
from navigation.projection import (
    ErrorView,
    ProgressView,
    ScreenView,
    SessionView,
    project_screen,
    render_session,
)
from navigation.rules import GuardResult, evaluate_guards, validate_screen
from navigation.states import PendingEffect, Session, SessionStatus, new_session
from navigation.types import (
    BackRequested,
    BeginAsyncEffect,
    ComponentActivated,
    Effect,
    EffectCompleted,
    EffectFailed,
    FlowLoaded,
    InputChanged,
    Navigate,
    NavigationEvent,
    NoOp,
    ResetFlow,
    RestartRequested,
    ScreenTransition,
    StepResult,
)

__all__ = [
    "DEFAULT_EFFECT_LATENCY_SECONDS",
    "BackRequested",
    "BeginAsyncEffect",
    "ComponentActivated",
    "Effect",
    "EffectCompleted",
    "EffectFailed",
    "EffectHandle",
    "EffectSimulator",
    "ErrorView",
    "FlowLoaded",
    "GuardResult",
    "InputChanged",
    "Navigate",
    "NavigationEvent",
    "NavigationMachine",
    "NoOp",
    "PendingEffect",
    "ProgressView",
    "ResetFlow",
    "RestartRequested",
    "ScreenTransition",
    "ScreenView",
    "Session",
    "SessionStatus",
    "SessionView",
    "StepResult",
    "create_machine",
    "dispatch",
    "evaluate_guards",
    "new_session",
    "project_screen",
    "reduce",
    "render_session",
    "validate_screen",
]
