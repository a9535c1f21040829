"""
Exports públicos do módulo navigation/effects.

Simulador de efeitos assíncronos com latência fixa.
"""

from navigation.effects.simulator import (
    DEFAULT_EFFECT_LATENCY_SECONDS,
    EffectHandle,
    EffectSimulator,
)

__all__ = [
    "DEFAULT_EFFECT_LATENCY_SECONDS",
    "EffectHandle",
    "EffectSimulator",
]
