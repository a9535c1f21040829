"""Regras determinísticas do módulo de IA."""

from ai.rules.fallbacks import fallback_flow

__all__ = [
    "fallback_flow",
]
