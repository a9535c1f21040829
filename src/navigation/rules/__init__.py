"""
Exports públicos do módulo navigation/rules.

Validação de campos e guards de eventos.
"""

from navigation.rules.guards import (
    BACK_GUARDS,
    DISPATCH_GUARDS,
    INPUT_GUARDS,
    GuardResult,
    evaluate_guards,
    guard_effect_idle,
    guard_history_not_empty,
    guard_not_degraded,
)
from navigation.rules.validation import rule_accepts, validate_screen

__all__ = [
    "BACK_GUARDS",
    "DISPATCH_GUARDS",
    "INPUT_GUARDS",
    "GuardResult",
    "evaluate_guards",
    "guard_effect_idle",
    "guard_history_not_empty",
    "guard_not_degraded",
    "rule_accepts",
    "validate_screen",
]
