"""
Exports públicos do módulo navigation/manager.

Redutor de navegação e NavigationMachine.
"""

from navigation.manager.machine import (
    NavigationMachine,
    create_machine,
    reduce,
)

__all__ = [
    "NavigationMachine",
    "create_machine",
    "reduce",
]
