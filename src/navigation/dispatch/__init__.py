"""
Exports públicos do módulo navigation/dispatch.

Despachante de ações de componentes.
"""

from navigation.dispatch.dispatcher import dispatch

__all__ = ["dispatch"]
