"""Agregador de settings do serviço de quiosque.

Re-exporta todas as settings e funções de cada módulo.
"""

from __future__ import annotations

from config.settings.ai import (
    OpenAISettings,
    get_openai_settings,
)
from config.settings.base import (
    BaseSettings,
    Environment,
    get_base_settings,
)
from config.settings.kiosk import (
    KioskSettings,
    get_kiosk_settings,
)

__all__ = [
    "BaseSettings",
    "Environment",
    "KioskSettings",
    "OpenAISettings",
    "get_base_settings",
    "get_kiosk_settings",
    "get_openai_settings",
]
