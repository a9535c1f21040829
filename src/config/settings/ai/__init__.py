"""Agregador de settings de IA."""

from __future__ import annotations

from config.settings.ai.openai import (
    OpenAISettings,
    get_openai_settings,
)

__all__ = [
    "OpenAISettings",
    "get_openai_settings",
]
