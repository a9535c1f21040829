"""
Exports públicos do módulo navigation/projection.

Projeção de renderização (views) da sessão.
"""

from navigation.projection.render import project_screen, render_session
from navigation.projection.views import (
    ButtonView,
    ErrorView,
    ImageView,
    InputView,
    ProgressView,
    ScreenView,
    SessionView,
    TextBlockView,
)

__all__ = [
    "ButtonView",
    "ErrorView",
    "ImageView",
    "InputView",
    "ProgressView",
    "ScreenView",
    "SessionView",
    "TextBlockView",
    "project_screen",
    "render_session",
]
