"""Descrições renderizáveis de tela (independentes de toolkit)."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict

_VIEW_CONFIG = ConfigDict(frozen=True)


class ButtonView(BaseModel):
    model_config = _VIEW_CONFIG

    kind: Literal["button"] = "button"
    id: str
    label: str
    primary: bool = False
    enabled: bool = True


class InputView(BaseModel):
    """Campo de entrada com valor atual e erro inline."""

    model_config = _VIEW_CONFIG

    kind: Literal["input"] = "input"
    id: str
    input_type: Literal["text", "cpf"]
    input_mode: Literal["text", "tel"]
    label: str
    placeholder: str | None = None
    value: str = ""
    error: str | None = None


class TextBlockView(BaseModel):
    model_config = _VIEW_CONFIG

    kind: Literal["text_block"] = "text_block"
    id: str
    value: str


class ImageView(BaseModel):
    model_config = _VIEW_CONFIG

    kind: Literal["image"] = "image"
    id: str


ComponentView = ButtonView | InputView | TextBlockView | ImageView


class ScreenView(BaseModel):
    """Tela pronta para renderização."""

    model_config = _VIEW_CONFIG

    view: Literal["screen"] = "screen"
    screen_id: str
    title: str
    subtitle: str | None = None
    screen_kind: str
    show_success_badge: bool = False
    can_go_back: bool = False
    components: tuple[ComponentView, ...] = ()


class ErrorView(BaseModel):
    """Tela de erro de configuração com uma única ação de recuperação."""

    model_config = _VIEW_CONFIG

    view: Literal["error"] = "error"
    missing_screen_id: str
    title: str = "Erro de configuração"
    message: str
    recovery_action: Literal["restart"] = "restart"


class ProgressView(BaseModel):
    """Indicador de progresso indeterminado (efeito em andamento)."""

    model_config = _VIEW_CONFIG

    view: Literal["progress"] = "progress"
    message: str = "Processando..."
    completion_target: str


class SessionView(BaseModel):
    """Projeção completa da sessão para a camada de apresentação."""

    model_config = _VIEW_CONFIG

    flow_id: str
    status: str
    screen: ScreenView | ErrorView
    progress: ProgressView | None = None
