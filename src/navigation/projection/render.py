"""Projeção de renderização: estado → descrição de tela.

Funções puras; a camada de apresentação só consome as views.
"""

from __future__ import annotations

from collections.abc import Mapping

from flowdoc.models import (
    ButtonComponent,
    Component,
    ComponentId,
    Flow,
    ImageComponent,
    InputCpfComponent,
    InputTextComponent,
    TextBlockComponent,
)
from navigation.projection.views import (
    ButtonView,
    ComponentView,
    ErrorView,
    ImageView,
    InputView,
    ProgressView,
    ScreenView,
    SessionView,
    TextBlockView,
)
from navigation.states.session import Session

SUCCESS_SCREEN_KIND = "success"


def project_screen(
    flow: Flow,
    current_screen_id: str,
    inputs: Mapping[ComponentId, str],
    errors: Mapping[ComponentId, str],
    *,
    can_go_back: bool = False,
    interactive: bool = True,
) -> ScreenView | ErrorView:
    """
    Deriva a descrição da tela atual.

    Args:
        flow: Documento ativo
        current_screen_id: Tela atual (pode não existir no fluxo)
        inputs: Valores digitados por componente
        errors: Erros de validação por componente
        can_go_back: Exibe affordance de voltar
        interactive: False desabilita botões (efeito em andamento)

    Returns:
        ScreenView, ou ErrorView quando a tela não existe
    """
    screen = flow.get_screen(current_screen_id)
    if screen is None:
        return ErrorView(
            missing_screen_id=current_screen_id,
            message=f'Tela "{current_screen_id}" não encontrada no fluxo.',
        )

    return ScreenView(
        screen_id=screen.id,
        title=screen.title,
        subtitle=screen.subtitle,
        screen_kind=screen.kind,
        show_success_badge=screen.kind == SUCCESS_SCREEN_KIND,
        can_go_back=can_go_back,
        components=tuple(
            _project_component(c, inputs, errors, interactive) for c in screen.components
        ),
    )


def render_session(session: Session) -> SessionView:
    """Projeção da sessão inteira, com indicador de progresso se houver efeito."""
    pending = session.pending_effect
    screen_view = project_screen(
        session.flow,
        session.current_screen_id,
        session.inputs,
        session.validation_errors,
        can_go_back=session.can_go_back,
        interactive=pending is None,
    )
    progress = (
        ProgressView(completion_target=pending.completion_target)
        if pending is not None
        else None
    )
    return SessionView(
        flow_id=session.flow.flow_id,
        status=session.status.value,
        screen=screen_view,
        progress=progress,
    )


def _project_component(
    component: Component,
    inputs: Mapping[ComponentId, str],
    errors: Mapping[ComponentId, str],
    interactive: bool,
) -> ComponentView:
    if isinstance(component, ButtonComponent):
        return ButtonView(
            id=component.id,
            label=component.label,
            primary=component.primary,
            enabled=interactive,
        )
    if isinstance(component, InputCpfComponent):
        return InputView(
            id=component.id,
            input_type="cpf",
            input_mode="tel",
            label="CPF",
            placeholder=component.placeholder,
            value=inputs.get(component.id, ""),
            error=errors.get(component.id),
        )
    if isinstance(component, InputTextComponent):
        return InputView(
            id=component.id,
            input_type="text",
            input_mode="text",
            label="Input",
            placeholder=component.placeholder,
            value=inputs.get(component.id, ""),
            error=errors.get(component.id),
        )
    if isinstance(component, TextBlockComponent):
        return TextBlockView(id=component.id, value=component.value)
    if isinstance(component, ImageComponent):
        return ImageView(id=component.id)
    raise TypeError(f"Componente desconhecido: {type(component).__name__}")
