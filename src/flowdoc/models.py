"""Modelo declarativo de fluxo (SDUI) para quiosques.

Define o documento de fluxo consumido pelo interpretador: Flow, Screen e a
união etiquetada de componentes (button, input_text, input_cpf, text_block,
image). O formato de fio é JSON; os nomes de campo seguem o documento
(`type` no JSON vira `kind` no modelo).

Documentos vêm do editor ou do gerador de IA, portanto são tratados como
não confiáveis: a validação estrutural acontece aqui, mas a existência dos
`target` de botões é verificada apenas em tempo de navegação.
"""

from __future__ import annotations

import re
from typing import Annotated, Any, Literal, NewType, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Discriminator,
    Field,
    Tag,
    field_validator,
    model_validator,
)

# Identificadores com significado referencial (chaves, targets)
ScreenId = NewType("ScreenId", str)
ComponentId = NewType("ComponentId", str)

ScreenKind = Literal["menu", "form", "success", "info"]
ActionType = Literal["goto_screen", "enqueue", "restart"]
ComponentKind = Literal["button", "input_text", "input_cpf", "text_block", "image"]

# Ações que exigem target
TARGETED_ACTIONS: frozenset[str] = frozenset({"goto_screen", "enqueue"})

_MODEL_CONFIG = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)


class ValidationRule(BaseModel):
    """Regra de validação de campo (regex + mensagem de falha)."""

    model_config = _MODEL_CONFIG

    regex: str
    message: str

    @field_validator("regex")
    @classmethod
    def validate_regex_compiles(cls, value: str) -> str:
        """Rejeita padrões que não compilam."""
        try:
            re.compile(value)
        except re.error as exc:
            raise ValueError(f"regex inválida: {exc}") from exc
        return value


class ButtonComponent(BaseModel):
    """Botão com ação declarativa."""

    model_config = _MODEL_CONFIG

    id: ComponentId
    kind: Literal["button"] = Field(default="button", alias="type")
    label: str
    action: ActionType
    target: ScreenId | None = None
    primary: bool = False

    @model_validator(mode="after")
    def validate_target_for_action(self) -> ButtonComponent:
        """target é obrigatório para goto_screen e enqueue."""
        if self.action in TARGETED_ACTIONS and not self.target:
            raise ValueError(
                f"botão '{self.id}': target obrigatório para action '{self.action}'"
            )
        return self


class InputTextComponent(BaseModel):
    """Campo de texto livre."""

    model_config = _MODEL_CONFIG

    id: ComponentId
    kind: Literal["input_text"] = Field(default="input_text", alias="type")
    placeholder: str | None = None
    validation: ValidationRule | None = None


class InputCpfComponent(BaseModel):
    """Campo de CPF (teclado numérico no quiosque)."""

    model_config = _MODEL_CONFIG

    id: ComponentId
    kind: Literal["input_cpf"] = Field(default="input_cpf", alias="type")
    placeholder: str | None = None
    validation: ValidationRule | None = None


class TextBlockComponent(BaseModel):
    """Bloco de texto exibido literalmente."""

    model_config = _MODEL_CONFIG

    id: ComponentId
    kind: Literal["text_block"] = Field(default="text_block", alias="type")
    value: str = ""


class ImageComponent(BaseModel):
    """Imagem (o asset é uma referência externa opaca)."""

    model_config = _MODEL_CONFIG

    id: ComponentId
    kind: Literal["image"] = Field(default="image", alias="type")


def _component_kind(value: Any) -> str | None:
    if isinstance(value, dict):
        return value.get("type", value.get("kind"))
    return getattr(value, "kind", None)


Component = Annotated[
    Union[
        Annotated[ButtonComponent, Tag("button")],
        Annotated[InputTextComponent, Tag("input_text")],
        Annotated[InputCpfComponent, Tag("input_cpf")],
        Annotated[TextBlockComponent, Tag("text_block")],
        Annotated[ImageComponent, Tag("image")],
    ],
    Discriminator(_component_kind),
]

InputComponent = InputTextComponent | InputCpfComponent


class Screen(BaseModel):
    """Tela navegável com componentes ordenados."""

    model_config = _MODEL_CONFIG

    id: ScreenId
    title: str
    subtitle: str | None = None
    kind: ScreenKind = Field(alias="type")
    components: tuple[Component, ...] = ()

    @model_validator(mode="after")
    def validate_unique_component_ids(self) -> Screen:
        """Ids de componente são únicos dentro da tela."""
        seen: set[str] = set()
        for component in self.components:
            if component.id in seen:
                raise ValueError(
                    f"tela '{self.id}': componente duplicado '{component.id}'"
                )
            seen.add(component.id)
        return self

    def find_component(self, component_id: str) -> Component | None:
        """Retorna o componente pelo id (None se ausente)."""
        for component in self.components:
            if component.id == component_id:
                return component
        return None

    def input_components(self) -> tuple[InputComponent, ...]:
        """Componentes de entrada da tela, na ordem declarada."""
        return tuple(
            c
            for c in self.components
            if isinstance(c, (InputTextComponent, InputCpfComponent))
        )


class Flow(BaseModel):
    """Documento raiz de um fluxo de quiosque.

    Invariantes verificadas na carga:
        - start_screen_id existe em screens
        - cada tela tem id igual à sua chave no mapa

    Attributes:
        flow_id: Identidade do fluxo (mudança força reinício da sessão)
        location_id: Unidade/local do quiosque
        start_screen_id: Tela inicial
        theme: Estilo opaco, repassado sem exame
        screens: Mapa id → Screen
    """

    model_config = _MODEL_CONFIG

    flow_id: str
    location_id: str | None = None
    start_screen_id: ScreenId
    theme: dict[str, Any] | None = None
    screens: dict[ScreenId, Screen]

    @model_validator(mode="after")
    def validate_screen_graph(self) -> Flow:
        """Checa ponto de entrada e redundância chave/id."""
        if self.start_screen_id not in self.screens:
            raise ValueError(
                f"start_screen_id '{self.start_screen_id}' não existe em screens"
            )
        for key, screen in self.screens.items():
            if screen.id != key:
                raise ValueError(
                    f"tela sob a chave '{key}' declara id '{screen.id}'"
                )
        return self

    def screen_count(self) -> int:
        """Quantidade de telas do fluxo."""
        return len(self.screens)

    def entry_point(self) -> ScreenId:
        """Tela inicial do fluxo."""
        return self.start_screen_id

    def get_screen(self, screen_id: str) -> Screen | None:
        """Retorna a tela pelo id (None se ausente)."""
        return self.screens.get(ScreenId(screen_id))

    def has_screen(self, screen_id: str) -> bool:
        """Verifica se a tela existe."""
        return screen_id in self.screens

    def dangling_targets(self) -> list[tuple[ScreenId, ComponentId, ScreenId]]:
        """Lista (tela, botão, target) cujos targets não existem.

        Diagnóstico para o editor; não bloqueia a carga.
        """
        dangling: list[tuple[ScreenId, ComponentId, ScreenId]] = []
        for screen in self.screens.values():
            for component in screen.components:
                if (
                    isinstance(component, ButtonComponent)
                    and component.action in TARGETED_ACTIONS
                    and component.target is not None
                    and component.target not in self.screens
                ):
                    dangling.append((screen.id, component.id, component.target))
        return dangling
