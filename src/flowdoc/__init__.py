"""
Módulo flowdoc — documento declarativo de fluxo (SDUI).

Estrutura:
    - models.py: Flow, Screen e união de componentes
    - parser.py: parse_flow / serialize_flow / describe_flow
    - defaults.py: fluxo padrão conhecido-válido
    - errors.py: DocumentInvalidError
"""

from flowdoc.defaults import load_default_flow
from flowdoc.errors import DocumentInvalidError, FlowDocumentError
from flowdoc.models import (
    ActionType,
    ButtonComponent,
    Component,
    ComponentId,
    Flow,
    ImageComponent,
    InputCpfComponent,
    InputTextComponent,
    Screen,
    ScreenId,
    ScreenKind,
    TextBlockComponent,
    ValidationRule,
)
from flowdoc.parser import describe_flow, flow_to_dict, parse_flow, serialize_flow

__all__ = [
    "ActionType",
    "ButtonComponent",
    "Component",
    "ComponentId",
    "DocumentInvalidError",
    "Flow",
    "FlowDocumentError",
    "ImageComponent",
    "InputCpfComponent",
    "InputTextComponent",
    "Screen",
    "ScreenId",
    "ScreenKind",
    "TextBlockComponent",
    "ValidationRule",
    "describe_flow",
    "flow_to_dict",
    "load_default_flow",
    "parse_flow",
    "serialize_flow",
]
