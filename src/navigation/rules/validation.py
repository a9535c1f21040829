"""Validador de campos de formulário.

Aplica as regras (regex + mensagem) dos componentes de entrada de uma
tela do tipo `form`. Telas de outros tipos nunca são validadas: a
validação só bloqueia o avanço a partir de formulários.

Puro e sem efeitos colaterais; reexecutado a cada tentativa de avanço.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from functools import lru_cache

from flowdoc.models import ComponentId, Screen, ValidationRule

FORM_SCREEN_KIND = "form"


def validate_screen(
    screen: Screen,
    inputs: Mapping[ComponentId, str],
) -> dict[ComponentId, str]:
    """
    Valida os campos da tela contra os valores digitados.

    Valor ausente é avaliado como string vazia (ausência só falha se a
    regex não aceitar vazio).

    Args:
        screen: Tela de onde o usuário tenta avançar
        inputs: Valores por componente (escopo do fluxo)

    Returns:
        Mapa componente → mensagem (vazio = válido)
    """
    if screen.kind != FORM_SCREEN_KIND:
        return {}

    errors: dict[ComponentId, str] = {}
    for component in screen.input_components():
        rule = component.validation
        if rule is None:
            continue
        value = inputs.get(component.id, "")
        if not rule_accepts(rule, value):
            errors[component.id] = rule.message
    return errors


def rule_accepts(rule: ValidationRule, value: str) -> bool:
    """Testa o valor contra a regra.

    A regra é um predicado (re.search); ancoragem fica a cargo do autor.
    """
    return _compile(rule.regex).search(value) is not None


@lru_cache(maxsize=256)
def _compile(pattern: str) -> re.Pattern[str]:
    return re.compile(pattern)
