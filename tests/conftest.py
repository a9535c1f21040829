"""Configuração do pytest para o interpretador de fluxos de quiosque."""

from __future__ import annotations

import copy
import sys
from pathlib import Path
from typing import Any

import pytest

# Adiciona src/ ao PYTHONPATH para permitir imports absolutos
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from flowdoc import Flow, parse_flow  # noqa: E402

CPF_RULE = {"regex": r"^\d{11}$", "message": "CPF deve ter 11 dígitos"}

FLOW_DATA: dict[str, Any] = {
    "flow_id": "test-flow",
    "location_id": "unit-test",
    "start_screen_id": "welcome",
    "theme": {"primary_color": "#0055aa"},
    "screens": {
        "welcome": {
            "id": "welcome",
            "title": "Bem-vindo",
            "subtitle": "Toque para começar",
            "type": "menu",
            "components": [
                {
                    "id": "btn_next",
                    "type": "button",
                    "label": "Check-in",
                    "action": "goto_screen",
                    "target": "form",
                    "primary": True,
                },
                {
                    "id": "btn_info",
                    "type": "button",
                    "label": "Informações",
                    "action": "goto_screen",
                    "target": "info",
                },
            ],
        },
        "form": {
            "id": "form",
            "title": "Identificação",
            "type": "form",
            "components": [
                {
                    "id": "inp_cpf",
                    "type": "input_cpf",
                    "placeholder": "000.000.000-00",
                    "validation": CPF_RULE,
                },
                {"id": "inp_name", "type": "input_text", "placeholder": "Seu nome"},
                {
                    "id": "btn_submit",
                    "type": "button",
                    "label": "Confirmar",
                    "action": "goto_screen",
                    "target": "done",
                    "primary": True,
                },
                {
                    "id": "btn_enqueue",
                    "type": "button",
                    "label": "Retirar senha",
                    "action": "enqueue",
                    "target": "ticket",
                },
            ],
        },
        "info": {
            "id": "info",
            "title": "Informações",
            "type": "info",
            "components": [
                {"id": "txt_hours", "type": "text_block", "value": "Horário: 8h às 18h"},
                {"id": "img_map", "type": "image"},
                {
                    "id": "btn_back_home",
                    "type": "button",
                    "label": "Início",
                    "action": "goto_screen",
                    "target": "welcome",
                },
            ],
        },
        "ticket": {
            "id": "ticket",
            "title": "Senha emitida",
            "type": "success",
            "components": [
                {"id": "btn_restart", "type": "button", "label": "Finalizar", "action": "restart"},
            ],
        },
        "done": {
            "id": "done",
            "title": "Check-in concluído",
            "type": "success",
            "components": [
                {"id": "btn_done", "type": "button", "label": "Finalizar", "action": "restart"},
            ],
        },
    },
}

DANGLING_FLOW_DATA: dict[str, Any] = {
    "flow_id": "dangling-flow",
    "start_screen_id": "welcome",
    "screens": {
        "welcome": {
            "id": "welcome",
            "title": "Bem-vindo",
            "type": "menu",
            "components": [
                {
                    "id": "btn_broken",
                    "type": "button",
                    "label": "Quebrado",
                    "action": "goto_screen",
                    "target": "missing_screen",
                },
                {
                    "id": "btn_broken_enqueue",
                    "type": "button",
                    "label": "Senha",
                    "action": "enqueue",
                    "target": "missing_ticket",
                },
            ],
        },
    },
}


def build_flow_data(**overrides: Any) -> dict[str, Any]:
    """Cópia profunda do fluxo de teste com chaves de topo sobrescritas."""
    data = copy.deepcopy(FLOW_DATA)
    data.update(overrides)
    return data


@pytest.fixture
def flow_data() -> dict[str, Any]:
    return build_flow_data()


@pytest.fixture
def flow() -> Flow:
    return parse_flow(build_flow_data())


@pytest.fixture
def dangling_flow() -> Flow:
    return parse_flow(copy.deepcopy(DANGLING_FLOW_DATA))
