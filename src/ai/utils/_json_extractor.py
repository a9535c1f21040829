"""Extrator de JSON de respostas de LLM.

Extrai JSON de respostas brutas que podem conter markdown ou texto adicional.
Documentos de fluxo são aninhados (screens → components), então a busca no
texto usa o decoder do json a partir de cada `{` em vez de regex.
"""

from __future__ import annotations

import json
from typing import Any

_DECODER = json.JSONDecoder()


def extract_json_from_response(response: str) -> dict[str, Any] | None:
    """Extrai e valida JSON de resposta de LLM.

    Trata casos comuns:
    - Resposta envolvida em markdown code blocks
    - Whitespace extra
    - JSON embutido em texto

    Args:
        response: Resposta bruta da LLM

    Returns:
        Dict extraído do JSON ou None se não encontrado
    """
    if not response or not isinstance(response, str):
        return None

    text = _strip_code_fence(response.strip())

    # Tentar parsear JSON direto
    try:
        data = json.loads(text)
        if isinstance(data, dict):
            return data
    except json.JSONDecodeError:
        pass

    # Primeiro objeto decodificável dentro do texto
    start = text.find("{")
    while start != -1:
        try:
            data, _ = _DECODER.raw_decode(text, start)
        except json.JSONDecodeError:
            start = text.find("{", start + 1)
            continue
        if isinstance(data, dict):
            return data
        start = text.find("{", start + 1)

    return None


def _strip_code_fence(text: str) -> str:
    if text.startswith("```json"):
        text = text[7:]
    elif text.startswith("```"):
        text = text[3:]

    if text.endswith("```"):
        text = text[:-3]

    return text.strip()
