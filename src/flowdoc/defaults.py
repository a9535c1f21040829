"""Fluxo padrão (conhecido-válido) do quiosque.

Carregado de `assets/default_flow.yaml`. É o documento inicial de novas
sessões e o fallback garantido quando o gerador de IA falha.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

import yaml

from flowdoc.errors import DocumentInvalidError
from flowdoc.models import Flow
from flowdoc.parser import parse_flow

_ASSETS_DIR = Path(__file__).resolve().parent / "assets"
DEFAULT_FLOW_FILE = "default_flow.yaml"


@lru_cache(maxsize=1)
def load_default_flow() -> Flow:
    """Retorna o fluxo padrão (cacheado; Flow é imutável)."""
    path = _ASSETS_DIR / DEFAULT_FLOW_FILE
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:  # pragma: no cover
        raise DocumentInvalidError(f"YAML inválido em {DEFAULT_FLOW_FILE}: {exc}") from exc
    if not isinstance(data, dict):
        raise DocumentInvalidError(f"{DEFAULT_FLOW_FILE} deve conter um objeto")
    return parse_flow(data)
