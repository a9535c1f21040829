"""Parse e serialização do documento de fluxo.

Contrato do editor: `parse_flow(raw)` devolve um Flow válido ou levanta
DocumentInvalidError com mensagem pronta para exibição inline.

Checagens de carga:
    - JSON bem formado e objeto no topo
    - presença de flow_id, start_screen_id e screens
    - start_screen_id ∈ screens (e forma de telas/componentes)

Targets de botões NÃO são verificados aqui (ver Flow.dangling_targets).
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from flowdoc.errors import DocumentInvalidError
from flowdoc.models import Flow

REQUIRED_TOP_LEVEL_KEYS: tuple[str, ...] = ("flow_id", "start_screen_id", "screens")


def parse_flow(raw: str | bytes | Mapping[str, Any]) -> Flow:
    """Converte texto JSON (ou dict já decodificado) em Flow.

    Args:
        raw: Texto do editor, bytes de request ou dict vindo da IA

    Returns:
        Flow validado

    Raises:
        DocumentInvalidError: Se o documento falhar em qualquer checagem
    """
    data = _decode(raw)

    missing = [key for key in REQUIRED_TOP_LEVEL_KEYS if key not in data]
    if missing:
        raise DocumentInvalidError(
            "Campos obrigatórios ausentes: " + ", ".join(f"'{k}'" for k in missing)
        )
    if not isinstance(data["screens"], Mapping):
        raise DocumentInvalidError("'screens' deve ser um objeto id → tela")

    try:
        return Flow.model_validate(data)
    except ValidationError as exc:
        raise DocumentInvalidError(_format_validation_error(exc)) from exc


def flow_to_dict(flow: Flow) -> dict[str, Any]:
    """Serializa Flow para dict no formato de fio (chaves `type`)."""
    return flow.model_dump(mode="json", by_alias=True)


def serialize_flow(flow: Flow, *, indent: int | None = 2) -> str:
    """Serializa Flow para JSON (sem perda de campos)."""
    return json.dumps(flow_to_dict(flow), ensure_ascii=False, indent=indent)


def describe_flow(flow: Flow) -> dict[str, Any]:
    """Resumo do fluxo para o painel do editor."""
    return {
        "flow_id": flow.flow_id,
        "location_id": flow.location_id,
        "screen_count": flow.screen_count(),
        "entry_point": flow.entry_point(),
        "dangling_targets": [
            {"screen_id": screen_id, "component_id": component_id, "target": target}
            for screen_id, component_id, target in flow.dangling_targets()
        ],
    }


def _decode(raw: str | bytes | Mapping[str, Any]) -> Mapping[str, Any]:
    if isinstance(raw, Mapping):
        return raw

    if isinstance(raw, bytes):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise DocumentInvalidError("Documento não está em UTF-8") from exc

    if not isinstance(raw, str) or not raw.strip():
        raise DocumentInvalidError("Documento vazio")

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise DocumentInvalidError(
            f"JSON inválido: {exc.msg} (linha {exc.lineno}, coluna {exc.colno})"
        ) from exc
    except RecursionError as exc:
        raise DocumentInvalidError("JSON inválido: aninhamento excessivo") from exc

    if not isinstance(data, dict):
        raise DocumentInvalidError("O documento deve ser um objeto JSON")
    return data


def _format_validation_error(exc: ValidationError) -> str:
    parts: list[str] = []
    for error in exc.errors(include_url=False):
        location = ".".join(str(item) for item in error.get("loc", ()))
        message = error.get("msg", "valor inválido")
        parts.append(f"{location}: {message}" if location else message)
    return "; ".join(parts) or "Documento inválido"
