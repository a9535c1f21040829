"""Assets de prompt versionados (YAML em `src/ai/prompts/yaml/`).

Cada asset traz `system_prompt` e `template`; ambos são obrigatórios e
checados juntos na carga, para que um arquivo quebrado seja detectado
pelo /ready antes da primeira geração.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

import yaml

_PROMPTS_YAML_DIR = Path(__file__).resolve().parents[1] / "prompts" / "yaml"

_REQUIRED_FIELDS: tuple[str, ...] = ("system_prompt", "template")


class PromptAssetError(RuntimeError):
    """Asset de prompt ausente ou malformado."""


@dataclass(frozen=True, slots=True)
class PromptAsset:
    """Par instrução de sistema + template da mensagem do operador."""

    name: str
    system_prompt: str
    template: str

    def render(self, **fields: str) -> str:
        """Preenche o template; placeholder desconhecido levanta KeyError."""
        return self.template.format(**fields).strip()


def _resolve_asset_path(name: str) -> Path:
    if not name:
        raise PromptAssetError("nome do asset vazio")
    rel = Path(name)
    if rel.is_absolute() or name.startswith(("/", "\\")):
        raise PromptAssetError(f"asset deve ser relativo: {name}")
    if ".." in rel.parts:
        raise PromptAssetError(f"asset fora do diretório de prompts: {name}")
    return _PROMPTS_YAML_DIR / rel


@lru_cache(maxsize=8)
def load_prompt_asset(name: str) -> PromptAsset:
    """Carrega e valida um asset de prompt (cacheado por nome).

    Raises:
        PromptAssetError: Arquivo ausente, YAML inválido ou campo faltando
    """
    path = _resolve_asset_path(name)
    if not path.is_file():
        raise PromptAssetError(f"asset de prompt não encontrado: {name}")

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise PromptAssetError(f"YAML inválido em {name}: {exc}") from exc

    if not isinstance(data, dict):
        raise PromptAssetError(f"asset {name} deve ser um mapeamento")

    missing = [
        field
        for field in _REQUIRED_FIELDS
        if not isinstance(data.get(field), str) or not data[field].strip()
    ]
    if missing:
        raise PromptAssetError(f"asset {name} sem {', '.join(missing)}")

    return PromptAsset(
        name=name,
        system_prompt=data["system_prompt"].strip(),
        template=data["template"],
    )


def clear_prompt_assets_cache() -> None:
    """Descarta assets cacheados (edição de YAML em desenvolvimento)."""
    load_prompt_asset.cache_clear()
