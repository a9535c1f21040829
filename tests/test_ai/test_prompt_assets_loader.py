"""Testes do loader de assets de prompt."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest

from ai.config import prompt_assets_loader as loader
from ai.prompts import FLOW_GENERATOR_PROMPT_FILE, build_flow_prompts


@pytest.fixture
def patched_prompts_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Path]:
    prompts_dir = tmp_path / "prompts_yaml"
    prompts_dir.mkdir()
    monkeypatch.setattr(loader, "_PROMPTS_YAML_DIR", prompts_dir)
    loader.clear_prompt_assets_cache()
    yield prompts_dir
    loader.clear_prompt_assets_cache()


@pytest.mark.parametrize(
    ("name", "message"),
    [
        ("", "vazio"),
        ("/abs.yaml", "deve ser relativo"),
        ("../segredo.yaml", "fora do diretório"),
    ],
)
def test_unsafe_asset_names_are_rejected(name: str, message: str) -> None:
    with pytest.raises(loader.PromptAssetError, match=message):
        loader.load_prompt_asset(name)


def test_malformed_assets_are_rejected(patched_prompts_dir: Path) -> None:
    (patched_prompts_dir / "lista.yaml").write_text("- a\n- b\n", encoding="utf-8")
    (patched_prompts_dir / "sem_template.yaml").write_text("system_prompt: x\n", encoding="utf-8")
    (patched_prompts_dir / "quebrado.yaml").write_text("system_prompt: [\n", encoding="utf-8")
    (patched_prompts_dir / "pasta").mkdir()

    with pytest.raises(loader.PromptAssetError, match="não encontrado"):
        loader.load_prompt_asset("ausente.yaml")
    with pytest.raises(loader.PromptAssetError, match="não encontrado"):
        loader.load_prompt_asset("pasta")
    with pytest.raises(loader.PromptAssetError, match="mapeamento"):
        loader.load_prompt_asset("lista.yaml")
    with pytest.raises(loader.PromptAssetError, match="sem template"):
        loader.load_prompt_asset("sem_template.yaml")
    with pytest.raises(loader.PromptAssetError, match="YAML inválido"):
        loader.load_prompt_asset("quebrado.yaml")


def test_assets_are_cached_until_cleared(patched_prompts_dir: Path) -> None:
    path = patched_prompts_dir / "p.yaml"
    path.write_text("system_prompt: v1\ntemplate: '{user_prompt}'\n", encoding="utf-8")
    assert loader.load_prompt_asset("p.yaml").system_prompt == "v1"

    path.write_text("system_prompt: v2\ntemplate: '{user_prompt}'\n", encoding="utf-8")
    assert loader.load_prompt_asset("p.yaml").system_prompt == "v1"

    loader.clear_prompt_assets_cache()
    assert loader.load_prompt_asset("p.yaml").system_prompt == "v2"


def test_render_rejects_unknown_placeholder() -> None:
    asset = loader.PromptAsset(name="t.yaml", system_prompt="s", template="{descricao}")
    with pytest.raises(KeyError):
        asset.render(user_prompt="x")


def test_flow_generator_asset_carries_document_rules() -> None:
    loader.clear_prompt_assets_cache()
    asset = loader.load_prompt_asset(FLOW_GENERATOR_PROMPT_FILE)

    assert "start_screen_id" in asset.system_prompt
    assert "input_cpf" in asset.system_prompt
    assert "restart" in asset.system_prompt


def test_build_flow_prompts_injects_user_description() -> None:
    loader.clear_prompt_assets_cache()
    system_prompt, user_prompt = build_flow_prompts("  Quiosque de farmácia {24h}  ")

    assert system_prompt.startswith("Você é")
    assert "Quiosque de farmácia {24h}" in user_prompt
