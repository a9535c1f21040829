"""Prompts do gerador de fluxos (assets em prompts/yaml/flow_generator.yaml)."""

from __future__ import annotations

from ai.config.prompt_assets_loader import load_prompt_asset

FLOW_GENERATOR_PROMPT_FILE = "flow_generator.yaml"


def build_flow_prompts(user_prompt: str) -> tuple[str, str]:
    """Retorna (system_prompt, user_prompt) prontos para o gerador."""
    asset = load_prompt_asset(FLOW_GENERATOR_PROMPT_FILE)
    return asset.system_prompt, asset.render(user_prompt=user_prompt.strip())
