"""Configuração e assets do módulo de IA."""

from ai.config.prompt_assets_loader import (
    PromptAsset,
    PromptAssetError,
    clear_prompt_assets_cache,
    load_prompt_asset,
)

__all__ = [
    "PromptAsset",
    "PromptAssetError",
    "clear_prompt_assets_cache",
    "load_prompt_asset",
]
