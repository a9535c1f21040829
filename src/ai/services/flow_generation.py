"""Serviço de geração de fluxos por IA.

Sempre devolve um Flow válido: qualquer falha do gerador (erro, timeout,
resposta vazia, documento inválido) ou do asset de prompt cai no fluxo
padrão, com log observável via log_fallback e motivo exposto ao chamador.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ai.config.prompt_assets_loader import PromptAssetError
from ai.prompts.flow_generator_prompt import build_flow_prompts
from ai.rules.fallbacks import fallback_flow
from app.observability import record_latency
from config.logging import log_fallback

if TYPE_CHECKING:
    from ai.core.client import FlowGeneratorProtocol
    from flowdoc import Flow

logger = logging.getLogger(__name__)

_COMPONENT = "flow_generation"


@dataclass(frozen=True, slots=True)
class FlowGenerationResult:
    """Resultado da geração.

    Attributes:
        flow: Fluxo gerado ou fallback (sempre válido)
        fallback_used: True se o fluxo padrão foi usado
        reason: Motivo do fallback (None quando gerado)
    """

    flow: Flow
    fallback_used: bool = False
    reason: str | None = None


class FlowGenerationService:
    """Orquestra prompt → gerador → validação → fallback."""

    def __init__(self, generator: FlowGeneratorProtocol) -> None:
        self._generator = generator

    async def generate(self, prompt: str) -> FlowGenerationResult:
        """Gera fluxo a partir da descrição do operador."""
        if not prompt or not prompt.strip():
            return self._fallback("empty_prompt", elapsed_ms=None)

        start_time = time.perf_counter()
        try:
            system_prompt, user_prompt = build_flow_prompts(prompt)
        except (PromptAssetError, KeyError, IndexError, ValueError) as exc:
            logger.error(
                "flow_prompt_assets_failed",
                extra={"component": _COMPONENT, "error_type": type(exc).__name__},
            )
            return self._fallback("prompt_asset_error", elapsed_ms=None)

        try:
            flow = await self._generator.generate(
                system_prompt=system_prompt,
                user_prompt=user_prompt,
            )
        except Exception as exc:
            elapsed_ms = (time.perf_counter() - start_time) * 1000
            logger.warning(
                "flow_generator_error",
                extra={
                    "component": _COMPONENT,
                    "error_type": type(exc).__name__,
                },
            )
            return self._fallback("generator_error", elapsed_ms=elapsed_ms)

        elapsed_ms = (time.perf_counter() - start_time) * 1000
        if flow is None:
            return self._fallback("generator_empty", elapsed_ms=elapsed_ms)

        record_latency(_COMPONENT, "generate", elapsed_ms)
        logger.info(
            "flow_generated",
            extra={
                "component": _COMPONENT,
                "flow_id": flow.flow_id,
                "screen_count": flow.screen_count(),
                "dangling_count": len(flow.dangling_targets()),
            },
        )
        return FlowGenerationResult(flow=flow)

    def _fallback(self, reason: str, *, elapsed_ms: float | None) -> FlowGenerationResult:
        log_fallback(logger, _COMPONENT, reason=reason, elapsed_ms=elapsed_ms)
        return FlowGenerationResult(
            flow=fallback_flow(),
            fallback_used=True,
            reason=reason,
        )
