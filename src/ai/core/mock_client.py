"""Gerador mock de fluxos para testes e desenvolvimento.

Retorna o fluxo padrão sem chamar LLM real.
"""

from __future__ import annotations

import logging

from flowdoc import Flow, load_default_flow

logger = logging.getLogger(__name__)


class MockFlowGenerator:
    """Gerador determinístico: sempre devolve o fluxo padrão.

    Implementa FlowGeneratorProtocol.
    """

    def __init__(self, flow: Flow | None = None) -> None:
        self._flow = flow

    async def generate(
        self,
        *,
        system_prompt: str,
        user_prompt: str,
    ) -> Flow | None:
        """Retorna o fluxo configurado (default: fluxo padrão)."""
        flow = self._flow or load_default_flow()
        logger.debug(
            "mock_flow_generator_used",
            extra={"flow_id": flow.flow_id, "prompt_length": len(user_prompt)},
        )
        return flow
