"""Protocolo para geradores de fluxo.

Define o contrato FlowGeneratorProtocol para implementações concretas
(OpenAI em app/infra, mock para desenvolvimento e testes).
ai/ não faz IO direto: a chamada HTTP fica na implementação injetada.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from flowdoc import Flow


class FlowGeneratorProtocol(Protocol):
    """Contrato para geradores de fluxo a partir de linguagem natural."""

    async def generate(
        self,
        *,
        system_prompt: str,
        user_prompt: str,
    ) -> Flow | None:
        """Gera um Flow validado ou None em caso de falha.

        Args:
            system_prompt: Instrução com o formato do documento e regras
            user_prompt: Descrição do quiosque feita pelo operador

        Returns:
            Flow já passado por parse_flow, ou None
        """
        ...
