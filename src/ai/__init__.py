"""
Módulo ai — geração de fluxos de quiosque por linguagem natural.

Estrutura:
    - core/: FlowGeneratorProtocol e MockFlowGenerator
    - config/: loaders de assets YAML de prompt
    - prompts/: montagem do prompt do gerador
    - rules/: fallback determinístico (fluxo padrão)
    - services/: FlowGenerationService
    - utils/: extração de JSON de respostas de LLM

ai/ não faz IO de rede: o cliente OpenAI vive em app/infra/ai.
"""

from ai.core import FlowGeneratorProtocol, MockFlowGenerator
from ai.rules import fallback_flow
from ai.services import FlowGenerationResult, FlowGenerationService
from ai.utils import extract_json_from_response

__all__ = [
    "FlowGenerationResult",
    "FlowGenerationService",
    "FlowGeneratorProtocol",
    "MockFlowGenerator",
    "extract_json_from_response",
    "fallback_flow",
]
