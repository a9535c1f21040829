"""Contratos e implementações base de geração de fluxo."""

from ai.core.client import FlowGeneratorProtocol
from ai.core.mock_client import MockFlowGenerator

__all__ = [
    "FlowGeneratorProtocol",
    "MockFlowGenerator",
]
