"""Serviços de IA."""

from ai.services.flow_generation import FlowGenerationResult, FlowGenerationService

__all__ = [
    "FlowGenerationResult",
    "FlowGenerationService",
]
