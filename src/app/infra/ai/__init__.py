"""Implementações concretas de IO para IA.

ai/ não faz IO direto; o cliente HTTP vive aqui.
"""

from app.infra.ai.openai_flow_client import OpenAIFlowClient

__all__ = [
    "OpenAIFlowClient",
]
