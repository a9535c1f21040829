"""Fallbacks determinísticos para quando o gerador falha.

Garante um documento conhecido-válido quando a IA não está disponível,
responde lixo ou devolve um fluxo que não passa na validação.
"""

from __future__ import annotations

from flowdoc import Flow, load_default_flow


def fallback_flow() -> Flow:
    """Fallback determinístico para geração de fluxo.

    Usado quando:
    - prompt vazio
    - erro/timeout na chamada ao gerador
    - resposta vazia ou documento inválido (gerador devolve None)

    Returns:
        Fluxo padrão (sempre válido)
    """
    return load_default_flow()
