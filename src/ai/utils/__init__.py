"""Utilitários do módulo de IA."""

from ai.utils._json_extractor import extract_json_from_response

__all__ = [
    "extract_json_from_response",
]
