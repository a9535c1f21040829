"""Exceções do modelo de documento de fluxo."""

from __future__ import annotations


class FlowDocumentError(ValueError):
    """Base para falhas de documento de fluxo."""


class DocumentInvalidError(FlowDocumentError):
    """Documento reprovado nas checagens de carga.

    A mensagem é exibida literalmente no editor; o fluxo válido anterior
    permanece ativo.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message
