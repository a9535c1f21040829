"""Filters de logging para injeção de contexto.

Campos injetados em todo record:
- correlation_id: ID de rastreamento da requisição
- kiosk_session_id: sessão de quiosque em atendimento (se houver)
- service: Nome do serviço

Valores digitados no quiosque (CPF, nomes) nunca entram nos logs.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable


class ContextFilter(logging.Filter):
    """Injeta correlation_id, kiosk_session_id e service em cada record.

    Args:
        service_name: Nome do serviço para identificação nos logs.
        correlation_id_getter: Função que retorna o correlation_id atual.
        session_id_getter: Função que retorna o id da sessão de quiosque atual.
    """

    def __init__(
        self,
        service_name: str,
        correlation_id_getter: Callable[[], str] | None = None,
        session_id_getter: Callable[[], str] | None = None,
    ) -> None:
        super().__init__()
        self._service_name = service_name
        self._get_correlation_id = correlation_id_getter or (lambda: "")
        self._get_session_id = session_id_getter or (lambda: "")

    def filter(self, record: logging.LogRecord) -> bool:
        """Enriquece o record; valores passados via `extra` têm precedência.

        Returns:
            True sempre (não filtra, apenas enriquece).
        """
        existing = getattr(record, "correlation_id", None)
        record.correlation_id = existing if existing else self._get_correlation_id()
        existing_session = getattr(record, "kiosk_session_id", None)
        record.kiosk_session_id = (
            existing_session if existing_session else self._get_session_id()
        )
        record.service = self._service_name
        return True
