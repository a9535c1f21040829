"""Configuração de logging estruturado.

Uso:
    from config.logging import configure_logging, get_logger

    configure_logging(level="INFO", service_name="kiosk_sdui")
    logger = get_logger(__name__)

Campos obrigatórios em todo log: asctime, level, logger, message,
correlation_id, kiosk_session_id, service.
"""

from config.logging.config import configure_logging, get_logger, log_fallback
from config.logging.filters import ContextFilter
from config.logging.formatters import (
    FIELD_RENAME_MAP,
    REQUIRED_LOG_FIELDS,
    create_json_formatter,
)

__all__ = [
    "FIELD_RENAME_MAP",
    "REQUIRED_LOG_FIELDS",
    "ContextFilter",
    "configure_logging",
    "create_json_formatter",
    "get_logger",
    "log_fallback",
]
