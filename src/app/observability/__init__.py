"""Observabilidade — logs estruturados e métricas.

Re-exporta funções de contexto (correlation_id, kiosk_session_id) e métricas.

Uso:
    from app.observability import get_correlation_id, set_correlation_id
    from app.observability import record_latency, record_effect_outcome
"""

from app.observability.correlation import (
    generate_correlation_id,
    get_correlation_id,
    get_kiosk_session_id,
    reset_correlation_id,
    reset_kiosk_session_id,
    set_correlation_id,
    set_kiosk_session_id,
)
from app.observability.metrics import record_effect_outcome, record_latency

__all__ = [
    "generate_correlation_id",
    "get_correlation_id",
    "get_kiosk_session_id",
    "record_effect_outcome",
    "record_latency",
    "reset_correlation_id",
    "reset_kiosk_session_id",
    "set_correlation_id",
    "set_kiosk_session_id",
]
