"""Registro de métricas via structured logging.

As métricas são registradas como logs estruturados e podem ser agregadas
posteriormente (BigQuery, CloudWatch Insights, etc.).

Métricas suportadas:
- Latência: tempo de execução por componente/operação
- Efeito: contagem de efeitos assíncronos por desfecho

Uso:
    from app.observability.metrics import record_latency

    start = time.perf_counter()
    # ... operação ...
    latency_ms = (time.perf_counter() - start) * 1000
    record_latency("flow_generation", "generate", latency_ms)
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def record_latency(
    component: str,
    operation: str,
    latency_ms: float,
    correlation_id: str | None = None,
) -> None:
    """Registra latência de operação.

    Args:
        component: Nome do componente (ex: "flow_generation")
        operation: Nome da operação (ex: "generate")
        latency_ms: Latência em milissegundos
        correlation_id: ID de correlação (default: contexto atual)
    """
    logger.info(
        "metric_latency",
        extra={
            "metric_type": "latency",
            "component": component,
            "operation": operation,
            "latency_ms": round(latency_ms, 2),
            "correlation_id": correlation_id,
        },
    )


def record_effect_outcome(
    outcome: str,
    completion_target: str,
    correlation_id: str | None = None,
) -> None:
    """Registra desfecho de efeito assíncrono (started|completed|cancelled|failed).

    Args:
        outcome: Desfecho do efeito
        completion_target: Tela destino do efeito
        correlation_id: ID de correlação (default: contexto atual)
    """
    logger.info(
        "metric_effect_outcome",
        extra={
            "metric_type": "effect_outcome",
            "outcome": outcome,
            "completion_target": completion_target,
            "correlation_id": correlation_id,
        },
    )
