"""Registro de métricas via structured logging.

As métricas são linhas de log com `metric_type` e podem ser agregadas
depois (BigQuery, Cloud Logging, etc.).

Métricas suportadas:
- Latência: tempo de execução de um handler de evento
- Outcome: resultado de um handler (registered, skipped, failed, unrecognized)
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
        component: Nome do componente (ex: "order_status_dispatcher")
        operation: Nome da operação (ex: "payment-approved")
        latency_ms: Latência em milissegundos
        correlation_id: Tracker do evento
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


def record_outcome(
    component: str,
    outcome: str,
    correlation_id: str | None = None,
) -> None:
    """Registra o desfecho de um handler de evento."""
    logger.info(
        "metric_outcome",
        extra={
            "metric_type": "outcome",
            "component": component,
            "outcome": outcome,
            "correlation_id": correlation_id,
        },
    )
