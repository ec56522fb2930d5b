"""Observabilidade — correlation id por evento e métricas via logs.

Uso:
    from app.observability import build_tracker_id, set_correlation_id
    from app.observability import record_latency, record_outcome
"""

from app.observability.correlation import (
    build_tracker_id,
    get_correlation_id,
    reset_correlation_id,
    set_correlation_id,
)
from app.observability.metrics import (
    record_latency,
    record_outcome,
)

__all__ = [
    "build_tracker_id",
    "get_correlation_id",
    "record_latency",
    "record_outcome",
    "reset_correlation_id",
    "set_correlation_id",
]
