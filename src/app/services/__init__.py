"""Serviços de aplicação.

Unidades reutilizáveis de orquestração (sem IO direto).
Implementações concretas de IO ficam em app/infra/.
"""

from app.services.batch_mutator import BatchReport, chunked, run_batched
from app.services.failure_recorder import FailureRecorder, FailureScope
from app.services.throttle import RateLimiter, limit

__all__ = [
    "BatchReport",
    "FailureRecorder",
    "FailureScope",
    "RateLimiter",
    "chunked",
    "limit",
    "run_batched",
]
