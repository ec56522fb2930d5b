"""Reconciliação de eventos de status de pedido com o sistema de contratos."""

from .context import (
    ContractCredentials,
    HandlerContext,
    ReconciliationOutcome,
    ReconciliationResult,
)
from .dispatcher import (
    STATUS_HANDLERS,
    DispatchResult,
    DispatchStatus,
    OrderStatus,
    dispatch,
)

__all__ = [
    "STATUS_HANDLERS",
    "ContractCredentials",
    "DispatchResult",
    "DispatchStatus",
    "HandlerContext",
    "OrderStatus",
    "ReconciliationOutcome",
    "ReconciliationResult",
    "dispatch",
]
