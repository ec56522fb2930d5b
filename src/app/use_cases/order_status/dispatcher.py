"""Dispatcher de eventos de mudança de status de pedido.

Ponto de entrada da reconciliação. Mapeia o estado do evento para um
handler por tabela fixa e converte qualquer exceção do handler em log:
o canal de eventos nunca é bloqueado por erro de handler.

Desfechos por evento:
- handled: handler retornou
- failed: handler levantou exceção (logada e engolida)
- unrecognized: estado sem handler (warning, no-op)
"""

from __future__ import annotations

import logging
import time
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from enum import StrEnum
from types import MappingProxyType
from typing import TYPE_CHECKING

from app.observability import (
    build_tracker_id,
    record_latency,
    record_outcome,
    reset_correlation_id,
    set_correlation_id,
)
from app.use_cases.order_status.canceled import handle_canceled
from app.use_cases.order_status.payment_approved import handle_payment_approved

if TYPE_CHECKING:
    from app.domain.order import OrderEvent
    from app.use_cases.order_status.context import HandlerContext, ReconciliationResult

logger = logging.getLogger(__name__)

COMPONENT = "order_status_dispatcher"


class OrderStatus(StrEnum):
    PAYMENT_APPROVED = "payment-approved"
    CANCELED = "canceled"


class DispatchStatus(StrEnum):
    HANDLED = "handled"
    FAILED = "failed"
    UNRECOGNIZED = "unrecognized"


StatusHandler = Callable[["OrderEvent", "HandlerContext"], Awaitable["ReconciliationResult"]]

STATUS_HANDLERS: Mapping[OrderStatus, StatusHandler] = MappingProxyType(
    {
        OrderStatus.PAYMENT_APPROVED: handle_payment_approved,
        OrderStatus.CANCELED: handle_canceled,
    }
)


@dataclass(frozen=True, slots=True)
class DispatchResult:
    tracker_id: str
    status: DispatchStatus
    result: ReconciliationResult | None = None
    error: str | None = None


def resolve_handler(
    state: str,
    handlers: Mapping[OrderStatus, StatusHandler] = STATUS_HANDLERS,
) -> StatusHandler | None:
    """Handler registrado para o estado, ou None para estado desconhecido."""
    try:
        status = OrderStatus(state)
    except ValueError:
        return None
    return handlers.get(status)


async def dispatch(
    event: OrderEvent,
    ctx: HandlerContext,
    handlers: Mapping[OrderStatus, StatusHandler] = STATUS_HANDLERS,
    *,
    tracker_id: str | None = None,
) -> DispatchResult:
    """Processa um evento. Nunca levanta exceção.

    O tracker do evento vira o correlation_id de todos os logs emitidos
    durante o processamento e é restaurado ao final. A rota HTTP passa o
    tracker que já devolveu ao chamador.
    """
    tracker_id = tracker_id or build_tracker_id(event.current_state, event.order_id)
    token = set_correlation_id(tracker_id)
    started = time.perf_counter()

    try:
        logger.info(
            "order_event_received",
            extra={
                "order_id": event.order_id,
                "current_state": event.current_state,
                "current_change_date": event.current_change_date,
            },
        )

        handler = resolve_handler(event.current_state, handlers)
        if handler is None:
            logger.warning(
                "order_status_handler_not_found",
                extra={
                    "order_id": event.order_id,
                    "current_state": event.current_state,
                    "known_states": [str(status) for status in handlers],
                },
            )
            record_outcome(COMPONENT, DispatchStatus.UNRECOGNIZED, tracker_id)
            return DispatchResult(tracker_id, DispatchStatus.UNRECOGNIZED)

        try:
            result = await handler(event, ctx)
        except Exception as exc:
            logger.error(
                "order_status_handler_error",
                extra={
                    "order_id": event.order_id,
                    "current_state": event.current_state,
                    "error": str(exc),
                    "error_type": type(exc).__name__,
                },
            )
            record_outcome(COMPONENT, DispatchStatus.FAILED, tracker_id)
            return DispatchResult(tracker_id, DispatchStatus.FAILED, error=str(exc))

        logger.info(
            "order_status_handled",
            extra={
                "order_id": event.order_id,
                "current_state": event.current_state,
                "outcome": str(result.outcome),
                "reason": result.reason,
            },
        )
        record_outcome(COMPONENT, str(result.outcome), tracker_id)
        return DispatchResult(tracker_id, DispatchStatus.HANDLED, result=result)
    finally:
        record_latency(
            COMPONENT,
            event.current_state,
            (time.perf_counter() - started) * 1000,
            tracker_id,
        )
        reset_correlation_id(token)


__all__ = [
    "STATUS_HANDLERS",
    "DispatchResult",
    "DispatchStatus",
    "OrderStatus",
    "StatusHandler",
    "dispatch",
    "resolve_handler",
]
