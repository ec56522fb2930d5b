"""Endpoint de eventos de mudança de status de pedido.

Endpoint:
- POST /events/order-status: recebe {orderId, currentState, currentChangeDate}

Fluxo:
1. Valida o corpo com pydantic (400 se inválido)
2. Gera o tracker do evento e devolve como correlation_id
3. Despacha inline ou em task de background (EVENT_PROCESSING_MODE)

O dispatcher nunca levanta exceção, então a resposta nunca reflete
falha de reconciliação: a entrega do evento é at-least-once e o
registro de falha é o canal de auditoria.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from fastapi import APIRouter, Request, Response, status
from pydantic import ValidationError

from api.routes.events.runtime_tasks import schedule_processing_task
from app.domain.order import OrderEvent
from app.observability import build_tracker_id
from app.use_cases.order_status import dispatch

if TYPE_CHECKING:
    from app.bootstrap import Runtime

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/order-status", response_model=None)
async def receive_order_status(request: Request) -> Response | dict[str, Any]:
    """Recebe um evento de status de pedido.

    Returns:
        {"status": "received", "correlation_id": ...} ou Response de erro.
    """
    raw_body = await request.body()
    try:
        event = OrderEvent.model_validate_json(raw_body)
    except ValidationError as exc:
        logger.warning(
            "order_event_invalid",
            extra={"error_count": exc.error_count(), "payload_size": len(raw_body)},
        )
        return Response(
            content="Bad Request",
            media_type="text/plain",
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    runtime: Runtime | None = getattr(request.app.state, "runtime", None)
    if runtime is None:
        logger.error("order_event_runtime_unavailable", extra={"order_id": event.order_id})
        return Response(
            content="Service Unavailable",
            media_type="text/plain",
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        )

    tracker_id = build_tracker_id(event.current_state, event.order_id)
    ctx = runtime.context

    if ctx.settings.processing_mode == "inline":
        result = await dispatch(event, ctx, tracker_id=tracker_id)
        return {
            "status": "received",
            "correlation_id": tracker_id,
            "dispatch_status": str(result.status),
        }

    schedule_processing_task(
        correlation_id=tracker_id,
        coroutine=dispatch(event, ctx, tracker_id=tracker_id),
    )
    return {"status": "received", "correlation_id": tracker_id}
