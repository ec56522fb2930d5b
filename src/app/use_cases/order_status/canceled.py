"""Pedido cancelado: notifica o sistema de contratos.

Sem registro de falha neste caminho; erros sobem para o dispatcher.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.domain.contract import CancellationNotification
from app.use_cases.order_status.context import ReconciliationOutcome, ReconciliationResult

if TYPE_CHECKING:
    from app.domain.order import OrderEvent
    from app.use_cases.order_status.context import HandlerContext

logger = logging.getLogger(__name__)


async def handle_canceled(event: OrderEvent, ctx: HandlerContext) -> ReconciliationResult:
    snapshot = await ctx.orders.get_order(event.order_id)
    token = await ctx.tokens.get_token(ctx.credentials.username, ctx.credentials.password)

    notification = CancellationNotification(
        order_form_id=snapshot.order_form_id,
        date=event.current_change_date,
    )
    await ctx.contracts.send_notification(notification, token.access_token)

    logger.info(
        "cancellation_notification_sent",
        extra={"order_id": event.order_id, "order_form_id": snapshot.order_form_id},
    )
    return ReconciliationResult(ReconciliationOutcome.NOTIFIED)
