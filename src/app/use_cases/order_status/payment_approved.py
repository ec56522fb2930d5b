"""Pagamento aprovado: classifica o pedido e delega ao handler do cenário."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.domain.scenario import RecurrenceScenario, UpgradeScenario, classify_order
from app.use_cases.order_status.first_payment import handle_first_payment
from app.use_cases.order_status.recurrence import handle_recurrence
from app.use_cases.order_status.upgrade import handle_upgrade

if TYPE_CHECKING:
    from app.domain.order import OrderEvent
    from app.use_cases.order_status.context import HandlerContext, ReconciliationResult

logger = logging.getLogger(__name__)


async def handle_payment_approved(
    event: OrderEvent,
    ctx: HandlerContext,
) -> ReconciliationResult:
    """Executa exatamente um handler de reconciliação por evento."""
    token = await ctx.tokens.get_token(ctx.credentials.username, ctx.credentials.password)
    snapshot = await ctx.orders.get_order(event.order_id)

    scenario = classify_order(snapshot)
    logger.info(
        "payment_approved_scenario_selected",
        extra={
            "order_id": event.order_id,
            "order_form_id": snapshot.order_form_id,
            "scenario": str(scenario.kind),
        },
    )

    if isinstance(scenario, UpgradeScenario):
        return await handle_upgrade(event, scenario, ctx)
    if isinstance(scenario, RecurrenceScenario):
        return await handle_recurrence(event, scenario, token.access_token, ctx)
    return await handle_first_payment(event, scenario, token.access_token, ctx)
