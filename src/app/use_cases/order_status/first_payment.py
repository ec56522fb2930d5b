"""Primeira compra: registra o pagamento inicial no sistema de contratos."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.domain.contract import ContractPaymentNotification
from app.domain.failure import FailureFeature
from app.use_cases.order_status.context import ReconciliationOutcome, ReconciliationResult

if TYPE_CHECKING:
    from app.domain.order import OrderEvent
    from app.domain.scenario import FirstPaymentScenario
    from app.use_cases.order_status.context import HandlerContext

logger = logging.getLogger(__name__)


async def handle_first_payment(
    event: OrderEvent,
    scenario: FirstPaymentScenario,
    access_token: str,
    ctx: HandlerContext,
) -> ReconciliationResult:
    """Uma única chamada de registro de pagamento, sem lotes.

    Raises:
        Exception: Falha da API de contratos, após o registro de falha.
    """
    snapshot = scenario.snapshot
    notification = ContractPaymentNotification.for_order(
        order_form_id=snapshot.order_form_id,
        order_number=event.order_id,
        value_minor_units=snapshot.value,
        date=event.current_change_date,
    )

    logger.info(
        "first_payment_started",
        extra={
            "order_id": event.order_id,
            "order_form_id": snapshot.order_form_id,
            "value": notification.value,
        },
    )

    async with ctx.recorder.guard(FailureFeature.FIRST_PAYMENT, event, notification.value):
        await ctx.contracts.register_payment(notification, access_token)

    logger.info(
        "first_payment_registered",
        extra={"order_id": event.order_id, "order_form_id": snapshot.order_form_id},
    )
    return ReconciliationResult(ReconciliationOutcome.REGISTERED)
