"""Recorrência: renovação de assinatura.

Fluxo:
1. Busca a assinatura pelo SubscriptionGroupId do pedido
2. Localiza o pedido original (primeiro item com originalOrderId)
3. Resolve orderFormId/email do pedido original na entidade de relação
4. Busca o par de upgrade do plano (identifica o SKU de assento de usuário)
5. Monta o corpo de edição de contrato (apenas logado)
6. Registra o pagamento contra o orderFormId ORIGINAL

Vínculo ausente em (2) ou (3) encerra sem erro e sem registro de falha.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.domain.contract import ContractPaymentNotification, to_major_units
from app.domain.failure import FailureFeature
from app.use_cases.order_status.context import ReconciliationOutcome, ReconciliationResult
from app.use_cases.order_status.edit_payloads import build_recurrence_edit_payload
from config.logging import log_fallback

if TYPE_CHECKING:
    from app.domain.order import OrderEvent
    from app.domain.scenario import RecurrenceScenario
    from app.use_cases.order_status.context import HandlerContext

logger = logging.getLogger(__name__)

ORDER_RELATION_FIELDS = ("orderId", "orderFormId", "id", "email")
PLAN_UPGRADE_FIELDS = ("basic", "upgrade", "userId")


async def handle_recurrence(
    event: OrderEvent,
    scenario: RecurrenceScenario,
    access_token: str,
    ctx: HandlerContext,
) -> ReconciliationResult:
    snapshot = scenario.snapshot
    subscription_id = scenario.subscription_group_id
    settings = ctx.settings
    value = to_major_units(snapshot.value)

    logger.info(
        "recurrence_payment_started",
        extra={"order_id": event.order_id, "subscription_id": subscription_id},
    )

    async with ctx.recorder.guard(FailureFeature.RECURRENCE, event, value):
        subscription = await ctx.subscriptions.get_by_id(subscription_id)

        original_order_id = subscription.find_original_order_id()
        if not original_order_id:
            log_fallback(logger, "recurrence_payment", "original_order_not_found", event.order_id)
            return ReconciliationResult(
                ReconciliationOutcome.SKIPPED, reason="original_order_not_found"
            )

        relation = await ctx.documents.find_by_order_id(
            settings.order_relation_entity,
            original_order_id,
            ORDER_RELATION_FIELDS,
        )
        original_order_form_id = relation.get("orderFormId") if relation else None
        if not original_order_form_id:
            log_fallback(logger, "recurrence_payment", "order_relation_not_found", event.order_id)
            return ReconciliationResult(
                ReconciliationOutcome.SKIPPED, reason="order_relation_not_found"
            )

        plan_id = subscription.plan_id
        pairs = await ctx.documents.search_documents(
            settings.plan_upgrade_entity,
            PLAN_UPGRADE_FIELDS,
            f"basic={plan_id} OR upgrade={plan_id}",
            page=1,
            page_size=settings.search_page_size,
        )
        user_sku_id = pairs[0].get("userId") if pairs else None
        if user_sku_id is None:
            # Segue sem SKU de assento: todos os itens contam como contratados
            log_fallback(logger, "recurrence_payment", "plan_upgrade_pair_not_found", event.order_id)

        edit_payload = build_recurrence_edit_payload(
            snapshot,
            subscription,
            original_order_form_id,
            user_sku_id,
            relation.get("email"),
        )
        logger.info(
            "recurrence_contract_body_built",
            extra={
                "order_id": event.order_id,
                "plan": edit_payload.contracted_plan,
                "total_value": edit_payload.total_value,
                "sub_items": len(edit_payload.contracted_sub_items),
            },
        )

        notification = ContractPaymentNotification.for_order(
            order_form_id=original_order_form_id,
            order_number=event.order_id,
            value_minor_units=snapshot.value,
            date=event.current_change_date,
        )
        await ctx.contracts.register_payment(notification, access_token)

    logger.info(
        "recurrence_payment_registered",
        extra={
            "order_id": event.order_id,
            "subscription_id": subscription_id,
            "original_order_id": original_order_id,
        },
    )
    return ReconciliationResult(ReconciliationOutcome.REGISTERED, edit_payload=edit_payload)
