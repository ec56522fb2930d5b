"""Upgrade de plano: ajusta itens e quantidades da assinatura.

Fluxo:
1. Parse do app `upgradeplan` (falha de parse cai no registro de falha)
2. Adiciona os SKUs novos, em lotes throttled
3. Relê a assinatura para obter os ids de item atuais
4. Atualiza quantidades, em lotes throttled (itens já no alvo são pulados)
5. Resolve o email do assinante e monta o corpo de edição (apenas logado)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from app.domain.failure import FailureFeature
from app.services.batch_mutator import run_batched
from app.use_cases.order_status.context import ReconciliationOutcome, ReconciliationResult
from app.use_cases.order_status.edit_payloads import build_upgrade_edit_payload

if TYPE_CHECKING:
    from collections.abc import Sequence

    from app.domain.order import OrderEvent
    from app.domain.scenario import UpgradeScenario
    from app.domain.subscription import SubscriptionItem
    from app.domain.upgrade import UpgradeItemToAdd, UpgradeRequest
    from app.use_cases.order_status.context import HandlerContext

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ItemQuantityUpdate:
    item_id: str
    sku_id: str
    quantity: int


def plan_item_updates(
    items: Sequence[SubscriptionItem],
    request: UpgradeRequest,
) -> list[ItemQuantityUpdate]:
    """Alvo de cada linha: assento de usuário recebe user.quantity, o resto quantity.

    Linhas que já estão no alvo ficam fora da lista.
    """
    updates: list[ItemQuantityUpdate] = []
    for item in items:
        is_user_seat = bool(request.user.id) and item.sku_id == request.user.id
        target = request.user.quantity if is_user_seat else request.quantity
        if item.quantity == target:
            continue
        updates.append(ItemQuantityUpdate(item.id, item.sku_id, target))
    return updates


async def handle_upgrade(
    event: OrderEvent,
    scenario: UpgradeScenario,
    ctx: HandlerContext,
) -> ReconciliationResult:
    settings = ctx.settings
    logger.info("upgrade_payment_started", extra={"order_id": event.order_id})

    # Upgrade não tem valor associado ao registro de falha
    async with ctx.recorder.guard(FailureFeature.UPGRADE, event, None):
        request = scenario.parse_request()
        subscription_id = request.subscription_id
        logger.info(
            "upgrade_request_parsed",
            extra={
                "order_id": event.order_id,
                "subscription_id": subscription_id,
                "quantity": request.quantity,
                "items_to_add": len(request.items_to_add),
                "user_sku_id": request.user.id,
                "user_quantity": request.user.quantity,
            },
        )

        async def add_item(item: UpgradeItemToAdd) -> None:
            await ctx.subscriptions.add_item(subscription_id, item.sku_id, request.quantity)

        async def update_item(update: ItemQuantityUpdate) -> None:
            await ctx.subscriptions.update_item(subscription_id, update.item_id, update.quantity)

        if request.items_to_add:
            await run_batched(
                request.items_to_add,
                settings.add_batch_size,
                add_item,
                settings.throttle_interval_ms,
                operation="subscription_add_item",
            )

        subscription = await ctx.subscriptions.get_by_id(subscription_id)
        # Lotes formados só com as linhas que mudam; as já no alvo nem entram
        updates = plan_item_updates(subscription.items, request)
        logger.info(
            "upgrade_item_updates_planned",
            extra={
                "subscription_id": subscription_id,
                "items": len(subscription.items),
                "updates": len(updates),
            },
        )
        await run_batched(
            updates,
            settings.update_batch_size,
            update_item,
            settings.throttle_interval_ms,
            operation="subscription_update_item",
        )

        customers = await ctx.documents.search_documents(
            settings.order_relation_entity,
            ("email",),
            f"subscriptionId={subscription_id}",
            page=1,
            page_size=settings.search_page_size,
        )
        email = customers[0].get("email") if customers else None

        edit_payload = build_upgrade_edit_payload(request, subscription, email)
        logger.info(
            "upgrade_contract_body_built",
            extra={
                "order_id": event.order_id,
                "plan": edit_payload.contracted_plan,
                "has_email": email is not None,
            },
        )

    logger.info(
        "upgrade_payment_completed",
        extra={"order_id": event.order_id, "subscription_id": subscription_id},
    )
    return ReconciliationResult(ReconciliationOutcome.COMPLETED, edit_payload=edit_payload)


__all__ = ["ItemQuantityUpdate", "handle_upgrade", "plan_item_updates"]
