"""Montagem do corpo de edição de contrato (EditarContrato).

Recorrência e upgrade montam e logam o corpo; a chamada de edição ainda
não é emitida pelos handlers.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from app.domain.contract import ContractEditPayload, ContractSettingsBlock, to_major_units

if TYPE_CHECKING:
    from app.domain.order import OrderSnapshot
    from app.domain.subscription import SubscriptionRecord
    from app.domain.upgrade import UpgradeRequest


def build_recurrence_edit_payload(
    snapshot: OrderSnapshot,
    subscription: SubscriptionRecord,
    original_order_form_id: str,
    user_sku_id: str | None,
    email: str | None,
) -> ContractEditPayload:
    """Corpo de edição para a renovação de uma assinatura.

    O item cujo id é o SKU de usuário conta como assentos; os demais
    são os itens contratados.

    Args:
        snapshot: Pedido da renovação.
        subscription: Assinatura renovada.
        original_order_form_id: orderFormId do pedido que criou o contrato.
        user_sku_id: SKU do assento de usuário (par de upgrade), se houver.
        email: Email do assinante.
    """
    contracted = [item for item in snapshot.items if item.id != user_sku_id]
    seats = [item for item in snapshot.items if item.id == user_sku_id]

    sub_items: dict[str, dict[str, Any]] = {
        item.id: {
            "name": item.name,
            "refId": item.ref_id,
            "price": item.price,
            "skuId": item.id,
        }
        for item in contracted
    }

    return ContractEditPayload(
        total_value=to_major_units(snapshot.value),
        validity=subscription.next_purchase_date,
        order_form_id=original_order_form_id,
        contracted_plan=subscription.plan_code,
        contracted_sub_items=sub_items,
        settings=ContractSettingsBlock(
            max_evaluations=contracted[0].quantity if contracted else 0,
            max_active_users=seats[0].quantity if seats else 0,
            contracted_item_ids=json.dumps([item.ref_id for item in contracted]),
            user_sku_id=user_sku_id,
            users=email,
        ),
    )


def build_upgrade_edit_payload(
    request: UpgradeRequest,
    subscription: SubscriptionRecord,
    email: str | None,
) -> ContractEditPayload:
    """Corpo de edição após um upgrade de plano.

    O valor total fica 0: o upgrade não carrega simulação de preço.
    """
    items_json = json.dumps(request.items)
    return ContractEditPayload(
        total_value=0,
        validity=subscription.next_purchase_date,
        order_form_id=request.original_order_form_id,
        contracted_plan=request.plan_code,
        contracted_sub_items=items_json,
        settings=ContractSettingsBlock(
            max_evaluations=request.quantity,
            max_active_users=request.user.quantity,
            contracted_item_ids=items_json,
            user_sku_id=request.user.id or None,
            users=email,
        ),
    )


__all__ = ["build_recurrence_edit_payload", "build_upgrade_edit_payload"]
