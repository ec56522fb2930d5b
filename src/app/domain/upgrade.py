"""Pedido de upgrade de plano, extraído do app `upgradeplan` do orderForm.

O customData só transporta strings: `quantity` chega como texto e
`itemsToAdd`, `user` e `items` chegam como JSON serializado.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from utils.errors import UpgradePayloadError


class UpgradeItemToAdd(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    sku_id: str = Field(..., alias="skuId")


class UpgradeUser(BaseModel):
    """SKU que representa o assento de usuário e a quantidade desejada."""

    model_config = ConfigDict(extra="ignore")

    id: str = ""
    quantity: int = 0


class UpgradeRequest(BaseModel):
    """Payload tipado do upgrade."""

    model_config = ConfigDict(frozen=True)

    subscription_id: str = Field(..., min_length=1)
    original_order_form_id: str = ""
    plan_id: str = ""
    quantity: int
    items_to_add: list[UpgradeItemToAdd] = Field(default_factory=list)
    user: UpgradeUser = Field(default_factory=UpgradeUser)
    items: list[str] = Field(default_factory=list)

    @classmethod
    def from_custom_fields(cls, fields: Mapping[str, str]) -> UpgradeRequest:
        """Converte os campos string do customData em um UpgradeRequest.

        Raises:
            UpgradePayloadError: Campo numérico inválido, JSON inválido ou
                campo obrigatório ausente.
        """
        try:
            quantity = int(str(fields.get("quantity", "")).strip())
        except ValueError as exc:
            raise UpgradePayloadError(
                f"quantity inválido no upgradeplan: {fields.get('quantity')!r}"
            ) from exc

        try:
            return cls(
                subscription_id=fields.get("subscriptionId", ""),
                original_order_form_id=fields.get("originalOrderFormId", ""),
                plan_id=fields.get("planId", ""),
                quantity=quantity,
                items_to_add=_decode_json_field(fields, "itemsToAdd", "[]"),
                user=_decode_json_field(fields, "user", "{}"),
                items=_decode_json_field(fields, "items", "[]"),
            )
        except ValidationError as exc:
            raise UpgradePayloadError(f"upgradeplan inválido: {exc.error_count()} erro(s)") from exc

    def to_custom_fields(self) -> dict[str, str]:
        """Serializa de volta no formato string do customData."""
        return {
            "subscriptionId": self.subscription_id,
            "originalOrderFormId": self.original_order_form_id,
            "planId": self.plan_id,
            "quantity": str(self.quantity),
            "itemsToAdd": json.dumps(
                [{"skuId": item.sku_id} for item in self.items_to_add]
            ),
            "user": json.dumps({"id": self.user.id, "quantity": self.user.quantity}),
            "items": json.dumps(self.items),
        }

    @property
    def plan_code(self) -> str:
        """Último segmento do planId (ex: "vtex.subscription.pro" -> "pro")."""
        return self.plan_id.split(".")[-1] if self.plan_id else ""


def _decode_json_field(fields: Mapping[str, str], name: str, default: str) -> Any:
    raw = fields.get(name) or default
    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        raise UpgradePayloadError(f"{name} não é JSON válido no upgradeplan") from exc


__all__ = ["UpgradeItemToAdd", "UpgradeRequest", "UpgradeUser"]
