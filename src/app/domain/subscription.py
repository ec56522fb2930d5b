"""Modelos da assinatura (serviço de assinaturas da plataforma)."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class SubscriptionItem(BaseModel):
    """Linha de item de uma assinatura."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: str
    sku_id: str = Field(..., alias="skuId")
    quantity: int = 0
    original_order_id: str | None = Field(default=None, alias="originalOrderId")


class SubscriptionPlan(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str


class SubscriptionRecord(BaseModel):
    """Assinatura retornada por GET /api/rns/pub/subscriptions/{id}."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: str
    plan: SubscriptionPlan
    items: list[SubscriptionItem] = Field(default_factory=list)
    next_purchase_date: str | None = Field(default=None, alias="nextPurchaseDate")
    customer_email: str | None = Field(default=None, alias="customerEmail")

    @property
    def plan_id(self) -> str:
        return self.plan.id

    @property
    def plan_code(self) -> str:
        """Último segmento do id do plano (ex: "vtex.subscription.pro" -> "pro")."""
        return self.plan.id.split(".")[-1]

    def find_original_order_id(self) -> str | None:
        """Primeiro originalOrderId não vazio entre os itens, se houver."""
        return next(
            (item.original_order_id for item in self.items if item.original_order_id),
            None,
        )


__all__ = ["SubscriptionItem", "SubscriptionPlan", "SubscriptionRecord"]
