"""Modelos de domínio do pedido e do evento de mudança de status.

O payload do OMS é camelCase; os modelos expõem snake_case e aceitam os
nomes originais via alias. Campos desconhecidos são ignorados, já que o
snapshot do pedido tem dezenas de blocos que a reconciliação não usa.
"""

from __future__ import annotations

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

UPGRADE_PLAN_APP_ID = "upgradeplan"


class OrderEvent(BaseModel):
    """Notificação de que o status de um pedido mudou."""

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    order_id: str = Field(..., alias="orderId", min_length=1)
    current_state: str = Field(..., alias="currentState", min_length=1)
    current_change_date: str = Field(
        ...,
        alias="currentChangeDate",
        description="Data ISO-8601 da mudança, repassada sem reformatação.",
    )


class OrderItem(BaseModel):
    """Item (SKU) de um pedido."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: str
    ref_id: str | None = Field(default=None, alias="refId")
    name: str = ""
    price: int = Field(default=0, description="Preço em centavos.")
    quantity: int = 0


class CustomApp(BaseModel):
    """App de customData anexado ao orderForm (ex: upgradeplan)."""

    model_config = ConfigDict(extra="ignore")

    id: str
    fields: dict[str, str] = Field(default_factory=dict)


class CustomData(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    custom_apps: list[CustomApp] = Field(default_factory=list, alias="customApps")


class SubscriptionData(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    # O OMS devolve "SubscriptionGroupId"; aceitamos também camelCase
    subscription_group_id: str | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "SubscriptionGroupId",
            "subscriptionGroupId",
            "subscription_group_id",
        ),
    )


class OrderSnapshot(BaseModel):
    """Retrato do pedido buscado no OMS a cada evento (nunca cacheado)."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    order_id: str = Field(..., alias="orderId")
    order_form_id: str = Field(..., alias="orderFormId")
    value: int = Field(..., description="Valor total em centavos.")
    items: list[OrderItem] = Field(default_factory=list)
    custom_data: CustomData | None = Field(default=None, alias="customData")
    subscription_data: SubscriptionData | None = Field(
        default=None, alias="subscriptionData"
    )

    def find_custom_app(self, app_id: str) -> CustomApp | None:
        """Retorna o primeiro app de customData com o id informado."""
        if self.custom_data is None:
            return None
        return next((app for app in self.custom_data.custom_apps if app.id == app_id), None)

    @property
    def subscription_group_id(self) -> str | None:
        if self.subscription_data is None:
            return None
        return self.subscription_data.subscription_group_id or None


__all__ = [
    "UPGRADE_PLAN_APP_ID",
    "CustomApp",
    "CustomData",
    "OrderEvent",
    "OrderItem",
    "OrderSnapshot",
    "SubscriptionData",
]
