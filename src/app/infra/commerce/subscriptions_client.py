"""Cliente da API de assinaturas (/api/rns/pub/subscriptions)."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING
from urllib.parse import quote

from app.domain.subscription import SubscriptionRecord
from app.infra.commerce.base import commerce_http_config
from app.infra.http import HttpClient, HttpClientConfig

if TYPE_CHECKING:
    import httpx

    from config.settings import CommerceSettings

logger = logging.getLogger(__name__)

SUBSCRIPTIONS_PATH = "/api/rns/pub/subscriptions"


class SubscriptionsClient(HttpClient):
    """Leitura e mutação de itens de assinatura.

    add_item e update_item não são idempotentes: são emitidos uma vez,
    sem retentativa (ver HttpClient).
    """

    def __init__(
        self,
        config: HttpClientConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__("subscriptions", config, transport)

    async def get_by_id(self, subscription_id: str) -> SubscriptionRecord:
        data = await self.request_json(
            "GET",
            f"{SUBSCRIPTIONS_PATH}/{quote(subscription_id, safe='')}",
            operation="get_by_id",
        )
        return SubscriptionRecord.model_validate(data)

    async def add_item(self, subscription_id: str, sku_id: str, quantity: int) -> None:
        await self.request(
            "POST",
            f"{SUBSCRIPTIONS_PATH}/{quote(subscription_id, safe='')}/items",
            operation="add_item",
            json={"skuId": sku_id, "quantity": quantity},
        )
        logger.info(
            "subscription_item_added",
            extra={"subscription_id": subscription_id, "sku_id": sku_id, "quantity": quantity},
        )

    async def update_item(self, subscription_id: str, item_id: str, quantity: int) -> None:
        await self.request(
            "PATCH",
            f"{SUBSCRIPTIONS_PATH}/{quote(subscription_id, safe='')}/items/{quote(item_id, safe='')}",
            operation="update_item",
            json={"quantity": quantity},
        )
        logger.info(
            "subscription_item_updated",
            extra={"subscription_id": subscription_id, "item_id": item_id, "quantity": quantity},
        )


def create_subscriptions_client(
    settings: CommerceSettings | None = None,
) -> SubscriptionsClient:
    """Factory com settings do ambiente quando não informadas."""
    from config.settings import get_commerce_settings

    return SubscriptionsClient(commerce_http_config(settings or get_commerce_settings()))
