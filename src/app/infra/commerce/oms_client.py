"""Cliente do OMS (pedidos)."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING
from urllib.parse import quote

from app.domain.order import OrderSnapshot
from app.infra.commerce.base import commerce_http_config
from app.infra.http import HttpClient, HttpClientConfig

if TYPE_CHECKING:
    import httpx

    from config.settings import CommerceSettings

logger = logging.getLogger(__name__)


class OmsClient(HttpClient):
    """Leitura de pedidos via GET /api/oms/pvt/orders/{id}."""

    def __init__(
        self,
        config: HttpClientConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__("oms", config, transport)

    async def get_order(self, order_id: str) -> OrderSnapshot:
        data = await self.request_json(
            "GET",
            f"/api/oms/pvt/orders/{quote(order_id, safe='')}",
            operation="get_order",
        )
        snapshot = OrderSnapshot.model_validate(data)
        logger.debug(
            "oms_order_fetched",
            extra={"order_id": snapshot.order_id, "items_count": len(snapshot.items)},
        )
        return snapshot


def create_oms_client(settings: CommerceSettings | None = None) -> OmsClient:
    """Factory com settings do ambiente quando não informadas."""
    from config.settings import get_commerce_settings

    return OmsClient(commerce_http_config(settings or get_commerce_settings()))
