"""Contratos dos serviços da plataforma de commerce.

Os handlers dependem apenas destes protocolos; os clientes HTTP
concretos ficam em app/infra/commerce.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from app.domain.order import OrderSnapshot
    from app.domain.subscription import SubscriptionRecord


@runtime_checkable
class OrderServiceProtocol(Protocol):
    """Leitura de pedidos no OMS."""

    async def get_order(self, order_id: str) -> OrderSnapshot:
        """Busca o snapshot atual do pedido."""
        ...


@runtime_checkable
class SubscriptionServiceProtocol(Protocol):
    """Leitura e mutação de assinaturas."""

    async def get_by_id(self, subscription_id: str) -> SubscriptionRecord: ...

    async def add_item(self, subscription_id: str, sku_id: str, quantity: int) -> None:
        """Adiciona uma nova linha de item à assinatura."""
        ...

    async def update_item(self, subscription_id: str, item_id: str, quantity: int) -> None:
        """Altera a quantidade de uma linha existente."""
        ...


@runtime_checkable
class DocumentStoreProtocol(Protocol):
    """Entidades de documentos (MasterData)."""

    async def create_document(self, entity: str, fields: dict[str, Any]) -> dict[str, Any]: ...

    async def search_documents(
        self,
        entity: str,
        fields: Sequence[str],
        where: str | None = None,
        *,
        page: int = 1,
        page_size: int | None = None,
    ) -> list[dict[str, Any]]: ...

    async def find_by_order_id(
        self,
        entity: str,
        order_id: str,
        fields: Sequence[str],
    ) -> dict[str, Any] | None:
        """Varre a entidade inteira e devolve o documento do pedido, se houver."""
        ...
