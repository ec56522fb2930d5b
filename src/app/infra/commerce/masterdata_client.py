"""Cliente do MasterData (entidades de documentos).

Paginação via header REST-Range: a página `n` de tamanho `s` pede
`resources={(n-1)*s}-{n*s}`.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from app.infra.commerce.base import commerce_http_config
from app.infra.http import HttpClient, HttpClientConfig

if TYPE_CHECKING:
    from collections.abc import Sequence

    import httpx

    from config.settings import CommerceSettings

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 1000
ORDER_RELATION_FIELDS = ("orderId", "orderFormId", "id", "email")


def rest_range(page: int, page_size: int) -> str:
    """Valor do header REST-Range (página começa em 1)."""
    if page < 1 or page_size < 1:
        raise ValueError("page e page_size devem ser >= 1")
    start = (page - 1) * page_size
    return f"resources={start}-{start + page_size}"


class MasterDataClient(HttpClient):
    """Criação e busca de documentos por entidade."""

    def __init__(
        self,
        config: HttpClientConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> None:
        super().__init__("masterdata", config, transport)
        self._page_size = page_size

    async def create_document(self, entity: str, fields: dict[str, Any]) -> dict[str, Any]:
        result = await self.request_json(
            "POST",
            f"/api/dataentities/{entity}/documents",
            operation="create_document",
            json=fields,
        )
        logger.debug(
            "masterdata_document_created",
            extra={"entity": entity, "document_id": result.get("DocumentId")},
        )
        return result

    async def search_documents(
        self,
        entity: str,
        fields: Sequence[str],
        where: str | None = None,
        *,
        page: int = 1,
        page_size: int | None = None,
    ) -> list[dict[str, Any]]:
        params = {"_fields": ",".join(fields)}
        if where:
            params["_where"] = where
        result = await self.request_json(
            "GET",
            f"/api/dataentities/{entity}/search",
            operation="search_documents",
            params=params,
            headers={"REST-Range": rest_range(page, page_size or self._page_size)},
        )
        return result if isinstance(result, list) else []

    async def fetch_all_documents(
        self,
        entity: str,
        fields: Sequence[str],
    ) -> list[dict[str, Any]]:
        """Percorre as páginas até a primeira vazia."""
        documents: list[dict[str, Any]] = []
        page = 1
        while True:
            batch = await self.search_documents(entity, fields, page=page)
            if not batch:
                break
            documents.extend(batch)
            page += 1
        logger.debug(
            "masterdata_fetch_all_done",
            extra={"entity": entity, "documents": len(documents), "pages": page - 1},
        )
        return documents

    async def find_by_order_id(
        self,
        entity: str,
        order_id: str,
        fields: Sequence[str] = ORDER_RELATION_FIELDS,
    ) -> dict[str, Any] | None:
        documents = await self.fetch_all_documents(entity, fields)
        return next((doc for doc in documents if doc.get("orderId") == order_id), None)


def create_masterdata_client(
    settings: CommerceSettings | None = None,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> MasterDataClient:
    """Factory com settings do ambiente quando não informadas."""
    from config.settings import get_commerce_settings

    return MasterDataClient(
        commerce_http_config(settings or get_commerce_settings()),
        page_size=page_size,
    )
