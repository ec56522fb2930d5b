"""Registros de falha na entidade de documentos do MasterData (FL)."""

from __future__ import annotations

from typing import TYPE_CHECKING

from app.protocols.failure_store import FailureStoreProtocol

if TYPE_CHECKING:
    from app.domain.failure import FailureRecord
    from app.protocols.commerce import DocumentStoreProtocol


class MasterDataFailureStore(FailureStoreProtocol):
    """Grava `momento`, `funcionalidade` e `erro` via create_document.

    Args:
        documents: Cliente de documentos (MasterData).
        entity: Entidade de destino (FL).
        utc_offset_hours: Deslocamento aplicado ao campo "momento".
    """

    def __init__(
        self,
        documents: DocumentStoreProtocol,
        entity: str = "FL",
        utc_offset_hours: int = -3,
    ) -> None:
        self._documents = documents
        self._entity = entity
        self._utc_offset_hours = utc_offset_hours

    async def save(self, record: FailureRecord) -> None:
        await self._documents.create_document(
            self._entity,
            record.to_document_fields(self._utc_offset_hours),
        )
