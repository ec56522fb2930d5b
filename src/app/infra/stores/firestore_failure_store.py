"""Firestore Failure Store — registros de falha de reconciliação.

Alternativa ao MasterData quando FAILURE_LOG_BACKEND=firestore.
Append-only; o SDK é síncrono, então a escrita roda em thread.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from app.protocols.failure_store import FailureStoreProtocol
from utils.errors import FirestoreUnavailableError

if TYPE_CHECKING:
    from google.cloud.firestore import Client as FirestoreClient

    from app.domain.failure import FailureRecord

logger = logging.getLogger(__name__)

FAILURES_COLLECTION = "reconciliation_failures"


class FirestoreFailureStore(FailureStoreProtocol):
    """Store de falhas usando Firestore.

    O documento leva os mesmos campos gravados no MasterData (momento,
    funcionalidade, erro) mais campos estruturados para consulta.

    Args:
        firestore_client: Cliente Firestore
        collection_name: Nome da collection
        utc_offset_hours: Deslocamento aplicado ao campo "momento"
    """

    def __init__(
        self,
        firestore_client: FirestoreClient,
        collection_name: str = FAILURES_COLLECTION,
        utc_offset_hours: int = 0,
    ) -> None:
        self._db = firestore_client
        self._collection = collection_name
        self._utc_offset_hours = utc_offset_hours

    def _document(self, record: FailureRecord) -> tuple[str, dict[str, Any]]:
        doc_id = (
            f"{record.moment_utc.strftime('%Y%m%d')}_{record.order_number}_"
            f"{record.moment_utc.timestamp()}"
        )
        document = {
            **record.to_document_fields(self._utc_offset_hours),
            "feature": str(record.feature),
            "order_number": record.order_number,
            "value_major_units": record.value_major_units,
            "error_message": record.error_message,
            "created_at": datetime.now(UTC),  # Para TTL do Firestore
        }
        return doc_id, document

    def save_sync(self, record: FailureRecord) -> None:
        """Escrita síncrona.

        Raises:
            FirestoreUnavailableError: Se o Firestore recusar a escrita.
        """
        doc_id, document = self._document(record)
        try:
            self._db.collection(self._collection).document(doc_id).set(document)
        except Exception as exc:
            raise FirestoreUnavailableError(
                f"falha ao gravar registro de falha {doc_id}: {type(exc).__name__}"
            ) from exc
        logger.debug(
            "failure_record_appended",
            extra={"doc_id": doc_id, "collection": self._collection},
        )

    async def save(self, record: FailureRecord) -> None:
        await asyncio.to_thread(self.save_sync, record)
