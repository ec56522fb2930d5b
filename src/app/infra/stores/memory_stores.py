"""Stores em memória — apenas para desenvolvimento e testes.

ATENÇÃO: Não usar em staging/production. Sem persistência entre reinícios.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from app.protocols.failure_store import FailureStoreProtocol

if TYPE_CHECKING:
    from app.domain.failure import FailureRecord


class MemoryFailureStore(FailureStoreProtocol):
    """Store de falhas em memória — apenas para dev/test."""

    def __init__(self) -> None:
        self._records: list[FailureRecord] = []

    async def save(self, record: FailureRecord) -> None:
        self._records.append(record)

    @property
    def records(self) -> list[FailureRecord]:
        """Cópia dos registros gravados, na ordem de chegada."""
        return list(self._records)

    def clear(self) -> None:
        self._records.clear()
