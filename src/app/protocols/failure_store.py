"""Protocolo do store de registros de falha.

Interface leve (ABC) dependida pelo FailureRecorder.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from app.domain.failure import FailureRecord


class FailureStoreProtocol(ABC):
    """Contrato mínimo assíncrono para persistir falhas.

    Método canônico:
    - save(record) -> None
      Persiste o registro (append-only). Pode levantar exceção; quem
      chama decide se engole ou propaga.
    """

    @abstractmethod
    async def save(self, record: FailureRecord) -> None:
        """Persiste um registro de falha.

        Args:
            record: Registro montado pelo FailureRecorder.
        """
