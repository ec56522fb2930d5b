"""Registro best-effort de falhas de reconciliação.

O registro nunca mascara o erro original: se a persistência falhar, a
falha secundária é logada e engolida, e o erro original continua
propagando para o dispatcher.

Uso:
    async with recorder.guard(FailureFeature.FIRST_PAYMENT, event, 150.0):
        await contract.register_payment(...)
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from app.domain.failure import FailureFeature, FailureRecord

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Callable

    from app.domain.order import OrderEvent
    from app.protocols.failure_store import FailureStoreProtocol

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class FailureScope:
    """Estado do bloco protegido, visível a quem chamou guard()."""

    record: FailureRecord | None = None
    persisted: bool = False


class FailureRecorder:
    """Persiste FailureRecord via store; nunca levanta exceção.

    Args:
        store: Backend de persistência (MasterData, Firestore ou memória).
        clock: Relógio UTC (injetável em testes).
    """

    def __init__(
        self,
        store: FailureStoreProtocol,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._store = store
        self._clock = clock or (lambda: datetime.now(UTC))

    def build_record(
        self,
        feature: FailureFeature,
        event: OrderEvent,
        value_major_units: float | None,
        error: BaseException,
    ) -> FailureRecord:
        return FailureRecord(
            moment_utc=self._clock(),
            feature=feature,
            order_number=event.order_id,
            value_major_units=value_major_units,
            error_message=str(error) or type(error).__name__,
        )

    async def record(
        self,
        feature: FailureFeature,
        event: OrderEvent,
        value_major_units: float | None,
        error: BaseException,
    ) -> bool:
        """Tenta persistir o registro de falha.

        Returns:
            True se o store aceitou o registro; False se a persistência
            falhou (a falha secundária é apenas logada).
        """
        return await self._persist(self.build_record(feature, event, value_major_units, error))

    async def _persist(self, record: FailureRecord) -> bool:
        logger.info(
            "failure_record_saving",
            extra={
                "feature": str(record.feature),
                "order_id": record.order_number,
                "error_message": record.error_message,
            },
        )
        try:
            await self._store.save(record)
        except Exception as save_exc:
            logger.error(
                "failure_record_save_failed",
                extra={
                    "feature": str(record.feature),
                    "order_id": record.order_number,
                    "original_error": record.error_message,
                    "save_error": str(save_exc),
                    "save_error_type": type(save_exc).__name__,
                },
            )
            return False

        logger.info(
            "failure_record_saved",
            extra={"feature": str(record.feature), "order_id": record.order_number},
        )
        return True

    @asynccontextmanager
    async def guard(
        self,
        feature: FailureFeature,
        event: OrderEvent,
        value_major_units: float | None,
    ) -> AsyncIterator[FailureScope]:
        """Escopo que registra a falha em qualquer saída por exceção.

        A exceção original é sempre relançada, tenha o registro sido
        persistido ou não.
        """
        scope = FailureScope()
        try:
            yield scope
        except Exception as exc:
            scope.record = self.build_record(feature, event, value_major_units, exc)
            scope.persisted = await self._persist(scope.record)
            raise


__all__ = ["FailureRecorder", "FailureScope"]
