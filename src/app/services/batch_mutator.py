"""Execução de mutações em lotes, com throttle por lote.

Divide a sequência em lotes consecutivos de até `chunk_size`; cada lote
dispara todas as suas chamadas de uma vez através de um RateLimiter
próprio e só libera o próximo lote quando todas terminam (sucesso ou
erro). Nunca há mais de um lote em voo.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, TypeVar

from app.services.throttle import limit

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Sequence

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(slots=True)
class BatchReport:
    """Resumo de uma execução em lotes."""

    chunk_sizes: list[int] = field(default_factory=list)

    @property
    def total(self) -> int:
        return sum(self.chunk_sizes)


def chunked(items: Sequence[T], chunk_size: int) -> list[list[T]]:
    """Divide em lotes consecutivos ([85 itens], 40) -> tamanhos 40, 40, 5."""
    if chunk_size < 1:
        raise ValueError("chunk_size deve ser >= 1")
    return [list(items[i : i + chunk_size]) for i in range(0, len(items), chunk_size)]


async def run_batched(
    items: Sequence[T],
    chunk_size: int,
    op: Callable[[T], Awaitable[object]],
    interval_ms: int,
    *,
    operation: str = "batch",
) -> BatchReport:
    """Aplica `op` a cada item, lote a lote.

    Args:
        items: Requisições de mutação, em ordem.
        chunk_size: Tamanho máximo de cada lote.
        op: Mutação assíncrona para um item.
        interval_ms: Espaçamento mínimo entre inícios dentro do lote.
        operation: Nome usado nos logs (ex: "subscription_add_item").

    Returns:
        BatchReport com o tamanho de cada lote processado.

    Raises:
        Exception: A primeira falha do lote (na ordem dos itens), depois
            que todas as chamadas do lote terminaram. Lotes seguintes não
            são iniciados.
    """
    report = BatchReport()
    chunks = chunked(items, chunk_size)

    for index, chunk in enumerate(chunks):
        limited_op = limit(op, interval_ms)
        logger.info(
            "batch_chunk_started",
            extra={
                "operation": operation,
                "chunk_index": index,
                "chunk_size": len(chunk),
                "chunk_count": len(chunks),
            },
        )
        results = await asyncio.gather(
            *(limited_op(item) for item in chunk),
            return_exceptions=True,
        )
        report.chunk_sizes.append(len(chunk))

        errors = [result for result in results if isinstance(result, BaseException)]
        if errors:
            logger.error(
                "batch_chunk_failed",
                extra={
                    "operation": operation,
                    "chunk_index": index,
                    "failed_calls": len(errors),
                    "error_type": type(errors[0]).__name__,
                },
            )
            raise errors[0]

    return report


__all__ = ["BatchReport", "chunked", "run_batched"]
