"""Throttle assíncrono para chamadas mutáveis contra APIs com rate limit.

Garante um espaçamento mínimo entre os *inícios* de chamadas sucessivas
da mesma função envolvida. Não garante ordem FIFO entre chamadas
submetidas ao mesmo tempo: quem for acordado primeiro pelo event loop
passa pelo portão primeiro.
"""

from __future__ import annotations

import asyncio
import functools
import time
from typing import TYPE_CHECKING, ParamSpec, TypeVar

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

P = ParamSpec("P")
T = TypeVar("T")


class RateLimiter:
    """Portão com um único "último início" compartilhado.

    A cada chamada: se já passou `interval_ms` desde o último início, roda
    imediatamente e marca o novo início; caso contrário dorme o tempo que
    falta e tenta de novo.

    Args:
        interval_ms: Espaçamento mínimo entre inícios, em milissegundos.
        clock: Relógio monotônico em segundos (injetável em testes).
        sleep: Função de espera assíncrona (injetável em testes).
    """

    def __init__(
        self,
        interval_ms: int,
        *,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        if interval_ms < 0:
            raise ValueError("interval_ms deve ser >= 0")
        self._interval = interval_ms / 1000
        self._clock = clock
        self._sleep = sleep
        self._last_start: float | None = None

    @property
    def interval_ms(self) -> int:
        return round(self._interval * 1000)

    def remaining_wait(self) -> float:
        """Segundos até o portão liberar (<= 0 significa liberado)."""
        if self._last_start is None:
            return 0.0
        return self._last_start + self._interval - self._clock()

    async def run(
        self,
        fn: Callable[P, Awaitable[T]],
        *args: P.args,
        **kwargs: P.kwargs,
    ) -> T:
        while True:
            wait = self.remaining_wait()
            if wait <= 0:
                # Marcação e disparo sem await entre eles: nenhuma outra
                # task vê o portão liberado depois deste ponto.
                self._last_start = self._clock()
                return await fn(*args, **kwargs)
            await self._sleep(wait)


def limit(
    fn: Callable[P, Awaitable[T]],
    interval_ms: int,
) -> Callable[P, Awaitable[T]]:
    """Envolve `fn` com um RateLimiter próprio.

    Exemplo:
        add_item = limit(subscriptions.add_item, 1000)
        await asyncio.gather(*(add_item(sid, sku, 3) for sku in skus))
    """
    limiter = RateLimiter(interval_ms)

    @functools.wraps(fn)
    async def wrapped(*args: P.args, **kwargs: P.kwargs) -> T:
        return await limiter.run(fn, *args, **kwargs)

    wrapped.limiter = limiter  # type: ignore[attr-defined]
    return wrapped


__all__ = ["RateLimiter", "limit"]
