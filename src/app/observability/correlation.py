"""Correlation id por evento de pedido.

Cada evento recebido ganha um tracker "{estado}-{orderId}-{epoch_ms}" que
vira o correlation_id de todas as linhas de log do processamento.
Usa ContextVar para ser async-safe (várias tasks de eventos em paralelo).

Uso:
    token = set_correlation_id(build_tracker_id("payment-approved", "123"))
    try:
        ...
    finally:
        reset_correlation_id(token)
"""

from __future__ import annotations

import time
import uuid
from contextvars import ContextVar, Token

_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")


def get_correlation_id() -> str:
    """Retorna o correlation_id do contexto atual (ou string vazia)."""
    return _correlation_id.get()


def set_correlation_id(correlation_id: str | None = None) -> Token[str]:
    """Define o correlation_id no contexto atual.

    Args:
        correlation_id: ID a definir. Se None, gera um novo UUID.

    Returns:
        Token para reset posterior via reset_correlation_id().
    """
    value = correlation_id or str(uuid.uuid4())
    return _correlation_id.set(value)


def reset_correlation_id(token: Token[str]) -> None:
    """Restaura o correlation_id ao valor anterior."""
    _correlation_id.reset(token)


def build_tracker_id(state: str, order_id: str, now_ms: int | None = None) -> str:
    """Monta o tracker de um evento de mudança de status.

    Args:
        state: Estado do pedido (ex: "payment-approved")
        order_id: ID do pedido
        now_ms: Epoch em ms (injetável em testes)

    Returns:
        Tracker no formato "{state}-{order_id}-{epoch_ms}".
    """
    stamp = now_ms if now_ms is not None else int(time.time() * 1000)
    return f"{state}-{order_id}-{stamp}"
