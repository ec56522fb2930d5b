"""Contexto explícito entregue a cada handler de status de pedido.

Clientes, recorder e settings são resolvidos uma vez no bootstrap e
passados por parâmetro; nenhum handler lê configuração de estado global.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from app.domain.contract import ContractEditPayload
    from app.protocols.commerce import (
        DocumentStoreProtocol,
        OrderServiceProtocol,
        SubscriptionServiceProtocol,
    )
    from app.protocols.contract import ContractServiceProtocol, TokenServiceProtocol
    from app.services.failure_recorder import FailureRecorder
    from config.settings import ReconciliationSettings


@dataclass(frozen=True, slots=True)
class ContractCredentials:
    """Usuário técnico do sistema de contratos (senha fora do repr)."""

    username: str
    password: str = field(repr=False)


@dataclass(frozen=True, slots=True)
class HandlerContext:
    orders: OrderServiceProtocol
    subscriptions: SubscriptionServiceProtocol
    documents: DocumentStoreProtocol
    tokens: TokenServiceProtocol
    contracts: ContractServiceProtocol
    recorder: FailureRecorder
    credentials: ContractCredentials
    settings: ReconciliationSettings


class ReconciliationOutcome(StrEnum):
    REGISTERED = "registered"
    COMPLETED = "completed"
    NOTIFIED = "notified"
    SKIPPED = "skipped"


@dataclass(frozen=True, slots=True)
class ReconciliationResult:
    """Resultado de um handler que terminou sem exceção.

    `skipped` indica vínculo ausente (nada a reconciliar); `edit_payload`
    carrega o corpo de edição de contrato montado, quando houver.
    """

    outcome: ReconciliationOutcome
    reason: str | None = None
    edit_payload: ContractEditPayload | None = None


__all__ = [
    "ContractCredentials",
    "HandlerContext",
    "ReconciliationOutcome",
    "ReconciliationResult",
]
