"""Protocolos e contratos do core da aplicação."""

from .commerce import (
    DocumentStoreProtocol,
    OrderServiceProtocol,
    SubscriptionServiceProtocol,
)
from .contract import ContractServiceProtocol, TokenServiceProtocol
from .failure_store import FailureStoreProtocol

__all__ = [
    "ContractServiceProtocol",
    "DocumentStoreProtocol",
    "FailureStoreProtocol",
    "OrderServiceProtocol",
    "SubscriptionServiceProtocol",
    "TokenServiceProtocol",
]
