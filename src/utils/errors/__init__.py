"""Exceções utilitárias compartilhadas."""

from .exceptions import (
    ExternalServiceError,
    FirestoreUnavailableError,
    InfrastructureError,
    UpgradePayloadError,
)

__all__ = [
    "ExternalServiceError",
    "FirestoreUnavailableError",
    "InfrastructureError",
    "UpgradePayloadError",
]
