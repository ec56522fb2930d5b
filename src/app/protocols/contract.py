"""Contratos do sistema de contratos e do provedor de token."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from app.domain.contract import (
        AccessToken,
        CancellationNotification,
        ContractEditPayload,
        ContractPaymentNotification,
    )


@runtime_checkable
class TokenServiceProtocol(Protocol):
    async def get_token(self, username: str, password: str) -> AccessToken: ...


@runtime_checkable
class ContractServiceProtocol(Protocol):
    """Operações da API de contratos. Todas exigem bearer token."""

    async def register_payment(
        self,
        notification: ContractPaymentNotification,
        access_token: str,
    ) -> dict[str, Any]: ...

    async def create_contract(
        self,
        body: dict[str, Any],
        access_token: str,
    ) -> dict[str, Any]: ...

    async def edit_contract(
        self,
        payload: ContractEditPayload,
        access_token: str,
    ) -> dict[str, Any]: ...

    async def send_notification(
        self,
        notification: CancellationNotification,
        access_token: str,
    ) -> dict[str, Any]: ...
