"""Cliente da API de contratos.

Toda chamada leva bearer token por requisição; o corpo segue os nomes
em português definidos em app.domain.contract.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from app.infra.http import HttpClient, HttpClientConfig

if TYPE_CHECKING:
    import httpx

    from app.domain.contract import (
        CancellationNotification,
        ContractEditPayload,
        ContractPaymentNotification,
    )
    from config.settings import ContractSettings

logger = logging.getLogger(__name__)

REGISTER_PAYMENT_PATH = "/api/Pagamento/SalvarPagamento"
CREATE_CONTRACT_PATH = "/api/Venda/Contratar"
EDIT_CONTRACT_PATH = "/EditarContrato"
NOTIFICATION_PATH = "/Notificacao"
HEALTH_PATH = "/health"


def _bearer(access_token: str) -> dict[str, str]:
    if not access_token:
        raise ValueError("access_token vazio")
    return {"Authorization": f"Bearer {access_token}"}


class ContractClient(HttpClient):
    """Pagamentos, contratos e notificações no sistema de contratos."""

    def __init__(
        self,
        config: HttpClientConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__("contract", config, transport)

    async def _post(
        self,
        path: str,
        body: dict[str, Any],
        access_token: str,
        operation: str,
    ) -> dict[str, Any]:
        logger.info(
            "contract_call_started",
            extra={"operation": operation, "path": path, "body_keys": sorted(body)},
        )
        result = await self.request_json(
            "POST",
            path,
            operation=operation,
            json=body,
            headers=_bearer(access_token),
        )
        # Algumas rotas respondem texto puro ou lista
        return result if isinstance(result, dict) else {"result": result}

    async def register_payment(
        self,
        notification: ContractPaymentNotification,
        access_token: str,
    ) -> dict[str, Any]:
        return await self._post(
            REGISTER_PAYMENT_PATH, notification.to_wire(), access_token, "register_payment"
        )

    async def create_contract(self, body: dict[str, Any], access_token: str) -> dict[str, Any]:
        return await self._post(CREATE_CONTRACT_PATH, body, access_token, "create_contract")

    async def edit_contract(
        self,
        payload: ContractEditPayload,
        access_token: str,
    ) -> dict[str, Any]:
        return await self._post(
            EDIT_CONTRACT_PATH, payload.to_wire(), access_token, "edit_contract"
        )

    async def send_notification(
        self,
        notification: CancellationNotification,
        access_token: str,
    ) -> dict[str, Any]:
        return await self._post(
            NOTIFICATION_PATH, notification.to_wire(), access_token, "send_notification"
        )

    async def health(self) -> bool:
        """True se o sistema de contratos respondeu 2xx em /health."""
        await self.request("GET", HEALTH_PATH, operation="health")
        return True


def create_contract_client(settings: ContractSettings | None = None) -> ContractClient:
    """Factory com settings do ambiente quando não informadas."""
    from config.settings import get_contract_settings

    contract = settings or get_contract_settings()
    return ContractClient(
        HttpClientConfig(
            base_url=contract.api_base_url,
            timeout_seconds=contract.request_timeout_seconds,
            default_headers={
                "Accept": "application/json",
                "Content-Type": "application/json",
            },
        )
    )
