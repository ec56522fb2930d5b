"""Provedor de token do sistema de contratos (OAuth2 password grant)."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.domain.contract import AccessToken
from app.infra.http import HttpClient, HttpClientConfig

if TYPE_CHECKING:
    import httpx

    from config.settings import ContractSettings

logger = logging.getLogger(__name__)


class ContractAuthClient(HttpClient):
    """Obtém bearer token via POST form-urlencoded no endpoint de token.

    Args:
        token_url: URL completa do endpoint de token.
        client_id: client_id registrado no provedor.
        scope: Escopo solicitado (o provedor usa o client_id por padrão).
    """

    def __init__(
        self,
        token_url: str,
        client_id: str,
        scope: str = "",
        config: HttpClientConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__("contract_auth", config, transport)
        self._token_url = token_url
        self._client_id = client_id
        self._scope = scope or client_id

    async def get_token(self, username: str, password: str) -> AccessToken:
        data = await self.request_json(
            "POST",
            self._token_url,
            operation="get_token",
            data={
                "username": username,
                "password": password,
                "grant_type": "password",
                "scope": self._scope,
                "client_id": self._client_id,
                "response_type": "token",
            },
        )
        token = AccessToken.model_validate(data)
        logger.info("contract_token_obtained", extra={"expires_in": token.expires_in})
        return token


def create_contract_auth_client(
    settings: ContractSettings | None = None,
) -> ContractAuthClient:
    """Factory com settings do ambiente quando não informadas."""
    from config.settings import get_contract_settings

    contract = settings or get_contract_settings()
    return ContractAuthClient(
        token_url=contract.auth_url,
        client_id=contract.auth_client_id,
        scope=contract.auth_scope,
        config=HttpClientConfig(timeout_seconds=contract.request_timeout_seconds),
    )
