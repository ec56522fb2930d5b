"""Settings do sistema de contratos e do provedor de token (OAuth2 ROPC)."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

DEFAULT_CONTRACT_API_BASE_URL = "https://contrato.beyond.kpmg.com.br"
DEFAULT_CONTRACT_AUTH_URL = (
    "https://kpmgamrb2c.b2clogin.com/kpmgamrb2c.onmicrosoft.com/B2C_1_ROPC/oauth2/v2.0/token"
)


@dataclass(frozen=True)
class ContractSettings:
    """Configurações do sistema de contratos.

    Attributes:
        api_base_url: URL base da API de contratos
        auth_url: Endpoint de token (password grant)
        auth_client_id: client_id registrado no provedor de identidade
        auth_scope: Escopo solicitado no token
        username: Usuário técnico da integração
        password: Senha do usuário técnico
        request_timeout_seconds: Timeout por requisição
    """

    api_base_url: str = DEFAULT_CONTRACT_API_BASE_URL
    auth_url: str = DEFAULT_CONTRACT_AUTH_URL
    auth_client_id: str = ""
    auth_scope: str = ""
    username: str = ""
    password: str = ""
    request_timeout_seconds: float = 30.0

    def validate(self) -> list[str]:
        """Valida configurações do sistema de contratos."""
        errors: list[str] = []

        if not self.api_base_url.startswith(("http://", "https://")):
            errors.append(f"CONTRACT_API_BASE_URL inválida: {self.api_base_url}")

        if not self.auth_client_id:
            errors.append("CONTRACT_AUTH_CLIENT_ID não configurado")

        if not self.username or not self.password:
            errors.append("CONTRACT_USERNAME e CONTRACT_PASSWORD são obrigatórios")

        return errors


def _load_contract_from_env() -> ContractSettings:
    """Carrega ContractSettings de variáveis de ambiente."""
    client_id = os.getenv("CONTRACT_AUTH_CLIENT_ID", "")
    return ContractSettings(
        api_base_url=os.getenv("CONTRACT_API_BASE_URL", DEFAULT_CONTRACT_API_BASE_URL),
        auth_url=os.getenv("CONTRACT_AUTH_URL", DEFAULT_CONTRACT_AUTH_URL),
        auth_client_id=client_id,
        # O provedor usa o próprio client_id como escopo quando não informado
        auth_scope=os.getenv("CONTRACT_AUTH_SCOPE", client_id),
        username=os.getenv("CONTRACT_USERNAME", ""),
        password=os.getenv("CONTRACT_PASSWORD", ""),
        request_timeout_seconds=float(os.getenv("CONTRACT_TIMEOUT_SECONDS", "30")),
    )


@lru_cache(maxsize=1)
def get_contract_settings() -> ContractSettings:
    """Retorna instância cacheada de ContractSettings."""
    return _load_contract_from_env()
