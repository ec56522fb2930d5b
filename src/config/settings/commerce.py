"""Settings da plataforma de commerce (OMS, assinaturas, MasterData).

Todas as APIs da plataforma usam o mesmo par app-key/app-token.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

DEFAULT_COMMERCE_ENVIRONMENT = "vtexcommercestable"


@dataclass(frozen=True)
class CommerceSettings:
    """Configurações de acesso às APIs da plataforma.

    Attributes:
        account: Nome da conta na plataforma
        environment: Host da plataforma (ex: vtexcommercestable)
        app_key: Chave de aplicação (header X-VTEX-API-AppKey)
        app_token: Token de aplicação (header X-VTEX-API-AppToken)
        request_timeout_seconds: Timeout por requisição
        max_retries: Retentativas para leituras (GET) apenas
    """

    account: str = ""
    environment: str = DEFAULT_COMMERCE_ENVIRONMENT
    app_key: str = ""
    app_token: str = ""
    request_timeout_seconds: float = 10.0
    max_retries: int = 2

    @property
    def base_url(self) -> str:
        """URL base da conta (ex: https://loja.vtexcommercestable.com.br)."""
        return f"https://{self.account}.{self.environment}.com.br"

    def validate(self) -> list[str]:
        """Valida configurações da plataforma."""
        errors: list[str] = []

        if not self.account:
            errors.append("VTEX_ACCOUNT não configurado")

        if not self.app_key or not self.app_token:
            errors.append("VTEX_APP_KEY e VTEX_APP_TOKEN são obrigatórios")

        if self.request_timeout_seconds <= 0:
            errors.append("COMMERCE_TIMEOUT_SECONDS deve ser > 0")

        if self.max_retries < 0:
            errors.append("COMMERCE_MAX_RETRIES deve ser >= 0")

        return errors


def _load_commerce_from_env() -> CommerceSettings:
    """Carrega CommerceSettings de variáveis de ambiente."""
    return CommerceSettings(
        account=os.getenv("VTEX_ACCOUNT", ""),
        environment=os.getenv("VTEX_ENVIRONMENT", DEFAULT_COMMERCE_ENVIRONMENT),
        app_key=os.getenv("VTEX_APP_KEY", ""),
        app_token=os.getenv("VTEX_APP_TOKEN", ""),
        request_timeout_seconds=float(os.getenv("COMMERCE_TIMEOUT_SECONDS", "10")),
        max_retries=int(os.getenv("COMMERCE_MAX_RETRIES", "2")),
    )


@lru_cache(maxsize=1)
def get_commerce_settings() -> CommerceSettings:
    """Retorna instância cacheada de CommerceSettings."""
    return _load_commerce_from_env()
