"""Clientes do sistema de contratos e do provedor de token."""

from __future__ import annotations

from app.infra.contract.auth_client import ContractAuthClient, create_contract_auth_client
from app.infra.contract.contract_client import ContractClient, create_contract_client

__all__ = [
    "ContractAuthClient",
    "ContractClient",
    "create_contract_auth_client",
    "create_contract_client",
]
