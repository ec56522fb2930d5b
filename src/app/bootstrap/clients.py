"""Factories de clientes externos — HTTP (commerce, contratos) e Firestore."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import TYPE_CHECKING

from app.infra.commerce import (
    create_masterdata_client,
    create_oms_client,
    create_subscriptions_client,
)
from app.infra.contract import create_contract_auth_client, create_contract_client

if TYPE_CHECKING:
    from google.cloud.firestore import Client as FirestoreClient

    from app.infra.commerce import MasterDataClient, OmsClient, SubscriptionsClient
    from app.infra.contract import ContractAuthClient, ContractClient
    from config.settings import CommerceSettings, ContractSettings, ReconciliationSettings

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ExternalClients:
    """Clientes HTTP abertos durante a vida do processo."""

    oms: OmsClient
    subscriptions: SubscriptionsClient
    masterdata: MasterDataClient
    auth: ContractAuthClient
    contract: ContractClient

    async def aclose(self) -> None:
        """Fecha todos os clientes; falha em um não impede os demais."""
        results = await asyncio.gather(
            self.oms.aclose(),
            self.subscriptions.aclose(),
            self.masterdata.aclose(),
            self.auth.aclose(),
            self.contract.aclose(),
            return_exceptions=True,
        )
        for result in results:
            if isinstance(result, Exception):
                logger.warning(
                    "http_client_close_failed",
                    extra={"error_type": type(result).__name__},
                )


def create_external_clients(
    commerce: CommerceSettings,
    contract: ContractSettings,
    reconciliation: ReconciliationSettings,
) -> ExternalClients:
    clients = ExternalClients(
        oms=create_oms_client(commerce),
        subscriptions=create_subscriptions_client(commerce),
        masterdata=create_masterdata_client(commerce, page_size=reconciliation.search_page_size),
        auth=create_contract_auth_client(contract),
        contract=create_contract_client(contract),
    )
    logger.info(
        "external_clients_created",
        extra={"commerce_account": commerce.account, "contract_api": contract.api_base_url},
    )
    return clients


@lru_cache(maxsize=1)
def create_firestore_client(project_id: str) -> FirestoreClient:
    """Cria cliente Firestore (singleton por processo).

    Returns:
        Cliente Firestore
    """
    from google.cloud import firestore

    client = firestore.Client(project=project_id or None)
    logger.info("firestore_client_created", extra={"project": project_id})
    return client
