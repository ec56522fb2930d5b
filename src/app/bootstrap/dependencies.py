"""Factories de dependências — store de falhas e contexto dos handlers.

Centraliza a escolha do backend de falhas (FAILURE_LOG_BACKEND) e a
montagem do HandlerContext entregue ao dispatcher.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.bootstrap.clients import create_firestore_client
from app.infra.stores import (
    FirestoreFailureStore,
    MasterDataFailureStore,
    MemoryFailureStore,
)
from app.services.failure_recorder import FailureRecorder
from app.use_cases.order_status import ContractCredentials, HandlerContext

if TYPE_CHECKING:
    from app.bootstrap.clients import ExternalClients
    from app.protocols.commerce import DocumentStoreProtocol
    from app.protocols.failure_store import FailureStoreProtocol
    from config.settings import (
        BaseSettings,
        ContractSettings,
        FirestoreSettings,
        ReconciliationSettings,
    )

logger = logging.getLogger(__name__)


def create_failure_store(
    reconciliation: ReconciliationSettings,
    documents: DocumentStoreProtocol,
    base: BaseSettings,
    firestore: FirestoreSettings,
) -> FailureStoreProtocol:
    """Cria store de falhas conforme FAILURE_LOG_BACKEND.

    - "masterdata": entidade FL no MasterData (padrão)
    - "firestore": collection no Firestore
    - "memory": MemoryFailureStore (dev only)
    """
    backend = reconciliation.failure_log_backend
    offset = reconciliation.failure_log_utc_offset_hours

    if backend == "masterdata":
        store: FailureStoreProtocol = MasterDataFailureStore(
            documents,
            entity=reconciliation.failure_log_entity,
            utc_offset_hours=offset,
        )
    elif backend == "firestore":
        client = create_firestore_client(firestore.project_id or base.gcp_project)
        store = FirestoreFailureStore(
            client,
            collection_name=firestore.collection_failures,
            utc_offset_hours=offset,
        )
    elif backend == "memory":
        if not base.is_development:
            logger.warning(
                "memory_store_in_non_dev",
                extra={"backend": "memory", "environment": base.environment},
            )
        store = MemoryFailureStore()
    else:
        msg = f"FAILURE_LOG_BACKEND inválido: {backend}"
        raise ValueError(msg)

    logger.info("failure_store_created", extra={"backend": backend})
    return store


def build_handler_context(
    clients: ExternalClients,
    failure_store: FailureStoreProtocol,
    contract: ContractSettings,
    reconciliation: ReconciliationSettings,
) -> HandlerContext:
    return HandlerContext(
        orders=clients.oms,
        subscriptions=clients.subscriptions,
        documents=clients.masterdata,
        tokens=clients.auth,
        contracts=clients.contract,
        recorder=FailureRecorder(failure_store),
        credentials=ContractCredentials(contract.username, contract.password),
        settings=reconciliation,
    )
