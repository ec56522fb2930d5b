"""Settings da reconciliação de pedidos com o sistema de contratos.

Tamanhos de lote, intervalo do throttle, entidades do MasterData e
backend de registro de falhas.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from config.settings.base.core import BaseSettings

FailureLogBackend = Literal["memory", "masterdata", "firestore"]
ProcessingMode = Literal["inline", "async"]


@dataclass(frozen=True)
class ReconciliationSettings:
    """Configurações dos handlers de reconciliação.

    Attributes:
        throttle_interval_ms: Espaçamento mínimo entre inícios de chamadas
            mutáveis à API de assinaturas
        add_batch_size: Itens por lote ao adicionar SKUs à assinatura
        update_batch_size: Itens por lote ao atualizar quantidades
        search_page_size: Tamanho de página nas buscas do MasterData
        failure_log_entity: Entidade de registros de falha
        order_relation_entity: Entidade de relação pedido/orderForm/email
        plan_upgrade_entity: Entidade de pares de plano básico/upgrade
        failure_log_backend: Onde persistir registros de falha
        failure_log_utc_offset_hours: Deslocamento aplicado ao "momento"
        processing_mode: inline (responde após processar) ou async
    """

    throttle_interval_ms: int = 1000
    add_batch_size: int = 40
    update_batch_size: int = 47
    search_page_size: int = 1000
    failure_log_entity: str = "FL"
    order_relation_entity: str = "OC"
    plan_upgrade_entity: str = "PU"
    failure_log_backend: FailureLogBackend = "masterdata"
    failure_log_utc_offset_hours: int = -3
    processing_mode: ProcessingMode = "async"

    def validate(self, base: BaseSettings) -> list[str]:
        """Valida configurações de reconciliação.

        Args:
            base: BaseSettings para verificar ambiente e projeto GCP.

        Returns:
            Lista de erros de validação.
        """
        errors: list[str] = []

        if self.throttle_interval_ms < 0:
            errors.append("RECONCILE_THROTTLE_INTERVAL_MS deve ser >= 0")

        if self.add_batch_size < 1 or self.update_batch_size < 1:
            errors.append("Tamanhos de lote devem ser >= 1")

        if self.search_page_size < 1:
            errors.append("RECONCILE_SEARCH_PAGE_SIZE deve ser >= 1")

        if self.failure_log_backend not in {"memory", "masterdata", "firestore"}:
            errors.append(f"FAILURE_LOG_BACKEND inválido: {self.failure_log_backend}")

        if self.failure_log_backend == "memory" and not base.is_development:
            errors.append("FAILURE_LOG_BACKEND=memory proibido em staging/production")

        if self.failure_log_backend == "firestore" and not base.gcp_project:
            errors.append("FAILURE_LOG_BACKEND=firestore requer GCP_PROJECT configurado")

        if self.processing_mode not in {"inline", "async"}:
            errors.append(f"EVENT_PROCESSING_MODE inválido: {self.processing_mode}")

        return errors


def _load_reconciliation_from_env() -> ReconciliationSettings:
    """Carrega ReconciliationSettings de variáveis de ambiente."""
    backend_str = os.getenv("FAILURE_LOG_BACKEND", "masterdata").lower()
    backend: FailureLogBackend = (
        backend_str if backend_str in ("memory", "masterdata", "firestore") else "masterdata"
    )
    mode_str = os.getenv("EVENT_PROCESSING_MODE", "async").lower()
    mode: ProcessingMode = mode_str if mode_str in ("inline", "async") else "async"
    return ReconciliationSettings(
        throttle_interval_ms=int(os.getenv("RECONCILE_THROTTLE_INTERVAL_MS", "1000")),
        add_batch_size=int(os.getenv("RECONCILE_ADD_BATCH_SIZE", "40")),
        update_batch_size=int(os.getenv("RECONCILE_UPDATE_BATCH_SIZE", "47")),
        search_page_size=int(os.getenv("RECONCILE_SEARCH_PAGE_SIZE", "1000")),
        failure_log_entity=os.getenv("FAILURE_LOG_ENTITY", "FL"),
        order_relation_entity=os.getenv("ORDER_RELATION_ENTITY", "OC"),
        plan_upgrade_entity=os.getenv("PLAN_UPGRADE_ENTITY", "PU"),
        failure_log_backend=backend,
        failure_log_utc_offset_hours=int(os.getenv("FAILURE_LOG_UTC_OFFSET_HOURS", "-3")),
        processing_mode=mode,
    )


@lru_cache(maxsize=1)
def get_reconciliation_settings() -> ReconciliationSettings:
    """Retorna instância cacheada de ReconciliationSettings."""
    return _load_reconciliation_from_env()
