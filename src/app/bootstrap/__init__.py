"""Bootstrap da aplicação — inicialização e wiring.

Este módulo é o composition root: configura logging, valida settings e
conecta implementações concretas aos protocolos.

Uso:
    from app.bootstrap import initialize_app, create_runtime

    # Na inicialização do serviço
    initialize_app()
    runtime = create_runtime()
    ...
    await runtime.aclose()
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import TYPE_CHECKING

from app.observability import get_correlation_id
from config.logging import configure_logging
from config.settings import (
    get_base_settings,
    get_commerce_settings,
    get_contract_settings,
    get_firestore_settings,
    get_reconciliation_settings,
)

if TYPE_CHECKING:
    from app.bootstrap.clients import ExternalClients
    from app.use_cases.order_status import HandlerContext

# Nome do serviço para logs e métricas
SERVICE_NAME = "contract_sync"

# Nível de log padrão (pode ser sobrescrito por env)
DEFAULT_LOG_LEVEL = "INFO"
STRICT_VALIDATION_ENVS = {"staging", "production"}

logger = logging.getLogger(__name__)


def initialize_app() -> None:
    """Inicializa a aplicação com todas as configurações necessárias.

    Deve ser chamada uma vez no início do serviço.
    """
    log_level = os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()

    configure_logging(
        level=log_level,
        service_name=SERVICE_NAME,
        correlation_id_getter=get_correlation_id,
    )


def initialize_test_app() -> None:
    """Inicializa a aplicação para testes (nível DEBUG)."""
    configure_logging(
        level="DEBUG",
        service_name=f"{SERVICE_NAME}_test",
        correlation_id_getter=get_correlation_id,
    )


def collect_settings_errors() -> list[str]:
    """Erros de todas as settings, prefixados pelo grupo."""
    base = get_base_settings()
    reconciliation = get_reconciliation_settings()
    errors: list[str] = []

    errors.extend(f"base: {error}" for error in base.validate())
    errors.extend(f"commerce: {error}" for error in get_commerce_settings().validate())
    errors.extend(f"contract: {error}" for error in get_contract_settings().validate())
    errors.extend(
        f"reconciliation: {error}" for error in reconciliation.validate(base)
    )
    if reconciliation.failure_log_backend == "firestore":
        firestore_errors = get_firestore_settings().validate(base.gcp_project)
        errors.extend(f"firestore: {error}" for error in firestore_errors)
    return errors


def validate_runtime_settings() -> None:
    """Valida settings obrigatórias no startup.

    Em `staging`/`production` falha rápido para impedir boot inválido.
    Em `development` mantém alerta sem bloquear execução local.
    """
    environment = get_base_settings().environment
    strict_mode = environment in STRICT_VALIDATION_ENVS
    errors = collect_settings_errors()

    if not errors:
        logger.info(
            "settings_validated",
            extra={"component": "bootstrap", "result": "ok", "environment": environment},
        )
        return

    logger.warning(
        "settings_validation_failed",
        extra={
            "component": "bootstrap",
            "result": "failed",
            "environment": environment,
            "error_count": len(errors),
            "errors": errors,
        },
    )
    if strict_mode:
        details = "\n".join(f"- {error}" for error in errors)
        raise RuntimeError(f"Configuração inválida para {environment}:\n{details}")


@dataclass(frozen=True, slots=True)
class Runtime:
    """Clientes abertos e contexto dos handlers para a vida do processo."""

    clients: ExternalClients
    context: HandlerContext

    async def aclose(self) -> None:
        await self.clients.aclose()


def create_runtime() -> Runtime:
    """Monta clientes, store de falhas e HandlerContext a partir do ambiente."""
    from app.bootstrap.clients import create_external_clients
    from app.bootstrap.dependencies import build_handler_context, create_failure_store

    base = get_base_settings()
    commerce = get_commerce_settings()
    contract = get_contract_settings()
    reconciliation = get_reconciliation_settings()

    clients = create_external_clients(commerce, contract, reconciliation)
    failure_store = create_failure_store(
        reconciliation,
        clients.masterdata,
        base,
        get_firestore_settings(),
    )
    context = build_handler_context(clients, failure_store, contract, reconciliation)
    return Runtime(clients=clients, context=context)
