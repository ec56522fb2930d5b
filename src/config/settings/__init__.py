"""Agregador de settings do contract_sync.

Re-exporta todas as settings e funções de cada módulo.
Organização por sistema externo para isolamento de mudanças.
"""

from __future__ import annotations

# Base settings
from config.settings.base import (
    BaseSettings,
    Environment,
    get_base_settings,
)

# Plataforma de commerce
from config.settings.commerce import (
    CommerceSettings,
    get_commerce_settings,
)

# Sistema de contratos
from config.settings.contract import (
    ContractSettings,
    get_contract_settings,
)

# Infrastructure settings
from config.settings.infra import (
    FirestoreSettings,
    get_firestore_settings,
)

# Reconciliação
from config.settings.reconciliation import (
    FailureLogBackend,
    ProcessingMode,
    ReconciliationSettings,
    get_reconciliation_settings,
)

__all__ = [
    # Base
    "BaseSettings",
    # Commerce
    "CommerceSettings",
    # Contract
    "ContractSettings",
    "Environment",
    "FailureLogBackend",
    # Infrastructure
    "FirestoreSettings",
    "ProcessingMode",
    # Reconciliation
    "ReconciliationSettings",
    "get_base_settings",
    "get_commerce_settings",
    "get_contract_settings",
    "get_firestore_settings",
    "get_reconciliation_settings",
]
