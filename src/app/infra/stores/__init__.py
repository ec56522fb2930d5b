"""Stores — implementações concretas de persistência de falhas.

Módulos disponíveis:
    - masterdata_failure_store: entidade FL no MasterData (padrão)
    - firestore_failure_store: collection no Firestore
    - memory_stores: Stores em memória para desenvolvimento/testes
"""

from __future__ import annotations

from app.infra.stores.firestore_failure_store import FirestoreFailureStore
from app.infra.stores.masterdata_failure_store import MasterDataFailureStore
from app.infra.stores.memory_stores import MemoryFailureStore

__all__ = [
    "FirestoreFailureStore",
    "MasterDataFailureStore",
    "MemoryFailureStore",
]
