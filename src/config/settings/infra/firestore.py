"""Settings do Firestore.

Usado apenas quando FAILURE_LOG_BACKEND=firestore.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache


@dataclass(frozen=True)
class FirestoreSettings:
    """Configurações do Firestore.

    Attributes:
        project_id: ID do projeto GCP (usa GCP_PROJECT se não definido)
        collection_failures: Collection para registros de falha
    """

    project_id: str = ""
    collection_failures: str = "reconciliation_failures"

    def validate(self, gcp_project: str) -> list[str]:
        """Valida configurações do Firestore.

        Args:
            gcp_project: Projeto GCP padrão para fallback.

        Returns:
            Lista de erros de validação.
        """
        errors: list[str] = []
        effective_project = self.project_id or gcp_project

        if not effective_project:
            errors.append("FIRESTORE_PROJECT_ID ou GCP_PROJECT deve estar configurado")

        if not self.collection_failures:
            errors.append("FIRESTORE_COLLECTION_FAILURES não pode ser vazio")

        return errors


def _load_firestore_from_env() -> FirestoreSettings:
    """Carrega FirestoreSettings de variáveis de ambiente."""
    return FirestoreSettings(
        project_id=os.getenv("FIRESTORE_PROJECT_ID", ""),
        collection_failures=os.getenv(
            "FIRESTORE_COLLECTION_FAILURES", "reconciliation_failures"
        ),
    )


@lru_cache(maxsize=1)
def get_firestore_settings() -> FirestoreSettings:
    """Retorna instância cacheada de FirestoreSettings."""
    return _load_firestore_from_env()
