"""Testes das settings de commerce, contratos e reconciliação."""

from __future__ import annotations

import pytest

from config.settings import (
    BaseSettings,
    CommerceSettings,
    ContractSettings,
    FirestoreSettings,
    ReconciliationSettings,
)
from config.settings.base.core import _parse_environment
from config.settings.contract import _load_contract_from_env
from config.settings.reconciliation import _load_reconciliation_from_env


class TestBaseSettings:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [("prod", "production"), ("STAGE", "staging"), ("qualquer", "development")],
    )
    def test_parse_environment(self, raw: str, expected: str) -> None:
        assert _parse_environment(raw) == expected


class TestCommerceSettings:
    def test_base_url(self) -> None:
        assert CommerceSettings(account="loja").base_url == (
            "https://loja.vtexcommercestable.com.br"
        )

    def test_missing_credentials(self) -> None:
        errors = CommerceSettings(account="loja").validate()
        assert errors == ["VTEX_APP_KEY e VTEX_APP_TOKEN são obrigatórios"]


class TestContractSettings:
    def test_scope_defaults_to_client_id(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CONTRACT_AUTH_CLIENT_ID", "client-9")
        monkeypatch.delenv("CONTRACT_AUTH_SCOPE", raising=False)

        assert _load_contract_from_env().auth_scope == "client-9"

    def test_invalid_base_url(self) -> None:
        settings = ContractSettings(
            api_base_url="contratos", auth_client_id="c", username="u", password="p"
        )
        assert settings.validate() == ["CONTRACT_API_BASE_URL inválida: contratos"]


class TestReconciliationSettings:
    def test_defaults(self) -> None:
        settings = ReconciliationSettings()
        assert settings.throttle_interval_ms == 1000
        assert settings.add_batch_size == 40
        assert settings.update_batch_size == 47
        assert settings.search_page_size == 1000
        assert settings.failure_log_entity == "FL"

    def test_memory_backend_forbidden_in_production(self) -> None:
        errors = ReconciliationSettings(failure_log_backend="memory").validate(
            BaseSettings(environment="production")
        )
        assert "FAILURE_LOG_BACKEND=memory proibido em staging/production" in errors

    def test_firestore_backend_requires_project(self) -> None:
        errors = ReconciliationSettings(failure_log_backend="firestore").validate(BaseSettings())
        assert any("GCP_PROJECT" in error for error in errors)

    def test_invalid_batch_size(self) -> None:
        errors = ReconciliationSettings(add_batch_size=0).validate(BaseSettings())
        assert "Tamanhos de lote devem ser >= 1" in errors

    def test_env_loading(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("RECONCILE_THROTTLE_INTERVAL_MS", "250")
        monkeypatch.setenv("FAILURE_LOG_BACKEND", "FIRESTORE")
        monkeypatch.setenv("EVENT_PROCESSING_MODE", "bogus")

        settings = _load_reconciliation_from_env()

        assert settings.throttle_interval_ms == 250
        assert settings.failure_log_backend == "firestore"
        assert settings.processing_mode == "async"


class TestFirestoreSettings:
    def test_project_falls_back_to_gcp_project(self) -> None:
        assert FirestoreSettings().validate("proj") == []
        assert FirestoreSettings().validate("") != []
