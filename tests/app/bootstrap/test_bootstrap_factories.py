"""Testes das factories do bootstrap (store de falhas, clientes, runtime)."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest

from app.bootstrap import Runtime, collect_settings_errors
from app.bootstrap.clients import create_external_clients
from app.bootstrap.dependencies import build_handler_context, create_failure_store
from app.infra.stores import FirestoreFailureStore, MasterDataFailureStore, MemoryFailureStore
from app.protocols import (
    ContractServiceProtocol,
    DocumentStoreProtocol,
    OrderServiceProtocol,
    SubscriptionServiceProtocol,
    TokenServiceProtocol,
)
from app.use_cases.order_status import HandlerContext
from config.settings import (
    BaseSettings,
    CommerceSettings,
    ContractSettings,
    FirestoreSettings,
    ReconciliationSettings,
)
from tests.fakes.fake_commerce import FakeDocumentStore

COMMERCE = CommerceSettings(account="loja", app_key="k", app_token="t")
CONTRACT = ContractSettings(
    auth_client_id="client", username="integration-user", password="secret"
)


class TestCreateFailureStore:
    def test_masterdata_backend(self) -> None:
        store = create_failure_store(
            ReconciliationSettings(failure_log_backend="masterdata"),
            FakeDocumentStore(),
            BaseSettings(),
            FirestoreSettings(),
        )
        assert isinstance(store, MasterDataFailureStore)

    def test_memory_backend(self) -> None:
        store = create_failure_store(
            ReconciliationSettings(failure_log_backend="memory"),
            FakeDocumentStore(),
            BaseSettings(environment="development"),
            FirestoreSettings(),
        )
        assert isinstance(store, MemoryFailureStore)

    def test_memory_backend_outside_development_warns(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level("WARNING"):
            create_failure_store(
                ReconciliationSettings(failure_log_backend="memory"),
                FakeDocumentStore(),
                BaseSettings(environment="production"),
                FirestoreSettings(),
            )
        assert "memory_store_in_non_dev" in caplog.text

    def test_firestore_backend_uses_project(self) -> None:
        with patch(
            "app.bootstrap.dependencies.create_firestore_client",
            return_value=MagicMock(),
        ) as factory:
            store = create_failure_store(
                ReconciliationSettings(failure_log_backend="firestore"),
                FakeDocumentStore(),
                BaseSettings(gcp_project="proj-1"),
                FirestoreSettings(),
            )
        factory.assert_called_once_with("proj-1")
        assert isinstance(store, FirestoreFailureStore)

    def test_unknown_backend_raises(self) -> None:
        with pytest.raises(ValueError, match="FAILURE_LOG_BACKEND"):
            create_failure_store(
                ReconciliationSettings(failure_log_backend="s3"),  # type: ignore[arg-type]
                FakeDocumentStore(),
                BaseSettings(),
                FirestoreSettings(),
            )


class TestRuntimeWiring:
    @pytest.mark.asyncio
    async def test_clients_and_context_are_wired(self) -> None:
        reconciliation = ReconciliationSettings(failure_log_backend="memory")
        clients = create_external_clients(COMMERCE, CONTRACT, reconciliation)
        ctx = build_handler_context(clients, MemoryFailureStore(), CONTRACT, reconciliation)

        assert isinstance(ctx, HandlerContext)
        assert ctx.orders is clients.oms
        assert ctx.contracts is clients.contract
        assert ctx.credentials.username == "integration-user"
        assert "secret" not in repr(ctx.credentials)
        assert isinstance(clients.oms, OrderServiceProtocol)
        assert isinstance(clients.subscriptions, SubscriptionServiceProtocol)
        assert isinstance(clients.masterdata, DocumentStoreProtocol)
        assert isinstance(clients.auth, TokenServiceProtocol)
        assert isinstance(clients.contract, ContractServiceProtocol)

        runtime = Runtime(clients=clients, context=ctx)
        await runtime.aclose()


class TestCollectSettingsErrors:
    def test_errors_are_prefixed_by_group(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("app.bootstrap.get_base_settings", lambda: BaseSettings())
        monkeypatch.setattr("app.bootstrap.get_commerce_settings", lambda: CommerceSettings())
        monkeypatch.setattr("app.bootstrap.get_contract_settings", lambda: CONTRACT)
        monkeypatch.setattr(
            "app.bootstrap.get_reconciliation_settings",
            lambda: ReconciliationSettings(failure_log_backend="memory"),
        )

        errors = collect_settings_errors()

        assert "commerce: VTEX_ACCOUNT não configurado" in errors
        assert not any(error.startswith("contract:") for error in errors)
        assert not any(error.startswith("firestore:") for error in errors)
