"""Testes dos stores de registros de falha."""

from __future__ import annotations

import json
from datetime import UTC, datetime
from unittest.mock import MagicMock

import pytest

from app.domain.failure import FailureFeature, FailureRecord
from app.infra.stores import FirestoreFailureStore, MasterDataFailureStore, MemoryFailureStore
from tests.fakes.fake_commerce import FakeDocumentStore
from utils.errors import FirestoreUnavailableError

RECORD = FailureRecord(
    moment_utc=datetime(2026, 3, 10, 15, 0, tzinfo=UTC),
    feature=FailureFeature.FIRST_PAYMENT,
    order_number="123",
    value_major_units=150.0,
    error_message="HTTP 500",
)


class TestMasterDataFailureStore:
    @pytest.mark.asyncio
    async def test_save_creates_document_in_entity(self) -> None:
        documents = FakeDocumentStore()
        store = MasterDataFailureStore(documents, entity="FL", utc_offset_hours=-3)

        await store.save(RECORD)

        ((entity, fields),) = documents.created
        assert entity == "FL"
        assert fields["funcionalidade"] == "Primeira compra"
        assert fields["momento"].startswith("2026-03-10T12:00:00")
        assert json.loads(fields["erro"])["Valor"] == "150"

    @pytest.mark.asyncio
    async def test_save_propagates_errors(self) -> None:
        documents = FakeDocumentStore()
        documents.fail_on_create = ConnectionError("fora")
        store = MasterDataFailureStore(documents)

        with pytest.raises(ConnectionError):
            await store.save(RECORD)


class TestFirestoreFailureStore:
    def test_save_sync_writes_document(self) -> None:
        client = MagicMock()
        store = FirestoreFailureStore(client, collection_name="failures")

        store.save_sync(RECORD)

        client.collection.assert_called_once_with("failures")
        doc_id = client.collection.return_value.document.call_args[0][0]
        assert doc_id.startswith("20260310_123_")
        document = client.collection.return_value.document.return_value.set.call_args[0][0]
        assert document["feature"] == "FirstPayment"
        assert document["order_number"] == "123"
        assert document["value_major_units"] == 150.0
        assert document["funcionalidade"] == "Primeira compra"
        assert "created_at" in document

    def test_save_sync_wraps_errors(self) -> None:
        client = MagicMock()
        client.collection.return_value.document.return_value.set.side_effect = RuntimeError("x")
        store = FirestoreFailureStore(client)

        with pytest.raises(FirestoreUnavailableError):
            store.save_sync(RECORD)

    @pytest.mark.asyncio
    async def test_save_runs_in_thread(self) -> None:
        client = MagicMock()
        store = FirestoreFailureStore(client)

        await store.save(RECORD)

        client.collection.return_value.document.return_value.set.assert_called_once()


class TestMemoryFailureStore:
    @pytest.mark.asyncio
    async def test_records_are_kept_in_order_and_cleared(self) -> None:
        store = MemoryFailureStore()
        await store.save(RECORD)

        records = store.records
        records.clear()
        assert len(store.records) == 1

        store.clear()
        assert store.records == []
