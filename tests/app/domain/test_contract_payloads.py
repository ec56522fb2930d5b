"""Testes dos payloads do sistema de contratos e do registro de falha."""

from __future__ import annotations

import json
from datetime import UTC, datetime

from app.domain.contract import (
    CancellationNotification,
    ContractPaymentNotification,
    to_major_units,
)
from app.domain.failure import FailureFeature, FailureRecord, format_amount


class TestPaymentNotification:
    def test_for_order_converts_minor_units(self) -> None:
        notification = ContractPaymentNotification.for_order(
            order_form_id="of-1",
            order_number="123",
            value_minor_units=15000,
            date="2026-03-10T15:30:00Z",
        )

        wire = notification.to_wire()
        assert wire == {
            "Tipo": "1",
            "OrderFormId": "of-1",
            "NumeroPedido": "123",
            "Valor": 150.0,
            "Data": "2026-03-10T15:30:00Z",
            "Mensagem": None,
        }

    def test_to_major_units_keeps_cents(self) -> None:
        assert to_major_units(12345) == 123.45
        assert to_major_units(0) == 0


class TestCancellationNotification:
    def test_wire_fields(self) -> None:
        notification = CancellationNotification(order_form_id="of-1", date="2026-01-01")
        assert notification.to_wire() == {
            "NotificacaoTipoId": "1",
            "OrderFormId": "of-1",
            "Data": "2026-01-01",
        }


class TestFailureRecord:
    def _record(self, value: float | None) -> FailureRecord:
        return FailureRecord(
            moment_utc=datetime(2026, 3, 10, 15, 0, tzinfo=UTC),
            feature=FailureFeature.FIRST_PAYMENT,
            order_number="123",
            value_major_units=value,
            error_message="HTTP 500",
        )

    def test_document_fields_with_offset(self) -> None:
        fields = self._record(150.0).to_document_fields(utc_offset_hours=-3)

        assert fields["momento"].startswith("2026-03-10T12:00:00")
        assert fields["funcionalidade"] == "Primeira compra"
        assert json.loads(fields["erro"]) == {
            "NumeroPedido": "123",
            "Valor": "150",
            "erro": "HTTP 500",
        }

    def test_error_payload_without_value(self) -> None:
        payload = self._record(None).error_payload()
        assert "Valor" not in payload
        assert payload["NumeroPedido"] == "123"

    def test_feature_labels(self) -> None:
        assert FailureFeature.RECURRENCE.label == "Recorrência"
        assert FailureFeature.UPGRADE.label == "Upgrade"

    def test_value_text_drops_trailing_zero_for_whole_amounts(self) -> None:
        assert self._record(15000 / 100).error_payload()["Valor"] == "150"
        assert self._record(15050 / 100).error_payload()["Valor"] == "150.5"

    def test_format_amount_large_values_stay_positional(self) -> None:
        assert format_amount(123456789012.0) == "123456789012"
        assert format_amount(0.0) == "0"
