"""Testes do fluxo de pagamento aprovado: primeira compra."""

from __future__ import annotations

import pytest

from app.domain.failure import FailureFeature
from app.domain.order import OrderEvent
from app.use_cases.order_status import (
    DispatchStatus,
    ReconciliationOutcome,
    dispatch,
)
from tests.fakes.fake_commerce import FakeEnvironment
from utils.errors import ExternalServiceError


def _event(order_id: str = "123") -> OrderEvent:
    return OrderEvent(
        order_id=order_id,
        current_state="payment-approved",
        current_change_date="2026-03-10T15:30:00.0000000+00:00",
    )


def _env_with_plain_order() -> FakeEnvironment:
    env = FakeEnvironment()
    env.orders.add(
        {
            "orderId": "123",
            "orderFormId": "of-123",
            "value": 15000,
            "items": [{"id": "sku-1", "refId": "REF1", "quantity": 1, "price": 15000}],
        }
    )
    return env


class TestFirstPayment:
    @pytest.mark.asyncio
    async def test_registers_payment_with_major_units(self) -> None:
        env = _env_with_plain_order()

        result = await dispatch(_event(), env.context())

        assert result.status == DispatchStatus.HANDLED
        assert result.result is not None
        assert result.result.outcome == ReconciliationOutcome.REGISTERED
        ((wire, token),) = env.contracts.payments
        assert token == "token-abc"
        assert wire["Tipo"] == "1"
        assert wire["Valor"] == 150.0
        assert wire["OrderFormId"] == "of-123"
        assert wire["NumeroPedido"] == "123"
        assert wire["Data"] == "2026-03-10T15:30:00.0000000+00:00"
        assert env.failures.records == []

    @pytest.mark.asyncio
    async def test_token_is_requested_with_configured_user(self) -> None:
        env = _env_with_plain_order()

        await dispatch(_event(), env.context())

        assert env.tokens.calls == ["integration-user"]

    @pytest.mark.asyncio
    async def test_contract_failure_writes_failure_record(self) -> None:
        env = _env_with_plain_order()
        env.contracts.fail_with = ExternalServiceError(
            "contract", "register_payment", "erro interno", status_code=500
        )

        result = await dispatch(_event(), env.context())

        assert result.status == DispatchStatus.FAILED
        assert "HTTP 500" in (result.error or "")
        (record,) = env.failures.records
        assert record.feature == FailureFeature.FIRST_PAYMENT
        assert record.order_number == "123"
        assert record.value_major_units == 150.0
        assert "HTTP 500" in record.error_message

    @pytest.mark.asyncio
    async def test_order_lookup_failure_is_swallowed_without_record(self) -> None:
        """Falha antes do guard (OMS) só é logada pelo dispatcher."""
        env = FakeEnvironment()

        result = await dispatch(_event("missing"), env.context())

        assert result.status == DispatchStatus.FAILED
        assert env.contracts.payments == []
        assert env.failures.records == []
