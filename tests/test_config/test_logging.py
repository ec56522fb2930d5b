"""Testes do logging JSON usado pelo serviço."""

from __future__ import annotations

import json
import logging
from unittest.mock import MagicMock

import pytest

from config.logging import (
    CorrelationIdFilter,
    configure_logging,
    create_json_formatter,
    log_fallback,
)


def _record(msg: str = "order_event_received", **extra: object) -> logging.LogRecord:
    record = logging.LogRecord(
        name="app.use_cases.order_status.dispatcher",
        level=logging.INFO,
        pathname="",
        lineno=0,
        msg=msg,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestConfigureLogging:
    def test_single_handler_with_correlation_filter(self) -> None:
        root = logging.getLogger()
        root.handlers = [logging.NullHandler(), logging.NullHandler()]

        configure_logging(level="warning", correlation_id_getter=lambda: "t-1")

        assert root.level == logging.WARNING
        (handler,) = root.handlers
        assert any(isinstance(f, CorrelationIdFilter) for f in handler.filters)

    def test_invalid_level_raises(self) -> None:
        with pytest.raises(ValueError, match="Nível de log inválido"):
            configure_logging(level="VERBOSE")


class TestJsonOutput:
    def test_required_fields_are_renamed_and_present(self) -> None:
        formatter = create_json_formatter()
        record = _record(
            correlation_id="payment-approved-123-1700000000000",
            service="contract_sync",
            order_id="123",
        )

        output = json.loads(formatter.format(record))

        assert output["message"] == "order_event_received"
        assert output["level"] == "INFO"
        assert output["logger"] == "app.use_cases.order_status.dispatcher"
        assert output["correlation_id"] == "payment-approved-123-1700000000000"
        assert output["service"] == "contract_sync"
        assert output["order_id"] == "123"
        assert "asctime" in output


class TestCorrelationIdFilter:
    def test_injects_tracker_from_getter(self) -> None:
        record = _record()
        assert CorrelationIdFilter("contract_sync", lambda: "canceled-9-1").filter(record)
        assert record.correlation_id == "canceled-9-1"
        assert record.service == "contract_sync"

    def test_explicit_correlation_id_wins(self) -> None:
        record = _record(correlation_id="from-extra")
        CorrelationIdFilter("contract_sync", lambda: "from-context").filter(record)
        assert record.correlation_id == "from-extra"

    def test_empty_when_no_getter(self) -> None:
        record = _record()
        CorrelationIdFilter("contract_sync", None).filter(record)
        assert record.correlation_id == ""


class TestLogFallback:
    def test_warning_with_reason_and_order(self) -> None:
        logger = MagicMock(spec=logging.Logger)

        log_fallback(logger, "recurrence_payment", "original_order_not_found", "123")

        logger.warning.assert_called_once()
        args, kwargs = logger.warning.call_args
        assert args == ("Fallback applied for %s", "recurrence_payment")
        assert kwargs["extra"] == {
            "fallback_used": True,
            "component": "recurrence_payment",
            "reason": "original_order_not_found",
            "order_id": "123",
        }

    def test_optional_context_is_omitted(self) -> None:
        logger = MagicMock(spec=logging.Logger)
        log_fallback(logger, "recurrence_payment")
        extra = logger.warning.call_args.kwargs["extra"]
        assert "reason" not in extra
        assert "order_id" not in extra
