"""Testes do correlation id por evento e das métricas via log."""

from __future__ import annotations

import pytest

from app.observability import (
    build_tracker_id,
    get_correlation_id,
    record_latency,
    record_outcome,
    reset_correlation_id,
    set_correlation_id,
)


class TestTrackerId:
    def test_format(self) -> None:
        assert build_tracker_id("canceled", "123", now_ms=1700000000000) == (
            "canceled-123-1700000000000"
        )

    def test_uses_current_time(self) -> None:
        state, order_id, stamp = build_tracker_id("x", "1").split("-")
        assert (state, order_id) == ("x", "1")
        assert stamp.isdigit()


class TestCorrelationId:
    def test_set_and_reset(self) -> None:
        before = get_correlation_id()
        token = set_correlation_id("payment-approved-1-2")
        assert get_correlation_id() == "payment-approved-1-2"
        reset_correlation_id(token)
        assert get_correlation_id() == before

    def test_generates_uuid_when_empty(self) -> None:
        token = set_correlation_id()
        try:
            assert len(get_correlation_id()) == 36
        finally:
            reset_correlation_id(token)


class TestMetrics:
    def test_latency_is_rounded(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level("INFO"):
            record_latency("order_status_dispatcher", "canceled", 12.3456, "t-1")

        (record,) = [r for r in caplog.records if r.getMessage() == "metric_latency"]
        assert record.latency_ms == 12.35
        assert record.metric_type == "latency"

    def test_outcome(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level("INFO"):
            record_outcome("order_status_dispatcher", "registered", "t-1")

        (record,) = [r for r in caplog.records if r.getMessage() == "metric_outcome"]
        assert record.outcome == "registered"
