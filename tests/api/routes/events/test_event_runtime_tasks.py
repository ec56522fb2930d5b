"""Testes para controle de tasks assíncronas de eventos de pedido."""

from __future__ import annotations

import asyncio

import pytest

from api.routes.events import runtime_tasks


async def _wait_until_tasks_empty(timeout: float = 1.0) -> None:
    start = asyncio.get_running_loop().time()
    while runtime_tasks._active_tasks:
        if asyncio.get_running_loop().time() - start > timeout:
            break
        await asyncio.sleep(0.01)


@pytest.mark.asyncio
async def test_schedule_processing_task_runs_coroutine_and_cleans_active_set() -> None:
    event = asyncio.Event()

    async def _work() -> None:
        event.set()

    active = runtime_tasks.schedule_processing_task(
        correlation_id="corr-1",
        coroutine=_work(),
    )

    assert active == 1
    await asyncio.wait_for(event.wait(), timeout=1.0)
    await _wait_until_tasks_empty()
    assert runtime_tasks.active_task_count() == 0


@pytest.mark.asyncio
async def test_schedule_processing_task_logs_failure(caplog: pytest.LogCaptureFixture) -> None:
    async def _boom() -> None:
        raise RuntimeError("boom")

    with caplog.at_level("ERROR"):
        runtime_tasks.schedule_processing_task(
            correlation_id="corr-2",
            coroutine=_boom(),
        )
        await _wait_until_tasks_empty()

    assert "order_event_processing_task_failed" in caplog.text


@pytest.mark.asyncio
async def test_drain_processing_tasks_returns_immediately_when_empty() -> None:
    await runtime_tasks.drain_processing_tasks(timeout_seconds=0.01)
    assert runtime_tasks.active_task_count() == 0


@pytest.mark.asyncio
async def test_drain_processing_tasks_cancels_pending_after_timeout(
    caplog: pytest.LogCaptureFixture,
) -> None:
    async def _slow() -> None:
        await asyncio.sleep(10)

    runtime_tasks.schedule_processing_task(correlation_id="corr-3", coroutine=_slow())

    with caplog.at_level("WARNING"):
        await runtime_tasks.drain_processing_tasks(timeout_seconds=0.01)
        await _wait_until_tasks_empty()

    assert "order_event_processing_shutdown_cancelled" in caplog.text
    assert runtime_tasks.active_task_count() == 0
