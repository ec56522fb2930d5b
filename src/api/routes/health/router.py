"""Endpoints de health check para Cloud Run."""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, Literal

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

logger = logging.getLogger(__name__)

router = APIRouter()

SERVICE_NAME = "contract-sync"


class HealthResponse(BaseModel):
    """Resposta do health check."""

    status: str
    service: str
    timestamp: str
    version: str = "1.0.0"


@dataclass(frozen=True, slots=True)
class DependencyCheck:
    """Resultado de checagem de dependência."""

    status: Literal["ok", "degraded", "failed"]
    latency_ms: float | None = None
    error: str | None = None

    def as_dict(self) -> dict[str, Any]:
        return {
            "status": self.status,
            "latency_ms": self.latency_ms,
            "error": self.error,
        }


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Liveness probe — verifica se o serviço está rodando."""
    return HealthResponse(
        status="healthy",
        service=SERVICE_NAME,
        timestamp=datetime.now(UTC).isoformat(),
    )


@router.get("/ready")
async def readiness_check(request: Request) -> JSONResponse:
    """Readiness probe.

    Pronto quando o runtime (clientes + contexto) foi montado. A API de
    contratos é checada mas só degrada: eventos recebidos enquanto ela
    está fora geram registro de falha, não perda silenciosa.
    """
    runtime = getattr(request.app.state, "runtime", None)
    runtime_check = (
        DependencyCheck(status="ok")
        if runtime is not None
        else DependencyCheck(status="failed", error="not_configured")
    )
    contract_check = await _check_contract_api(runtime)

    ready = runtime_check.status == "ok"
    payload = {
        "status": "ready" if ready else "not_ready",
        "checks": {
            "runtime": runtime_check.as_dict(),
            "contract_api": contract_check.as_dict(),
        },
        "timestamp": datetime.now(UTC).isoformat(),
    }
    return JSONResponse(content=payload, status_code=200 if ready else 503)


async def _check_contract_api(runtime: Any | None) -> DependencyCheck:
    if runtime is None:
        return DependencyCheck(status="degraded", error="not_configured")
    started_at = time.perf_counter()
    try:
        await asyncio.wait_for(runtime.clients.contract.health(), timeout=3.0)
    except TimeoutError:
        return DependencyCheck(status="degraded", error="timeout")
    except Exception as exc:
        logger.warning(
            "readiness_contract_check_failed",
            extra={"error_type": type(exc).__name__},
        )
        return DependencyCheck(status="degraded", error=type(exc).__name__)
    latency_ms = (time.perf_counter() - started_at) * 1000
    return DependencyCheck(status="ok", latency_ms=round(latency_ms, 2))
