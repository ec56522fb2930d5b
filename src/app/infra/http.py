"""Cliente HTTP base para os sistemas externos.

Regras:
- Retentativa com backoff apenas em métodos idempotentes (GET) para
  429, 5xx e falhas de conexão. Mutações são emitidas uma única vez:
  as APIs de contrato e assinatura não têm chave de idempotência.
- Qualquer resposta não-2xx vira ExternalServiceError com status.
- Logs sem headers (app-token e bearer token nunca aparecem).
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any

import httpx

from utils.errors import ExternalServiceError

logger = logging.getLogger(__name__)

IDEMPOTENT_METHODS = frozenset({"GET", "HEAD"})
RETRYABLE_STATUS = frozenset({429, 500, 502, 503, 504})


@dataclass
class HttpClientConfig:
    """Configuração do cliente HTTP."""

    base_url: str = ""
    timeout_seconds: float = 30.0
    max_retries: int = 2
    backoff_base_seconds: float = 0.5
    backoff_max_seconds: float = 8.0
    default_headers: dict[str, str] = field(default_factory=dict)
    verify_ssl: bool = True


class HttpClient:
    """Wrapper de httpx.AsyncClient com classificação de erros.

    Args:
        service: Nome lógico do sistema para erros e logs.
        config: Configuração HTTP.
        transport: Transport httpx opcional (MockTransport em testes).
    """

    def __init__(
        self,
        service: str,
        config: HttpClientConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._service = service
        self._config = config or HttpClientConfig()
        self._client = httpx.AsyncClient(
            base_url=self._config.base_url,
            headers=self._config.default_headers,
            timeout=self._config.timeout_seconds,
            verify=self._config.verify_ssl,
            transport=transport,
        )

    @property
    def service(self) -> str:
        return self._service

    async def aclose(self) -> None:
        await self._client.aclose()

    async def request(
        self,
        method: str,
        url: str,
        *,
        operation: str,
        json: Any = None,
        data: dict[str, str] | None = None,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        """Executa a requisição e devolve a resposta 2xx.

        Raises:
            ExternalServiceError: Falha de transporte ou status não-2xx.
        """
        method = method.upper()
        retries = self._config.max_retries if method in IDEMPOTENT_METHODS else 0

        for attempt in range(retries + 1):
            try:
                response = await self._client.request(
                    method,
                    url,
                    json=json,
                    data=data,
                    params=params,
                    headers=headers,
                )
            except httpx.TransportError as exc:
                if attempt >= retries:
                    logger.error(
                        "http_transport_error",
                        extra={
                            "service": self._service,
                            "operation": operation,
                            "error_type": type(exc).__name__,
                        },
                    )
                    raise ExternalServiceError(
                        self._service, operation, type(exc).__name__
                    ) from exc
                await self._backoff(attempt, operation)
                continue

            if response.status_code in RETRYABLE_STATUS and attempt < retries:
                await self._backoff(attempt, operation)
                continue

            if response.is_error:
                detail = _error_detail(response)
                logger.error(
                    "http_status_error",
                    extra={
                        "service": self._service,
                        "operation": operation,
                        "status_code": response.status_code,
                        "detail": detail,
                    },
                )
                raise ExternalServiceError(
                    self._service,
                    operation,
                    detail,
                    status_code=response.status_code,
                )

            logger.debug(
                "http_request_ok",
                extra={
                    "service": self._service,
                    "operation": operation,
                    "status_code": response.status_code,
                },
            )
            return response

        raise ExternalServiceError(self._service, operation, "retry_exhausted")

    async def request_json(self, method: str, url: str, **kwargs: Any) -> Any:
        """Como request(), devolvendo o corpo JSON ({} para corpo vazio)."""
        response = await self.request(method, url, **kwargs)
        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as exc:
            raise ExternalServiceError(
                self._service,
                kwargs.get("operation", "unknown"),
                "invalid_json_response",
                status_code=response.status_code,
            ) from exc

    async def _backoff(self, attempt: int, operation: str) -> None:
        backoff = min(
            (2**attempt) * self._config.backoff_base_seconds,
            self._config.backoff_max_seconds,
        )
        logger.info(
            "http_backoff",
            extra={
                "service": self._service,
                "operation": operation,
                "attempt": attempt + 1,
                "backoff_seconds": backoff,
            },
        )
        await asyncio.sleep(backoff)


def _error_detail(response: httpx.Response) -> str:
    """Extrai mensagem curta do corpo de erro."""
    try:
        body = response.json()
    except ValueError:
        return response.text[:200] or response.reason_phrase

    if isinstance(body, dict):
        errors = body.get("errors")
        if isinstance(errors, list) and errors:
            return ", ".join(str(error) for error in errors)
        for key in ("message", "Message", "error", "error_description"):
            value = body.get(key)
            if isinstance(value, str) and value:
                return value
    return str(body)[:200]


__all__ = ["HttpClient", "HttpClientConfig"]
