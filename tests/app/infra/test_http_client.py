"""Testes do HttpClient base (retentativa e classificação de erros)."""

from __future__ import annotations

import httpx
import pytest

from app.infra.http import HttpClient, HttpClientConfig
from utils.errors import ExternalServiceError


def _client(handler, max_retries: int = 2) -> HttpClient:
    config = HttpClientConfig(
        base_url="https://api.example.com",
        max_retries=max_retries,
        backoff_base_seconds=0,
    )
    return HttpClient("svc", config, transport=httpx.MockTransport(handler))


class TestRetries:
    @pytest.mark.asyncio
    async def test_get_is_retried_on_503(self) -> None:
        calls: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request.method)
            if len(calls) < 3:
                return httpx.Response(503)
            return httpx.Response(200, json={"ok": True})

        client = _client(handler)
        assert await client.request_json("GET", "/x", operation="read") == {"ok": True}
        assert calls == ["GET", "GET", "GET"]

    @pytest.mark.asyncio
    async def test_get_retry_exhausted_raises_with_status(self) -> None:
        calls = 0

        def handler(request: httpx.Request) -> httpx.Response:
            nonlocal calls
            calls += 1
            return httpx.Response(429, json={"message": "too many"})

        client = _client(handler, max_retries=1)
        with pytest.raises(ExternalServiceError) as exc_info:
            await client.request("GET", "/x", operation="read")

        assert calls == 2
        assert exc_info.value.status_code == 429
        assert exc_info.value.detail == "too many"

    @pytest.mark.asyncio
    async def test_post_is_never_retried(self) -> None:
        calls = 0

        def handler(request: httpx.Request) -> httpx.Response:
            nonlocal calls
            calls += 1
            return httpx.Response(500, text="erro interno")

        client = _client(handler)
        with pytest.raises(ExternalServiceError) as exc_info:
            await client.request("POST", "/x", operation="write", json={"a": 1})

        assert calls == 1
        assert exc_info.value.status_code == 500
        assert "erro interno" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_transport_error_on_get_is_retried_then_raised(self) -> None:
        calls = 0

        def handler(request: httpx.Request) -> httpx.Response:
            nonlocal calls
            calls += 1
            raise httpx.ConnectError("sem rede", request=request)

        client = _client(handler, max_retries=2)
        with pytest.raises(ExternalServiceError, match="ConnectError"):
            await client.request("GET", "/x", operation="read")
        assert calls == 3


class TestResponses:
    @pytest.mark.asyncio
    async def test_client_error_is_not_retried(self) -> None:
        calls = 0

        def handler(request: httpx.Request) -> httpx.Response:
            nonlocal calls
            calls += 1
            return httpx.Response(404, json={"errors": ["not found"]})

        client = _client(handler)
        with pytest.raises(ExternalServiceError, match="not found"):
            await client.request("GET", "/x", operation="read")
        assert calls == 1

    @pytest.mark.asyncio
    async def test_empty_body_returns_empty_dict(self) -> None:
        client = _client(lambda request: httpx.Response(204))
        assert await client.request_json("POST", "/x", operation="write") == {}

    @pytest.mark.asyncio
    async def test_invalid_json_raises(self) -> None:
        client = _client(lambda request: httpx.Response(200, text="<html>"))
        with pytest.raises(ExternalServiceError, match="invalid_json_response"):
            await client.request_json("GET", "/x", operation="read")

    @pytest.mark.asyncio
    async def test_default_headers_are_sent(self) -> None:
        seen: dict[str, str] = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen.update(request.headers)
            return httpx.Response(200, json={})

        config = HttpClientConfig(
            base_url="https://api.example.com",
            default_headers={"X-Test": "1"},
        )
        client = HttpClient("svc", config, transport=httpx.MockTransport(handler))
        await client.request("GET", "/x", operation="read")
        await client.aclose()

        assert seen["x-test"] == "1"
