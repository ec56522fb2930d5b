"""Configuração HTTP compartilhada pelas APIs da plataforma de commerce."""

from __future__ import annotations

from typing import TYPE_CHECKING

from app.infra.http import HttpClientConfig

if TYPE_CHECKING:
    from config.settings import CommerceSettings


def commerce_http_config(settings: CommerceSettings) -> HttpClientConfig:
    """Monta HttpClientConfig com os headers de app-key/app-token."""
    return HttpClientConfig(
        base_url=settings.base_url,
        timeout_seconds=settings.request_timeout_seconds,
        max_retries=settings.max_retries,
        default_headers={
            "Accept": "application/json",
            "Content-Type": "application/json",
            "X-VTEX-API-AppKey": settings.app_key,
            "X-VTEX-API-AppToken": settings.app_token,
        },
    )
