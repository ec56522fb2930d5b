"""Formatter JSON com campos obrigatórios.

Campos: asctime, level, logger, message, correlation_id, service.
Campos passados via `extra` são anexados ao objeto JSON.
"""

from __future__ import annotations

from pythonjsonlogger.json import JsonFormatter

REQUIRED_LOG_FIELDS = frozenset(
    {
        "asctime",
        "levelname",
        "name",
        "message",
        "correlation_id",
        "service",
    }
)

FIELD_RENAME_MAP = {
    "levelname": "level",
    "name": "logger",
}


def create_json_formatter() -> JsonFormatter:
    """Cria formatter JSON com campos padronizados.

    Exemplo de output:
        {
            "asctime": "2026-02-02 10:30:00,123",
            "level": "INFO",
            "logger": "app.use_cases.order_status.first_payment",
            "message": "first_payment_registered",
            "correlation_id": "payment-approved-123-1770028200123",
            "service": "contract_sync",
            "order_id": "123"
        }
    """
    format_string = " ".join(f"%({field})s" for field in sorted(REQUIRED_LOG_FIELDS))

    return JsonFormatter(
        format_string,
        rename_fields=FIELD_RENAME_MAP,
    )
