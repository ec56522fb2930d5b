"""Registro durável de falha de reconciliação."""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import StrEnum
from typing import Any


class FailureFeature(StrEnum):
    FIRST_PAYMENT = "FirstPayment"
    RECURRENCE = "Recurrence"
    UPGRADE = "Upgrade"

    @property
    def label(self) -> str:
        """Rótulo gravado em `funcionalidade` no MasterData."""
        return _FEATURE_LABELS[self]


_FEATURE_LABELS = {
    FailureFeature.FIRST_PAYMENT: "Primeira compra",
    FailureFeature.RECURRENCE: "Recorrência",
    FailureFeature.UPGRADE: "Upgrade",
}



def format_amount(value: float) -> str:
    """Valor em texto sem ".0" para quantias inteiras (150.0 -> "150", 150.5 -> "150.5")."""
    return str(int(value)) if float(value).is_integer() else str(value)


@dataclass(frozen=True, slots=True)
class FailureRecord:
    """Falha de uma chamada externa durante a reconciliação.

    `value_major_units` é None no upgrade, que não tem valor associado.
    """

    moment_utc: datetime
    feature: FailureFeature
    order_number: str
    value_major_units: float | None
    error_message: str

    def error_payload(self) -> dict[str, str]:
        payload = {"NumeroPedido": self.order_number}
        if self.value_major_units is not None:
            payload["Valor"] = format_amount(self.value_major_units)
        payload["erro"] = self.error_message
        return payload

    def to_document_fields(self, utc_offset_hours: int = 0) -> dict[str, Any]:
        """Campos do documento na entidade de falhas (FL).

        Args:
            utc_offset_hours: Deslocamento aplicado ao momento gravado
                (o backoffice lê horário de Brasília, -3).
        """
        moment = self.moment_utc + timedelta(hours=utc_offset_hours)
        return {
            "momento": moment.isoformat(),
            "funcionalidade": self.feature.label,
            "erro": json.dumps(self.error_payload(), ensure_ascii=False),
        }


__all__ = ["FailureFeature", "FailureRecord", "format_amount"]
