"""Payloads enviados ao sistema de contratos.

O sistema de contratos recebe nomes de campo em português (PascalCase).
Os modelos usam snake_case internamente e serializam com alias.

Valores monetários cruzam essa fronteira apenas em unidades maiores
(reais): a conversão de centavos acontece uma única vez, aqui.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

FIRST_PAYMENT_TYPE = "1"
CANCELLATION_NOTIFICATION_TYPE = "1"
MONTHLY_CYCLE_TYPE = "1"


def to_major_units(minor_units: int) -> float:
    """Converte centavos para reais (15000 -> 150.0)."""
    return minor_units / 100


class AccessToken(BaseModel):
    """Resposta do endpoint de token (password grant)."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    access_token: str = Field(..., min_length=1)
    token_type: str = "Bearer"
    expires_in: int = 0


class ContractPayload(BaseModel):
    """Base dos payloads: imutável e serializado pelos alias."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class ContractPaymentNotification(ContractPayload):
    """Corpo de POST /api/Pagamento/SalvarPagamento."""

    type: str = Field(default=FIRST_PAYMENT_TYPE, alias="Tipo")
    order_form_id: str = Field(..., alias="OrderFormId")
    order_number: str = Field(..., alias="NumeroPedido")
    value: float = Field(..., alias="Valor", description="Valor em reais.")
    date: str = Field(..., alias="Data")
    message: str | None = Field(default=None, alias="Mensagem")

    @classmethod
    def for_order(
        cls,
        *,
        order_form_id: str,
        order_number: str,
        value_minor_units: int,
        date: str,
    ) -> ContractPaymentNotification:
        return cls(
            order_form_id=order_form_id,
            order_number=order_number,
            value=to_major_units(value_minor_units),
            date=date,
        )


class CancellationNotification(ContractPayload):
    """Corpo de POST /Notificacao para pedidos cancelados."""

    notification_type: str = Field(
        default=CANCELLATION_NOTIFICATION_TYPE, alias="NotificacaoTipoId"
    )
    order_form_id: str = Field(..., alias="OrderFormId")
    date: str = Field(..., alias="Data")


class ContractSettingsBlock(ContractPayload):
    max_evaluations: int = Field(..., alias="QuantidadeMaximaAvaliacoes")
    max_active_users: int = Field(..., alias="QuantidadeMaximaUsuariosAtivos")
    contracted_item_ids: str = Field(..., alias="ItensContratadosIds")
    user_sku_id: str | None = Field(default=None, alias="userId")
    users: str | None = Field(default=None, alias="Usuarios")


class ContractEditPayload(ContractPayload):
    """Corpo de POST /EditarContrato.

    Montado e logado pelos handlers de recorrência e upgrade; a chamada
    de edição ainda não é emitida.
    """

    cycle_type: str = Field(default=MONTHLY_CYCLE_TYPE, alias="CicloTipoId")
    total_value: float = Field(..., alias="ValorTotal")
    validity: str | None = Field(default=None, alias="Vigencia")
    order_form_id: str = Field(..., alias="OrderFormId")
    contracted_plan: str = Field(..., alias="PlanoContratado")
    contracted_sub_items: Any = Field(..., alias="SubitensContratados")
    settings: ContractSettingsBlock = Field(..., alias="Configuracoes")


__all__ = [
    "AccessToken",
    "CancellationNotification",
    "ContractEditPayload",
    "ContractPaymentNotification",
    "ContractSettingsBlock",
    "to_major_units",
]
