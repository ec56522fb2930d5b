"""Exceções compartilhadas entre handlers e clientes externos."""

from __future__ import annotations


class InfrastructureError(RuntimeError):
    """Base para falhas de infraestrutura (rede, APIs, storage)."""


class ExternalServiceError(InfrastructureError):
    """Falha ao chamar um sistema externo (commerce, contratos, token).

    A mensagem nunca carrega tokens ou o corpo completo da requisição.

    Args:
        service: Nome lógico do sistema (ex: "contract", "subscriptions")
        operation: Operação chamada (ex: "register_payment")
        detail: Descrição curta da falha
        status_code: Status HTTP quando houve resposta
    """

    def __init__(
        self,
        service: str,
        operation: str,
        detail: str,
        status_code: int | None = None,
    ) -> None:
        self.service = service
        self.operation = operation
        self.detail = detail
        self.status_code = status_code
        status = f" (HTTP {status_code})" if status_code is not None else ""
        super().__init__(f"{service}.{operation} falhou{status}: {detail}")


class FirestoreUnavailableError(InfrastructureError):
    """Falha de indisponibilidade ao acessar Firestore."""


class UpgradePayloadError(ValueError):
    """Campos do app `upgradeplan` ausentes ou mal formados."""
