"""Classificação de um pedido aprovado em um cenário de reconciliação.

Os sinais no snapshot não são mutuamente exclusivos (um upgrade pode vir
de um pedido com subscriptionData), então a ordem é fixa:

1. app `upgradeplan` em customData -> UpgradeScenario
2. subscriptionData.SubscriptionGroupId -> RecurrenceScenario
3. caso contrário -> FirstPaymentScenario
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING

from app.domain.order import UPGRADE_PLAN_APP_ID
from app.domain.upgrade import UpgradeRequest

if TYPE_CHECKING:
    from app.domain.order import OrderSnapshot


class ScenarioKind(StrEnum):
    FIRST_PAYMENT = "first_payment"
    RECURRENCE = "recurrence"
    UPGRADE = "upgrade"


@dataclass(frozen=True, slots=True)
class FirstPaymentScenario:
    snapshot: OrderSnapshot
    kind: ScenarioKind = field(default=ScenarioKind.FIRST_PAYMENT, init=False)


@dataclass(frozen=True, slots=True)
class RecurrenceScenario:
    snapshot: OrderSnapshot
    subscription_group_id: str
    kind: ScenarioKind = field(default=ScenarioKind.RECURRENCE, init=False)


@dataclass(frozen=True, slots=True)
class UpgradeScenario:
    """Carrega os campos crus do upgradeplan.

    O parse fica com o handler para que um campo mal formado caia no
    mesmo caminho de registro de falha das chamadas externas.
    """

    snapshot: OrderSnapshot
    fields: dict[str, str]
    kind: ScenarioKind = field(default=ScenarioKind.UPGRADE, init=False)

    def parse_request(self) -> UpgradeRequest:
        return UpgradeRequest.from_custom_fields(self.fields)


Scenario = FirstPaymentScenario | RecurrenceScenario | UpgradeScenario


def classify_order(snapshot: OrderSnapshot) -> Scenario:
    """Seleciona exatamente um cenário para o snapshot (função total)."""
    upgrade_app = snapshot.find_custom_app(UPGRADE_PLAN_APP_ID)
    if upgrade_app is not None:
        return UpgradeScenario(snapshot=snapshot, fields=dict(upgrade_app.fields))

    subscription_group_id = snapshot.subscription_group_id
    if subscription_group_id:
        return RecurrenceScenario(
            snapshot=snapshot,
            subscription_group_id=subscription_group_id,
        )

    return FirstPaymentScenario(snapshot=snapshot)


__all__ = [
    "FirstPaymentScenario",
    "RecurrenceScenario",
    "Scenario",
    "ScenarioKind",
    "UpgradeScenario",
    "classify_order",
]
