"""Testes da classificação de pedidos aprovados."""

from __future__ import annotations

from typing import Any

from app.domain.order import OrderSnapshot
from app.domain.scenario import (
    FirstPaymentScenario,
    RecurrenceScenario,
    ScenarioKind,
    UpgradeScenario,
    classify_order,
)


def _snapshot(**overrides: Any) -> OrderSnapshot:
    payload: dict[str, Any] = {
        "orderId": "123",
        "orderFormId": "of-1",
        "value": 15000,
        "items": [],
    }
    payload.update(overrides)
    return OrderSnapshot.model_validate(payload)


UPGRADE_CUSTOM_DATA = {
    "customApps": [
        {"id": "otherapp", "fields": {"x": "1"}},
        {"id": "upgradeplan", "fields": {"subscriptionId": "sub-1", "quantity": "5"}},
    ]
}


class TestClassifyOrder:
    def test_plain_order_is_first_payment(self) -> None:
        scenario = classify_order(_snapshot())
        assert isinstance(scenario, FirstPaymentScenario)
        assert scenario.kind == ScenarioKind.FIRST_PAYMENT

    def test_subscription_group_is_recurrence(self) -> None:
        scenario = classify_order(
            _snapshot(subscriptionData={"SubscriptionGroupId": "grp-9"})
        )
        assert isinstance(scenario, RecurrenceScenario)
        assert scenario.subscription_group_id == "grp-9"

    def test_upgrade_app_is_upgrade(self) -> None:
        scenario = classify_order(_snapshot(customData=UPGRADE_CUSTOM_DATA))
        assert isinstance(scenario, UpgradeScenario)
        assert scenario.fields["subscriptionId"] == "sub-1"

    def test_upgrade_wins_over_recurrence(self) -> None:
        """Os sinais não são exclusivos: o upgradeplan tem precedência."""
        scenario = classify_order(
            _snapshot(
                customData=UPGRADE_CUSTOM_DATA,
                subscriptionData={"SubscriptionGroupId": "grp-9"},
            )
        )
        assert scenario.kind == ScenarioKind.UPGRADE

    def test_empty_subscription_group_is_first_payment(self) -> None:
        scenario = classify_order(_snapshot(subscriptionData={"SubscriptionGroupId": ""}))
        assert isinstance(scenario, FirstPaymentScenario)

    def test_custom_data_without_upgrade_app_is_not_upgrade(self) -> None:
        scenario = classify_order(
            _snapshot(customData={"customApps": [{"id": "otherapp", "fields": {}}]})
        )
        assert isinstance(scenario, FirstPaymentScenario)

    def test_upgrade_fields_are_copied(self) -> None:
        snapshot = _snapshot(customData=UPGRADE_CUSTOM_DATA)
        scenario = classify_order(snapshot)
        assert isinstance(scenario, UpgradeScenario)
        scenario.fields["quantity"] = "99"
        assert snapshot.find_custom_app("upgradeplan").fields["quantity"] == "5"


class TestOrderSnapshot:
    def test_ignores_unknown_fields(self) -> None:
        snapshot = _snapshot(clientProfileData={"email": "x@y.com"}, status="invoiced")
        assert snapshot.order_id == "123"

    def test_camel_case_subscription_group_is_accepted(self) -> None:
        snapshot = _snapshot(subscriptionData={"subscriptionGroupId": "grp-2"})
        assert snapshot.subscription_group_id == "grp-2"
