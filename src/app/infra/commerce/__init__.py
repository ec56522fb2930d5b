"""Clientes HTTP da plataforma de commerce."""

from __future__ import annotations

from app.infra.commerce.masterdata_client import (
    MasterDataClient,
    create_masterdata_client,
    rest_range,
)
from app.infra.commerce.oms_client import OmsClient, create_oms_client
from app.infra.commerce.subscriptions_client import (
    SubscriptionsClient,
    create_subscriptions_client,
)

__all__ = [
    "MasterDataClient",
    "OmsClient",
    "SubscriptionsClient",
    "create_masterdata_client",
    "create_oms_client",
    "create_subscriptions_client",
    "rest_range",
]
