"""Network Merchants gateway adapters."""

from transactor.transactors.network_merchants.ach import AchTransactor
from transactor.transactors.network_merchants.card import CardTransactor
from transactor.transactors.network_merchants.gateway import (
    GATEWAY_ERROR_MESSAGE,
    REDACTED,
    SENSITIVE_KEYS,
    NetworkMerchantsGateway,
    map_response_code,
)
from transactor.transactors.network_merchants.token import TokenTransactor

__all__ = [
    "AchTransactor",
    "CardTransactor",
    "GATEWAY_ERROR_MESSAGE",
    "NetworkMerchantsGateway",
    "REDACTED",
    "SENSITIVE_KEYS",
    "TokenTransactor",
    "map_response_code",
]
