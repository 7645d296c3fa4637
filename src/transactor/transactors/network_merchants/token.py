"""Customer-vault token transactor for the Network Merchants gateway."""

from __future__ import annotations

from transactor.domain.capabilities import TransactorCapabilities
from transactor.domain.enums import AccountKind, NetworkType, TransactionType
from transactor.transactors.network_merchants.gateway import NetworkMerchantsGateway

TOKEN_CAPABILITIES = TransactorCapabilities(
    types=frozenset({
        TransactionType.SALE,
        TransactionType.AUTH,
        TransactionType.CAPTURE,
        TransactionType.CREDIT,
        TransactionType.REFUND,
        TransactionType.VOID,
    }),
    networks=frozenset({NetworkType.TOKEN}),
    account_kinds=frozenset({AccountKind.TOKEN}),
)


class TokenTransactor(NetworkMerchantsGateway):
    """Charges accounts the gateway already knows by their vault id.

    Only TokenAccount instances are accepted, and they must carry a token.
    """

    transactor_type = "network_merchants.token"
    name = "Network Merchants Token Gateway"

    @property
    def capabilities(self) -> TransactorCapabilities:
        return TOKEN_CAPABILITIES
