"""ACH (electronic check) transactor for the Network Merchants gateway."""

from __future__ import annotations

from transactor.domain.capabilities import TransactorCapabilities
from transactor.domain.enums import AccountKind, NetworkType, TransactionType
from transactor.transactors.network_merchants.gateway import NetworkMerchantsGateway

ACH_CAPABILITIES = TransactorCapabilities(
    types=frozenset({
        TransactionType.SALE,
        TransactionType.CREDIT,
        TransactionType.REFUND,
        TransactionType.VOID,
        TransactionType.VALIDATE,
    }),
    networks=frozenset({NetworkType.ACH}),
    account_kinds=frozenset({AccountKind.BANK}),
    tokenizes=True,
)


class AchTransactor(NetworkMerchantsGateway):
    transactor_type = "network_merchants.ach"
    name = "Network Merchants ACH Gateway"

    @property
    def capabilities(self) -> TransactorCapabilities:
        return ACH_CAPABILITIES
