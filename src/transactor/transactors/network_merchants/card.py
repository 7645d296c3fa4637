"""Credit card transactor for the Network Merchants gateway."""

from __future__ import annotations

from transactor.domain.capabilities import TransactorCapabilities
from transactor.domain.enums import AccountKind, NetworkType, TransactionType
from transactor.transactors.network_merchants.gateway import NetworkMerchantsGateway

CARD_CAPABILITIES = TransactorCapabilities(
    types=frozenset({
        TransactionType.SALE,
        TransactionType.AUTH,
        TransactionType.CAPTURE,
        TransactionType.CREDIT,
        TransactionType.REFUND,
        TransactionType.VOID,
        TransactionType.VALIDATE,
    }),
    networks=frozenset({NetworkType.CARD}),
    account_kinds=frozenset({AccountKind.CARD, AccountKind.SWIPED_CARD}),
    tokenizes=True,
)


class CardTransactor(NetworkMerchantsGateway):
    """Keyed and swiped card payments.

    Untokenized card accounts are stored in the gateway's customer vault
    before they are charged; later charges send only the vault id.
    """

    transactor_type = "network_merchants.card"
    name = "Network Merchants Credit Card Gateway"

    @property
    def capabilities(self) -> TransactorCapabilities:
        return CARD_CAPABILITIES
