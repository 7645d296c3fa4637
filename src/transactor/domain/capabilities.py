"""Capability descriptor declared by every transactor.

A transactor returns one immutable ``TransactorCapabilities`` value listing
the transaction types, networks and account kinds it handles. Precondition
and validation checks consult this value instead of class-level lists.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from transactor.domain.entities import Account
    from transactor.domain.enums import AccountKind, NetworkType, TransactionType


@dataclass(frozen=True)
class TransactorCapabilities:
    """Static allow-lists of a transactor.

    Attributes:
        types: Supported transaction types.
        networks: Supported networks.
        account_kinds: Account variants the transactor accepts. Empty means
            the transactor does not inspect the account at all.
        tokenizes: Whether tokenizable accounts are tokenized before charging.
    """

    types: frozenset[TransactionType]
    networks: frozenset[NetworkType]
    account_kinds: frozenset[AccountKind] = frozenset()
    tokenizes: bool = False

    def supports_type(self, transaction_type: TransactionType | None) -> bool:
        return transaction_type is not None and transaction_type in self.types

    def supports_network(self, network: NetworkType | None) -> bool:
        return network is not None and network in self.networks

    def accepts(self, account: Account) -> bool:
        return not self.account_kinds or account.kind in self.account_kinds
