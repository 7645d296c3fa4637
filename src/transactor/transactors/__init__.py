"""Transactor implementations and factory.

Four transactors:
    - CardTransactor:     Network Merchants keyed/swiped card payments
    - AchTransactor:      Network Merchants electronic checks
    - TokenTransactor:    Network Merchants customer-vault tokens
    - GenericTransactor:  In-person cash and check, no network call

The TransactorFactory creates the correct transactor from its type string.
"""

from typing import Any

from transactor.transactors.base import (
    INTERNAL_ERROR_MESSAGE,
    AbstractTransactor,
    network_for_account,
)
from transactor.transactors.generic import GenericTransactor
from transactor.transactors.network_merchants import (
    AchTransactor,
    CardTransactor,
    TokenTransactor,
)


class TransactorFactory:
    """Factory that creates a transactor from its type string.

    Usage:
        transactor = TransactorFactory.create("network_merchants.card")
        result = transactor.transact(transaction)

        # With a caller-managed HTTP client:
        transactor = TransactorFactory.create("network_merchants.card", client=client)
    """

    _registry: dict[str, type[AbstractTransactor]] = {
        CardTransactor.transactor_type: CardTransactor,
        AchTransactor.transactor_type: AchTransactor,
        TokenTransactor.transactor_type: TokenTransactor,
        GenericTransactor.transactor_type: GenericTransactor,
    }

    @classmethod
    def create(cls, transactor_type: str, **kwargs: Any) -> AbstractTransactor:
        """Create a transactor instance.

        Args:
            transactor_type: A registered type string, e.g. "generic".
            **kwargs: Passed to the transactor's constructor.

        Raises:
            ValueError: If the type is unknown or empty.
        """
        if not transactor_type:
            raise ValueError(
                "A transactor type is required. "
                f"Valid types: {list(cls._registry.keys())}"
            )

        transactor_class = cls._registry.get(transactor_type)
        if transactor_class is None:
            raise ValueError(
                f"Unknown transactor type: '{transactor_type}'. "
                f"Valid types: {list(cls._registry.keys())}"
            )

        return transactor_class(**kwargs)

    @classmethod
    def get_supported_types(cls) -> list[str]:
        """Return the list of supported transactor type strings."""
        return list(cls._registry.keys())


__all__ = [
    "INTERNAL_ERROR_MESSAGE",
    "AbstractTransactor",
    "AchTransactor",
    "CardTransactor",
    "GenericTransactor",
    "TokenTransactor",
    "TransactorFactory",
    "network_for_account",
]
