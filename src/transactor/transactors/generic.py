"""Generic transactor for in-person cash and check payments.

Nothing is sent anywhere: money changed hands at the counter, so a valid
transaction is simply recorded as approved.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from transactor.domain.capabilities import TransactorCapabilities
from transactor.domain.enums import NetworkType, ResultStatus, TransactionType
from transactor.logging_config import get_logger
from transactor.transactors.base import AbstractTransactor

if TYPE_CHECKING:
    from transactor.domain.entities import Result, Transaction
    from transactor.options import TransactorOptions

logger = get_logger(__name__)

GENERIC_CAPABILITIES = TransactorCapabilities(
    types=frozenset({
        TransactionType.SALE,
        TransactionType.CAPTURE,
        TransactionType.CREDIT,
        TransactionType.REFUND,
        TransactionType.VOID,
    }),
    networks=frozenset({NetworkType.CASH, NetworkType.CHECK}),
)


class GenericTransactor(AbstractTransactor):
    transactor_type = "generic"
    name = "Generic Transactor"

    @property
    def capabilities(self) -> TransactorCapabilities:
        return GENERIC_CAPABILITIES

    def do_transact(self, transaction: Transaction, options: TransactorOptions) -> Result:
        result = transaction.result
        result.transactor = self
        result.status = ResultStatus.APPROVED
        result.message = "Approved"

        logger.info(
            "generic.recorded",
            transaction_type=str(transaction.type),
            network=str(transaction.network),
            amount=str(transaction.amount),
        )
        return result
