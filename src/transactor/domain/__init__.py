"""Domain layer — entities, enums and errors with zero transport dependencies."""

from transactor.domain.capabilities import TransactorCapabilities
from transactor.domain.entities import (
    Account,
    BankAccount,
    CardAccount,
    Credentials,
    Result,
    SwipedCardAccount,
    TokenAccount,
    TokenGrant,
    Transaction,
)
from transactor.domain.enums import (
    AccountKind,
    BankAccountType,
    NetworkType,
    ResultStatus,
    TransactionType,
)
from transactor.domain.exceptions import (
    PreconditionError,
    TransactionAlreadyProcessedError,
    TransactorError,
    UnsupportedNetworkError,
    UnsupportedTransactionTypeError,
    ValidationError,
)
from transactor.domain.state_machine import TokenizationStateMachine
from transactor.domain.types import Month, Year

__all__ = [
    "Account",
    "AccountKind",
    "BankAccount",
    "BankAccountType",
    "CardAccount",
    "Credentials",
    "Month",
    "NetworkType",
    "PreconditionError",
    "Result",
    "ResultStatus",
    "SwipedCardAccount",
    "TokenAccount",
    "TokenGrant",
    "TokenizationStateMachine",
    "Transaction",
    "TransactionAlreadyProcessedError",
    "TransactionType",
    "TransactorCapabilities",
    "TransactorError",
    "UnsupportedNetworkError",
    "UnsupportedTransactionTypeError",
    "ValidationError",
    "Year",
]
