"""Domain exceptions for the transactor package.

Precondition errors are raised from ``transact`` before any work is done.
Validation errors are *returned* by ``validate_transaction`` as values and
turned into an Error Result by the orchestration layer. Every other error
raised while a transaction is processed is caught by the same layer.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from transactor.domain.entities import Account


class TransactorError(Exception):
    """Base exception for all domain errors."""

    def __init__(self, message: str, code: str = "TRANSACTOR_ERROR") -> None:
        self.message = message
        self.code = code
        super().__init__(self.message)


# --- Precondition Errors ---


class PreconditionError(TransactorError):
    """Base for the errors ``transact`` lets propagate to the caller."""


class TransactionAlreadyProcessedError(PreconditionError):
    """Raised when a transaction instance is transacted a second time."""

    def __init__(self) -> None:
        super().__init__(
            message="This transaction has already been processed.",
            code="TRANSACTION_ALREADY_PROCESSED",
        )


class UnsupportedTransactionTypeError(PreconditionError):
    def __init__(self, transaction_type: object) -> None:
        super().__init__(
            message=f"Unsupported transaction type: {transaction_type}",
            code="UNSUPPORTED_TRANSACTION_TYPE",
        )
        self.transaction_type = transaction_type


class UnsupportedNetworkError(PreconditionError):
    def __init__(self, network: object) -> None:
        super().__init__(
            message=f"Unsupported transaction network: {network}",
            code="UNSUPPORTED_NETWORK",
        )
        self.network = network


# --- Validation Errors ---


class ValidationError(TransactorError):
    """Base for transaction validation failures.

    Instances are returned by ``validate_transaction``; their message is
    safe to show to the end user.
    """

    def __init__(self, message: str, code: str = "VALIDATION_ERROR") -> None:
        super().__init__(message=message, code=code)


class MissingCredentialsError(ValidationError):
    def __init__(self) -> None:
        super().__init__(
            message="Credentials are required to process this transaction.",
            code="MISSING_CREDENTIALS",
        )


class MissingAccountError(ValidationError):
    def __init__(self) -> None:
        super().__init__(
            message="Account information is required to process this transaction.",
            code="MISSING_ACCOUNT",
        )


class InvalidAccountTypeError(ValidationError):
    def __init__(self, account: Account) -> None:
        super().__init__(
            message=f"Invalid account type: {account.display_type}",
            code="INVALID_ACCOUNT_TYPE",
        )
        self.account_kind = account.kind


class MissingRequiredParameterError(ValidationError):
    def __init__(self, parameter: str) -> None:
        super().__init__(
            message=f"Missing required parameter: {parameter}",
            code="MISSING_REQUIRED_PARAMETER",
        )
        self.parameter = parameter


class ParentTransactionRequiredError(ValidationError):
    def __init__(self) -> None:
        super().__init__(
            message="A parent transaction is required to process this transaction.",
            code="PARENT_TRANSACTION_REQUIRED",
        )


# --- Tokenization Errors ---


class TokenizationError(TransactorError):
    """Raised when an approved tokenization reply carries no usable token."""

    def __init__(self, message: str) -> None:
        super().__init__(message=message, code="TOKENIZATION_ERROR")


class AccountNotTokenizableError(TokenizationError):
    def __init__(self, account: Account) -> None:
        super().__init__(message=f"This type of account is not tokenizable: {account.display_type}")
        self.code = "ACCOUNT_NOT_TOKENIZABLE"


class TokenAlreadyAssignedError(TokenizationError):
    """Raised when a token is assigned to an account that already holds one."""

    def __init__(self) -> None:
        super().__init__(message="The account already holds a token.")
        self.code = "TOKEN_ALREADY_ASSIGNED"
