"""Transactor contract and transaction orchestration.

``AbstractTransactor.transact`` is the single entry point for processing a
transaction. It owns everything that is not gateway-specific:

    1. Preconditions (already processed, type supported, network supported).
       These raise; nothing else does.
    2. Option resolution against the transactor's options model.
    3. Validation, returned as a value and turned into an Error Result.
       It runs before tokenization, so an invalid transaction sends nothing.
    4. The tokenize-before-charge workflow for untokenized accounts.
    5. Delegation to the concrete ``do_transact``.
    6. The error boundary: any exception becomes an Error Result.
    7. Redaction through ``filter_result``.

Concrete transactors only declare capabilities and options, validate, talk
to their gateway, and (optionally) extract tokens and redact results.
"""

from __future__ import annotations

import traceback
from abc import ABC, abstractmethod
from decimal import Decimal
from typing import TYPE_CHECKING, Any, ClassVar

from transactor.domain.entities import Credentials, Result, Transaction
from transactor.domain.enums import (
    PARENT_REQUIRED_TYPES,
    AccountKind,
    NetworkType,
    ResultStatus,
    TransactionType,
)
from transactor.domain.exceptions import (
    AccountNotTokenizableError,
    ParentTransactionRequiredError,
    TokenizationError,
    TransactionAlreadyProcessedError,
    UnsupportedNetworkError,
    UnsupportedTransactionTypeError,
    ValidationError,
)
from transactor.domain.state_machine import TokenizationStateMachine
from transactor.logging_config import get_logger
from transactor.options import TransactorOptions

if TYPE_CHECKING:
    from collections.abc import Mapping

    from transactor.domain.capabilities import TransactorCapabilities
    from transactor.domain.entities import Account, TokenGrant

logger = get_logger(__name__)

INTERNAL_ERROR_MESSAGE = "An internal error occurred while processing the transaction."


def network_for_account(account: Account) -> NetworkType:
    """Return the network a tokenization request for this account travels over."""
    match account.kind:
        case AccountKind.BANK:
            return NetworkType.ACH
        case AccountKind.CARD | AccountKind.SWIPED_CARD:
            return NetworkType.CARD
        case AccountKind.TOKEN:
            return NetworkType.TOKEN
    raise ValueError(f"Unknown account kind: {account.kind}")


def check_parent(transaction: Transaction) -> ValidationError | None:
    """Return a failure if a Capture, Refund or Void has no parent transaction."""
    if transaction.type in PARENT_REQUIRED_TYPES and transaction.parent is None:
        return ParentTransactionRequiredError()
    return None


class AbstractTransactor(ABC):
    """Base class for every transactor."""

    transactor_type: ClassVar[str] = "abstract"
    name: ClassVar[str] = "Abstract Transactor"
    options_model: ClassVar[type[TransactorOptions]] = TransactorOptions

    # ------------------------------------------------------------------
    # Capabilities
    # ------------------------------------------------------------------

    @property
    @abstractmethod
    def capabilities(self) -> TransactorCapabilities:
        """The static allow-lists of this transactor."""

    def supports_type(self, transaction_type: TransactionType | None) -> bool:
        return self.capabilities.supports_type(transaction_type)

    def supports_network(self, network: NetworkType | None) -> bool:
        return self.capabilities.supports_network(network)

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    def transact(
        self,
        transaction: Transaction,
        options: Mapping[str, Any] | None = None,
    ) -> Result:
        """Process a transaction and return its Result.

        Args:
            transaction: A transaction that has not been transacted yet.
            options: Per-call options, validated against ``options_model``.

        Returns:
            The transaction's Result, redacted by ``filter_result``.

        Raises:
            TransactionAlreadyProcessedError: If the transaction was processed before.
            UnsupportedTransactionTypeError: If the type is not in the allow-list.
            UnsupportedNetworkError: If the network is not in the allow-list.
        """
        if transaction.transacted:
            raise TransactionAlreadyProcessedError()
        if not self.supports_type(transaction.type):
            raise UnsupportedTransactionTypeError(transaction.type)
        if not self.supports_network(transaction.network):
            raise UnsupportedNetworkError(transaction.network)

        result = transaction.result
        result.transactor = self
        log = logger.bind(
            transactor=self.transactor_type,
            transaction_type=str(transaction.type),
            network=str(transaction.network),
        )
        log.info("transactor.transact.start", amount=str(transaction.amount))

        try:
            resolved = self.resolve_options(options)
            failure = self.validate_transaction(transaction)
            if failure is not None:
                self._reject(result, failure)
            elif self._needs_tokenization(transaction):
                self._transact_with_tokenization(transaction, resolved)
            else:
                self._dispatch(transaction, resolved)
        except Exception as exc:
            log.exception("transactor.transact.error", error_type=type(exc).__name__)
            self._record_exception(result, exc)
        finally:
            transaction.mark_transacted()

        log.info(
            "transactor.transact.complete",
            status=str(result.status),
            external_id=result.external_id,
        )
        return self.filter_result(result)

    def tokenize_account(
        self,
        account: Account,
        options: Mapping[str, Any] | None = None,
        credentials: Credentials | None = None,
    ) -> dict[str, Any]:
        """Run a zero-amount Validate transaction that asks the gateway for a token.

        The account is not modified; extracting and storing the token from
        the returned response is up to the caller.

        Args:
            account: A tokenizable account.
            options: Per-call options; ``tokenize`` is forced on.
            credentials: Gateway credentials. Defaults to ``account.credentials``.

        Returns:
            The raw parsed gateway response, or an empty dict if none was received.
        """
        if not account.tokenizable:
            raise AccountNotTokenizableError(account)
        network = network_for_account(account)
        if not self.supports_type(TransactionType.VALIDATE):
            raise UnsupportedTransactionTypeError(TransactionType.VALIDATE)
        if not self.supports_network(network):
            raise UnsupportedNetworkError(network)

        resolved = self.resolve_options(options).model_copy(update={"tokenize": True})
        tokenizing = self._build_tokenizing_transaction(
            account,
            credentials if credentials is not None else account.credentials,
            network,
        )
        result = self._delegate(tokenizing, resolved)
        tokenizing.mark_transacted()

        logger.info(
            "transactor.tokenize_account.complete",
            transactor=self.transactor_type,
            status=str(result.status),
            last_four=account.last_four,
        )
        return dict(result.get_data("response") or {})

    def create_credentials(self) -> Credentials:
        """Create a new, empty Credentials scoped to this transactor."""
        return Credentials(transactor=self)

    def resolve_options(self, options: Mapping[str, Any] | None = None) -> TransactorOptions:
        """Validate options against ``options_model`` and apply its defaults.

        Raises:
            pydantic.ValidationError: On unknown keys or invalid values.
        """
        return self.options_model.model_validate(dict(options or {}))

    # ------------------------------------------------------------------
    # Extension points
    # ------------------------------------------------------------------

    def validate_transaction(self, transaction: Transaction) -> ValidationError | None:
        """Return a validation failure for the transaction, or None if it is valid."""
        return check_parent(transaction)

    @abstractmethod
    def do_transact(self, transaction: Transaction, options: TransactorOptions) -> Result:
        """Process a validated transaction against the gateway."""

    def extract_token(self, result: Result) -> TokenGrant | None:
        """Return the token issued by an approved tokenization result."""
        return None

    def filter_result(self, result: Result) -> Result:
        """Redact sensitive data from a result before it is returned."""
        return result

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _needs_tokenization(self, transaction: Transaction) -> bool:
        account = transaction.account
        return self.capabilities.tokenizes and account is not None and account.needs_token

    def _reject(self, result: Result, failure: ValidationError) -> Result:
        logger.warning(
            "transactor.validation_failed",
            transactor=self.transactor_type,
            code=failure.code,
        )
        result.status = ResultStatus.ERROR
        result.message = failure.message
        result.set_data("validation_error", failure.code)
        return result

    def _delegate(self, transaction: Transaction, options: TransactorOptions) -> Result:
        """Validate, then dispatch. Used for the synthetic tokenizing transaction."""
        failure = self.validate_transaction(transaction)
        if failure is not None:
            transaction.result.transactor = self
            return self._reject(transaction.result, failure)
        return self._dispatch(transaction, options)

    def _dispatch(self, transaction: Transaction, options: TransactorOptions) -> Result:
        result = transaction.result
        result.transactor = self
        outcome = self.do_transact(transaction, options)
        if outcome is not result:
            result.absorb(outcome)
        return result

    def _transact_with_tokenization(
        self,
        transaction: Transaction,
        options: TransactorOptions,
    ) -> None:
        account = transaction.account
        machine = TokenizationStateMachine()
        log = logger.bind(transactor=self.transactor_type, last_four=account.last_four)

        machine.begin_tokenization()
        tokenizing = self._build_tokenizing_transaction(
            account, transaction.credentials, transaction.network
        )
        token_result = self._delegate(tokenizing, options.model_copy(update={"tokenize": True}))
        tokenizing.mark_transacted()

        if not token_result.is_approved:
            machine.tokenization_declined()
            log.warning("transactor.tokenization.failed", status=str(token_result.status))
            transaction.result.absorb(token_result)
            return

        grant = self.extract_token(token_result)
        if grant is None:
            raise TokenizationError("The gateway approved tokenization but issued no token.")
        account.assign_token(grant.token, grant.issued_at)
        machine.tokenization_approved()
        log.info("transactor.tokenization.approved")

        machine.begin_charge()
        self._dispatch(transaction, options.model_copy(update={"tokenize": False}))
        machine.charge_finished()

    @staticmethod
    def _build_tokenizing_transaction(
        account: Account,
        credentials: Credentials | None,
        network: NetworkType | None,
    ) -> Transaction:
        return Transaction(
            type=TransactionType.VALIDATE,
            network=network,
            amount=Decimal("0"),
            account=account,
            credentials=credentials,
        )

    @staticmethod
    def _record_exception(result: Result, exc: Exception) -> None:
        result.status = ResultStatus.ERROR
        result.message = INTERNAL_ERROR_MESSAGE
        result.set_data("message", str(exc))
        result.set_data("exception", type(exc).__name__)
        result.set_data("trace", traceback.format_exc())

    def __str__(self) -> str:
        return f"{self.name} ({self.transactor_type})"
