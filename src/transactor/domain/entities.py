"""Transaction entities: credentials, accounts, transactions and results.

Plain mutable dataclasses with no persistence concerns. Sensitive fields
(account numbers, CVV, track data, tokens, credential values) are excluded
from ``repr`` so an entity can be logged or printed safely.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Any, ClassVar

from transactor.domain.enums import (
    AccountKind,
    BankAccountType,
    NetworkType,
    ResultStatus,
    TransactionType,
)
from transactor.domain.exceptions import (
    TokenAlreadyAssignedError,
    TransactionAlreadyProcessedError,
)

if TYPE_CHECKING:
    from transactor.domain.types import Month, Year
    from transactor.transactors.base import AbstractTransactor


# ---------------------------------------------------------------------------
# Credentials
# ---------------------------------------------------------------------------


@dataclass(eq=False)
class Credentials:
    """Key/value credentials for one transactor.

    The ``transactor`` back-reference records which transactor the
    credentials were created for; it does not own them.
    """

    credentials: dict[str, str | None] = field(default_factory=dict, repr=False)
    transactor: AbstractTransactor | None = field(default=None, repr=False)

    def get_credential(self, key: str, default: str | None = None) -> str | None:
        return self.credentials.get(key, default)

    def set_credential(self, key: str, value: str | None) -> None:
        self.credentials[key] = value

    def is_complete(self, *keys: str) -> bool:
        """Return True when every given key is set to a non-None value."""
        return all(self.credentials.get(key) is not None for key in keys)


# ---------------------------------------------------------------------------
# Accounts
# ---------------------------------------------------------------------------


@dataclass(kw_only=True, eq=False)
class Account:
    """Base of the Account variants.

    Each variant sets ``kind`` (the union tag adapters match on) and
    ``tokenizable``. Once assigned, ``account_token`` is never cleared.
    """

    kind: ClassVar[AccountKind]
    tokenizable: ClassVar[bool] = False
    display_type: ClassVar[str] = "Account"

    name: str | None = None
    address: str | None = None
    city: str | None = None
    region: str | None = None
    postal_code: str | None = None
    country: str | None = None
    email: str | None = None
    phone: str | None = None
    ip_address: str | None = None

    credentials: Credentials | None = field(default=None, repr=False)
    account_token: str | None = field(default=None, repr=False)
    date_tokenized: datetime | None = None

    @property
    def is_tokenized(self) -> bool:
        return self.account_token is not None

    @property
    def needs_token(self) -> bool:
        return self.tokenizable and not self.is_tokenized

    @property
    def last_four(self) -> str | None:
        return None

    def assign_token(self, token: str, issued_at: datetime | None = None) -> None:
        """Store a gateway-issued token on this account.

        Raises:
            TokenAlreadyAssignedError: If the account already holds a token.
        """
        if self.account_token is not None:
            raise TokenAlreadyAssignedError()
        self.account_token = token
        self.date_tokenized = issued_at or datetime.now(UTC)


def _last_four(number: str | None) -> str | None:
    return number[-4:] if number else None


@dataclass(kw_only=True, eq=False)
class CardAccount(Account):
    kind: ClassVar[AccountKind] = AccountKind.CARD
    tokenizable: ClassVar[bool] = True
    display_type: ClassVar[str] = "Credit Card"

    account_number: str | None = field(default=None, repr=False)
    exp_month: Month | None = None
    exp_year: Year | None = None
    cvv: str | None = field(default=None, repr=False)

    @property
    def last_four(self) -> str | None:
        return _last_four(self.account_number)

    @property
    def has_expiration(self) -> bool:
        return self.exp_month is not None and self.exp_year is not None


@dataclass(kw_only=True, eq=False)
class SwipedCardAccount(CardAccount):
    """A card read at a terminal; the raw track data replaces number and expiration."""

    kind: ClassVar[AccountKind] = AccountKind.SWIPED_CARD
    display_type: ClassVar[str] = "Swiped Credit Card"

    track_one: str | None = field(default=None, repr=False)
    track_two: str | None = field(default=None, repr=False)
    track_three: str | None = field(default=None, repr=False)


@dataclass(kw_only=True, eq=False)
class BankAccount(Account):
    kind: ClassVar[AccountKind] = AccountKind.BANK
    tokenizable: ClassVar[bool] = True
    display_type: ClassVar[str] = "Bank Account"

    routing_number: str | None = None
    account_number: str | None = field(default=None, repr=False)
    account_type: BankAccountType | None = None

    @property
    def last_four(self) -> str | None:
        return _last_four(self.account_number)


@dataclass(kw_only=True, eq=False)
class TokenAccount(Account):
    """An account known to the gateway only by its token."""

    kind: ClassVar[AccountKind] = AccountKind.TOKEN
    display_type: ClassVar[str] = "Token Account"


# ---------------------------------------------------------------------------
# Results and transactions
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TokenGrant:
    """A token extracted from an approved tokenization reply."""

    token: str
    issued_at: datetime


@dataclass(eq=False)
class Result:
    """Outcome of a transaction.

    Attributes:
        status: Normalized outcome; PENDING until a transactor has run.
        message: Human-readable message, safe to show to the end user.
        external_id: Identifier the gateway assigned to the transaction.
        data: Side-channel diagnostics (raw request, raw response, errors).
        transactor: The transactor that produced this result.
    """

    status: ResultStatus = ResultStatus.PENDING
    message: str = ""
    external_id: str | None = None
    data: dict[str, Any] = field(default_factory=dict)
    transactor: AbstractTransactor | None = field(default=None, repr=False)

    @property
    def is_approved(self) -> bool:
        return self.status is ResultStatus.APPROVED

    def get_data(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default)

    def set_data(self, key: str, value: Any) -> None:
        self.data[key] = value

    def absorb(self, other: Result) -> None:
        """Take over the outcome of another result."""
        self.status = other.status
        self.message = other.message
        self.external_id = other.external_id
        self.data.update(other.data)
        self.transactor = other.transactor


@dataclass(eq=False)
class Transaction:
    """A unit of work submitted to a transactor.

    ``parent`` links a Capture, Refund or Void to the transaction whose
    external id it acts on; the link does not own the parent.
    """

    type: TransactionType | None
    network: NetworkType | None
    amount: Decimal = Decimal("0")
    account: Account | None = None
    credentials: Credentials | None = field(default=None, repr=False)
    parent: Transaction | None = field(default=None, repr=False)
    result: Result = field(default_factory=Result)
    _transacted: bool = field(default=False, init=False, repr=False)

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            self.amount = Decimal(str(self.amount))
        if self.amount < 0:
            raise ValueError(f"Transaction amount must be non-negative, got {self.amount}")

    @property
    def transacted(self) -> bool:
        return self._transacted

    def mark_transacted(self) -> None:
        """Flag the transaction as processed.

        Raises:
            TransactionAlreadyProcessedError: If it was already flagged.
        """
        if self._transacted:
            raise TransactionAlreadyProcessedError()
        self._transacted = True

    def create_child(
        self,
        transaction_type: TransactionType,
        amount: Decimal | int | str | None = None,
    ) -> Transaction:
        """Build a follow-up transaction (capture, refund, void) linked to this one."""
        return Transaction(
            type=transaction_type,
            network=self.network,
            amount=self.amount if amount is None else amount,
            account=self.account,
            credentials=self.credentials,
            parent=self,
        )
