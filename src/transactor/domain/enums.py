"""Domain enumerations for the transactor package.

These enums define the closed sets of values used throughout the system.
They are framework-agnostic (no httpx, no pydantic imports).
"""

import enum


class TransactionType(enum.StrEnum):
    """Kinds of transaction a caller can submit.

    Capture, Refund and Void act on a previously processed parent
    transaction and are rejected by validation without one.
    """

    SALE = "Sale"
    AUTH = "Auth"
    CAPTURE = "Capture"
    CREDIT = "Credit"
    REFUND = "Refund"
    VOID = "Void"
    QUERY = "Query"
    UPDATE = "Update"
    VALIDATE = "Validate"


# Types that reference the external id of a parent transaction.
PARENT_REQUIRED_TYPES = frozenset({
    TransactionType.CAPTURE,
    TransactionType.REFUND,
    TransactionType.VOID,
})


class NetworkType(enum.StrEnum):
    """Payment networks a transaction can travel over."""

    CARD = "Card"
    ACH = "ACH"
    CASH = "Cash"
    CHECK = "Check"
    TOKEN = "Token"


class ResultStatus(enum.StrEnum):
    """Normalized outcome of a transaction.

    PENDING is the state of a Result before its transactor has run.
    """

    PENDING = "Pending"
    APPROVED = "Approved"
    DECLINED = "Declined"
    ERROR = "Error"


class AccountKind(enum.StrEnum):
    """Tag of the Account variants; adapters dispatch on it with ``match``."""

    BANK = "bank"
    CARD = "card"
    SWIPED_CARD = "swiped_card"
    TOKEN = "token"


class BankAccountType(enum.StrEnum):
    PERSONAL_CHECKING = "Personal Checking"
    PERSONAL_SAVINGS = "Personal Savings"
    BUSINESS_CHECKING = "Business Checking"
    BUSINESS_SAVINGS = "Business Savings"

    @property
    def is_business(self) -> bool:
        return self in (BankAccountType.BUSINESS_CHECKING, BankAccountType.BUSINESS_SAVINGS)

    @property
    def is_savings(self) -> bool:
        return self in (BankAccountType.PERSONAL_SAVINGS, BankAccountType.BUSINESS_SAVINGS)
