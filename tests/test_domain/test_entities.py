"""Tests for transaction entities."""

from __future__ import annotations

from datetime import UTC, datetime
from decimal import Decimal

import pytest

from transactor.domain.entities import (
    BankAccount,
    CardAccount,
    Credentials,
    Result,
    SwipedCardAccount,
    TokenAccount,
    Transaction,
)
from transactor.domain.enums import AccountKind, NetworkType, ResultStatus, TransactionType
from transactor.domain.exceptions import (
    TokenAlreadyAssignedError,
    TransactionAlreadyProcessedError,
)


class TestAccounts:
    def test_kinds_and_tokenizability(self) -> None:
        assert CardAccount().kind is AccountKind.CARD
        assert SwipedCardAccount().kind is AccountKind.SWIPED_CARD
        assert BankAccount().kind is AccountKind.BANK
        assert TokenAccount().kind is AccountKind.TOKEN

        assert CardAccount.tokenizable
        assert SwipedCardAccount.tokenizable
        assert BankAccount.tokenizable
        assert not TokenAccount.tokenizable

    def test_assign_token_once(self) -> None:
        account = CardAccount(account_number="4111111111111111")
        issued = datetime(2026, 1, 2, tzinfo=UTC)

        account.assign_token("vault-1", issued)

        assert account.account_token == "vault-1"
        assert account.date_tokenized == issued
        assert not account.needs_token
        with pytest.raises(TokenAlreadyAssignedError):
            account.assign_token("vault-2")
        assert account.account_token == "vault-1"

    def test_token_account_never_needs_token(self) -> None:
        assert not TokenAccount().needs_token

    def test_last_four(self) -> None:
        assert CardAccount(account_number="4111111111111234").last_four == "1234"
        assert BankAccount(account_number="99887766").last_four == "7766"
        assert TokenAccount(account_token="abc").last_four is None

    def test_repr_hides_sensitive_fields(self) -> None:
        account = SwipedCardAccount(
            account_number="4111111111111111",
            cvv="999",
            track_one="%B4111111111111111^DOE/JOHN^3010?",
            account_token="vault-secret",
        )
        text = repr(account)
        assert "4111111111111111" not in text
        assert "999" not in text
        assert "vault-secret" not in text


class TestCredentials:
    def test_get_and_set(self) -> None:
        credentials = Credentials()
        credentials.set_credential("username", "demo")

        assert credentials.get_credential("username") == "demo"
        assert credentials.get_credential("password") is None

    def test_is_complete(self) -> None:
        credentials = Credentials(credentials={"username": "demo", "password": None})
        assert not credentials.is_complete("username", "password")

        credentials.set_credential("password", "password")
        assert credentials.is_complete("username", "password")


class TestTransaction:
    def test_result_created_pending(self) -> None:
        transaction = Transaction(type=TransactionType.SALE, network=NetworkType.CARD)
        assert transaction.result.status is ResultStatus.PENDING
        assert not transaction.transacted

    def test_amount_coerced_to_decimal(self) -> None:
        transaction = Transaction(TransactionType.SALE, NetworkType.CASH, amount="12.50")
        assert transaction.amount == Decimal("12.50")

    def test_negative_amount_rejected(self) -> None:
        with pytest.raises(ValueError, match="non-negative"):
            Transaction(TransactionType.SALE, NetworkType.CASH, amount=Decimal("-1"))

    def test_mark_transacted_only_once(self) -> None:
        transaction = Transaction(TransactionType.SALE, NetworkType.CASH)
        transaction.mark_transacted()

        assert transaction.transacted
        with pytest.raises(TransactionAlreadyProcessedError):
            transaction.mark_transacted()

    def test_create_child_links_parent(self) -> None:
        account = CardAccount(account_number="4111111111111111")
        credentials = Credentials(credentials={"username": "demo"})
        parent = Transaction(
            TransactionType.AUTH,
            NetworkType.CARD,
            amount=Decimal("40"),
            account=account,
            credentials=credentials,
        )

        child = parent.create_child(TransactionType.CAPTURE)
        partial = parent.create_child(TransactionType.REFUND, amount="10")

        assert child.parent is parent
        assert child.network is NetworkType.CARD
        assert child.account is account
        assert child.credentials is credentials
        assert child.amount == Decimal("40")
        assert partial.amount == Decimal("10")
        assert child.result is not parent.result


class TestResult:
    def test_data_bag(self) -> None:
        result = Result()
        result.set_data("request", {"type": "sale"})

        assert result.get_data("request") == {"type": "sale"}
        assert result.get_data("missing", "fallback") == "fallback"

    def test_absorb(self) -> None:
        target = Result(data={"kept": True})
        source = Result(
            status=ResultStatus.DECLINED,
            message="Do not honor",
            external_id="T9",
            data={"response": {"response": "2"}},
        )

        target.absorb(source)

        assert target.status is ResultStatus.DECLINED
        assert target.message == "Do not honor"
        assert target.external_id == "T9"
        assert target.data == {"kept": True, "response": {"response": "2"}}
