"""Unit tests for the GenericTransactor (cash and check)."""

from __future__ import annotations

from decimal import Decimal

import pytest

from transactor.domain.entities import Transaction
from transactor.domain.enums import NetworkType, ResultStatus, TransactionType
from transactor.domain.exceptions import (
    TransactionAlreadyProcessedError,
    UnsupportedNetworkError,
    UnsupportedTransactionTypeError,
)
from transactor.transactors import GenericTransactor


@pytest.fixture
def transactor() -> GenericTransactor:
    return GenericTransactor()


def _cash_sale(amount: str = "12.50") -> Transaction:
    return Transaction(TransactionType.SALE, NetworkType.CASH, amount=Decimal(amount))


class TestGenericTransactor:
    @pytest.mark.parametrize("network", [NetworkType.CASH, NetworkType.CHECK])
    def test_sale_is_approved(self, transactor: GenericTransactor, network: NetworkType) -> None:
        transaction = Transaction(TransactionType.SALE, network, amount=Decimal("40"))

        result = transactor.transact(transaction)

        assert result.status is ResultStatus.APPROVED
        assert result.transactor is transactor
        assert result.external_id is None
        assert transaction.transacted

    def test_refund_and_void_follow_parent(self, transactor: GenericTransactor) -> None:
        sale = _cash_sale()
        transactor.transact(sale)

        refund = transactor.transact(sale.create_child(TransactionType.REFUND, "5.00"))
        void = transactor.transact(sale.create_child(TransactionType.VOID))

        assert refund.is_approved
        assert void.is_approved

    def test_void_without_parent_is_error(self, transactor: GenericTransactor) -> None:
        transaction = Transaction(TransactionType.VOID, NetworkType.CASH)

        result = transactor.transact(transaction)

        assert result.status is ResultStatus.ERROR
        assert "parent transaction is required" in result.message

    @pytest.mark.parametrize(
        "transaction_type",
        [TransactionType.AUTH, TransactionType.QUERY, TransactionType.UPDATE, TransactionType.VALIDATE],
    )
    def test_unsupported_types(
        self, transactor: GenericTransactor, transaction_type: TransactionType
    ) -> None:
        with pytest.raises(UnsupportedTransactionTypeError):
            transactor.transact(Transaction(transaction_type, NetworkType.CASH))

    @pytest.mark.parametrize("network", [NetworkType.CARD, NetworkType.ACH, NetworkType.TOKEN, None])
    def test_unsupported_networks(
        self, transactor: GenericTransactor, network: NetworkType | None
    ) -> None:
        with pytest.raises(UnsupportedNetworkError):
            transactor.transact(Transaction(TransactionType.SALE, network))

    def test_second_transact_raises(self, transactor: GenericTransactor) -> None:
        transaction = _cash_sale()
        transactor.transact(transaction)

        with pytest.raises(TransactionAlreadyProcessedError):
            transactor.transact(transaction)

    def test_rejects_unknown_options(self, transactor: GenericTransactor) -> None:
        result = transactor.transact(_cash_sale(), {"enable_avs": True})

        assert result.status is ResultStatus.ERROR
        assert result.get_data("exception") == "ValidationError"

    def test_tokenize_option_is_accepted(self, transactor: GenericTransactor) -> None:
        result = transactor.transact(_cash_sale(), {"tokenize": True})

        assert result.is_approved
