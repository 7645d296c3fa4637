"""Tests for domain enumerations."""

from __future__ import annotations

from transactor.domain.enums import (
    PARENT_REQUIRED_TYPES,
    BankAccountType,
    NetworkType,
    ResultStatus,
    TransactionType,
)


class TestTransactionType:
    def test_all_types_exist(self) -> None:
        expected = {
            "Sale", "Auth", "Capture", "Credit", "Refund",
            "Void", "Query", "Update", "Validate",
        }
        actual = {t.value for t in TransactionType}
        assert actual == expected

    def test_type_is_str_enum(self) -> None:
        assert isinstance(TransactionType.SALE, str)
        assert TransactionType.SALE == "Sale"

    def test_parent_required_types(self) -> None:
        assert PARENT_REQUIRED_TYPES == {
            TransactionType.CAPTURE,
            TransactionType.REFUND,
            TransactionType.VOID,
        }


class TestNetworkType:
    def test_all_networks_exist(self) -> None:
        assert {n.value for n in NetworkType} == {"Card", "ACH", "Cash", "Check", "Token"}


class TestResultStatus:
    def test_closed_set(self) -> None:
        assert len(ResultStatus) == 4
        assert ResultStatus.PENDING == "Pending"


class TestBankAccountType:
    def test_business_and_savings_flags(self) -> None:
        assert BankAccountType.BUSINESS_SAVINGS.is_business
        assert BankAccountType.BUSINESS_SAVINGS.is_savings
        assert not BankAccountType.PERSONAL_CHECKING.is_business
        assert not BankAccountType.PERSONAL_CHECKING.is_savings
