"""Tests for the Month and Year expiration types."""

from __future__ import annotations

import pytest

from transactor.domain.types import Month, Year


class TestYear:
    def test_invalid_year(self) -> None:
        with pytest.raises(ValueError, match="12 is not a valid value"):
            Year(12)

    def test_getters(self) -> None:
        year = Year(2012)

        assert year.short_year == "12"
        assert year.long_year == "2012"
        assert str(year) == year.long_year


class TestMonth:
    def test_zero_padded(self) -> None:
        assert str(Month(3)) == "03"
        assert str(Month(12)) == "12"

    @pytest.mark.parametrize("value", [0, 13, -1])
    def test_out_of_range(self, value: int) -> None:
        with pytest.raises(ValueError, match="is not a valid value"):
            Month(value)
