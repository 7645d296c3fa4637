"""Card expiration value types."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Month:
    """A calendar month, 1 through 12."""

    value: int

    def __post_init__(self) -> None:
        if not 1 <= self.value <= 12:
            raise ValueError(f"{self.value} is not a valid value")

    def __str__(self) -> str:
        return f"{self.value:02d}"


@dataclass(frozen=True)
class Year:
    """A four-digit calendar year.

    Two-digit years are rejected so that ``short_year`` is never ambiguous.
    """

    value: int

    def __post_init__(self) -> None:
        if not 1000 <= self.value <= 9999:
            raise ValueError(f"{self.value} is not a valid value")

    @property
    def short_year(self) -> str:
        return str(self.value)[-2:]

    @property
    def long_year(self) -> str:
        return str(self.value)

    def __str__(self) -> str:
        return self.long_year
