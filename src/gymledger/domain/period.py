"""Year-month period keys used to join payments to calendar months."""

import re
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Iterator

from gymledger.domain.errors import ValidationError

_PERIOD_PATTERN = re.compile(r"^(\d{4})-(\d{2})$")


class Ordering(str, Enum):
    """Result of comparing two period keys."""

    BEFORE = "before"
    SAME = "same"
    AFTER = "after"


@dataclass(frozen=True, order=True)
class PeriodKey:
    """A calendar month, rendered as ``YYYY-MM``."""

    year: int
    month: int

    def __post_init__(self):
        if not 1 <= self.month <= 12:
            raise ValidationError(f"Invalid month {self.month} in period key")
        if not 1 <= self.year <= 9999:
            raise ValidationError(f"Invalid year {self.year} in period key")

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"

    @classmethod
    def parse(cls, value: str) -> "PeriodKey":
        """Parse a ``YYYY-MM`` string.

        Raises:
            ValidationError: If the string is not a valid period key
        """
        match = _PERIOD_PATTERN.match(value.strip())
        if match is None:
            raise ValidationError(f"Invalid period key '{value}', expected YYYY-MM")
        return cls(int(match.group(1)), int(match.group(2)))

    def next(self) -> "PeriodKey":
        if self.month == 12:
            return PeriodKey(self.year + 1, 1)
        return PeriodKey(self.year, self.month + 1)

    def previous(self) -> "PeriodKey":
        if self.month == 1:
            return PeriodKey(self.year - 1, 12)
        return PeriodKey(self.year, self.month - 1)


def to_period_key(value: date) -> PeriodKey:
    """Map a date (or datetime) to its containing calendar month."""
    return PeriodKey(value.year, value.month)


def compare(a: PeriodKey, b: PeriodKey) -> Ordering:
    """Compare two period keys chronologically."""
    if a < b:
        return Ordering.BEFORE
    if a > b:
        return Ordering.AFTER
    return Ordering.SAME


def period_range(start: PeriodKey, end: PeriodKey) -> Iterator[PeriodKey]:
    """Yield every period key from start to end, inclusive."""
    current = start
    while current <= end:
        yield current
        current = current.next()


def year_periods(year: int) -> list[PeriodKey]:
    """Return the twelve period keys of a year."""
    return [PeriodKey(year, month) for month in range(1, 13)]
