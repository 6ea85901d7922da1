"""Base-rate series: dated rate changes with point-in-time lookup."""

from bisect import bisect_right
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Iterator, Mapping

from bgb_interest.errors import RateNotFoundError, RateSeriesError


@dataclass(frozen=True)
class RateChange:
    """A base rate that takes effect on the first day of ``year``/``month``."""
    year: int
    month: int
    rate: Decimal  # Percent, e.g. Decimal("3.12")

    @classmethod
    def parse(cls, key: str, rate: Decimal | float | str) -> "RateChange":
        """Build from a ``YYYY-MM`` key as used by the cache file and SDMX data."""
        try:
            year_str, month_str = key.split("-")
            year, month = int(year_str), int(month_str)
        except ValueError as e:
            raise RateSeriesError(f"Invalid rate month: {key!r}") from e
        if not 1 <= month <= 12:
            raise RateSeriesError(f"Invalid rate month: {key!r}")
        return cls(year=year, month=month, rate=Decimal(str(rate)))

    @property
    def key(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"

    @property
    def effective_date(self) -> date:
        return date(self.year, self.month, 1)


@dataclass(frozen=True)
class RateSeries:
    """Ascending, non-empty sequence of base-rate changes.

    Read-only once built; the calculator shares one instance across calls.
    """
    changes: tuple[RateChange, ...]
    _months: tuple[tuple[int, int], ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        if not self.changes:
            raise RateSeriesError("Rate series is empty")
        months = tuple((c.year, c.month) for c in self.changes)
        for prev, cur in zip(months, months[1:]):
            if cur <= prev:
                raise RateSeriesError(
                    f"Rate series not in ascending order at {cur[0]:04d}-{cur[1]:02d}"
                )
        object.__setattr__(self, "changes", tuple(self.changes))
        object.__setattr__(self, "_months", months)

    @classmethod
    def from_mapping(cls, rates: Mapping[str, Decimal | float | str]) -> "RateSeries":
        """Build from a ``{"YYYY-MM": rate}`` mapping, keeping its order."""
        return cls(tuple(RateChange.parse(key, rate) for key, rate in rates.items()))

    def to_mapping(self) -> dict[str, Decimal]:
        return {c.key: c.rate for c in self.changes}

    def __len__(self) -> int:
        return len(self.changes)

    def __iter__(self) -> Iterator[RateChange]:
        return iter(self.changes)

    @property
    def first(self) -> RateChange:
        return self.changes[0]

    @property
    def latest(self) -> RateChange:
        return self.changes[-1]

    def rate_at(self, day: date) -> Decimal:
        """Return the base rate in effect on ``day``.

        Raises RateNotFoundError if ``day`` precedes the first change.
        """
        idx = bisect_right(self._months, (day.year, day.month)) - 1
        if idx < 0:
            raise RateNotFoundError(f"No base rate found for date: {day.isoformat()}")
        return self.changes[idx].rate

    def next_change_after(self, day: date, upper_bound: date) -> date:
        """First day of the next rate change after ``day``'s month, capped at ``upper_bound``."""
        idx = bisect_right(self._months, (day.year, day.month))
        if idx >= len(self.changes):
            return upper_bound
        return min(self.changes[idx].effective_date, upper_bound)
