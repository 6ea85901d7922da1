"""Partition a default span into sub-periods.

A boundary falls on the earliest of: the next base-rate change, Dec 31 of the
current year (when splitting by year), the next partial payment, or the end of
the span. Pure functions, no I/O.
"""

from dataclasses import dataclass
from datetime import date, timedelta
from decimal import Decimal
from typing import Iterator, Sequence

from bgb_interest.models.interest import PartialPayment
from bgb_interest.models.rates import RateSeries

ONE_DAY = timedelta(days=1)


@dataclass(frozen=True)
class Segment:
    start: date
    end: date  # Inclusive
    base_rate: Decimal
    payment: PartialPayment | None = None  # Paid on ``end``
    opening_payment: PartialPayment | None = None  # Paid on a day already passed

    @property
    def days(self) -> int:
        return (self.end - self.start).days


def year_end(day: date) -> date:
    return date(day.year, 12, 31)


def merge_payments(payments: Sequence[PartialPayment]) -> PartialPayment | None:
    """Collapse payments into one reduction dated on the last of them."""
    if not payments:
        return None
    if len(payments) == 1:
        return payments[0]
    return PartialPayment(
        date=payments[-1].date,
        amount=sum((p.amount for p in payments), Decimal("0")),
    )


def segment_periods(
    start: date,
    end: date,
    rates: RateSeries,
    payments: Sequence[PartialPayment] = (),
    split_by_year: bool = False,
) -> Iterator[Segment]:
    """Yield the sub-periods of ``[start, end]`` in order.

    Args:
        start: Due date; the cursor starts here.
        end: Payment date; the last segment ends here.
        rates: Base-rate series covering ``start``.
        payments: Partial payments sorted by date, all within ``(start, end]``.
        split_by_year: Also break at every Dec 31.

    Each segment after the first starts one day after the previous boundary.
    Segments with zero days are never yielded; payments falling on such a step
    are carried into the next segment as its opening payment.
    """
    cursor = start
    idx = 0
    carried: list[PartialPayment] = []

    while cursor < end:
        # Payments the cursor has already reached reduce the next segment up front
        while idx < len(payments) and payments[idx].date <= cursor:
            carried.append(payments[idx])
            idx += 1

        base_rate = rates.rate_at(cursor)
        boundary = rates.next_change_after(cursor, end)

        if split_by_year:
            boundary = min(boundary, year_end(cursor))

        if idx < len(payments) and payments[idx].date < boundary:
            boundary = payments[idx].date

        if boundary > cursor:
            trailing: list[PartialPayment] = []
            while idx < len(payments) and payments[idx].date == boundary:
                trailing.append(payments[idx])
                idx += 1

            yield Segment(
                start=cursor,
                end=boundary,
                base_rate=base_rate,
                payment=merge_payments(trailing),
                opening_payment=merge_payments(carried),
            )
            carried = []

        cursor = boundary + ONE_DAY
