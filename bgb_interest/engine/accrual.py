"""Simple (non-compounding) default interest per sub-period.

Pure functions: Decimal in, dataclass out. No I/O.
Day count is actual/365: the divisor stays 365 in leap years.
"""

from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable

from bgb_interest.engine.segmenter import Segment
from bgb_interest.models.interest import PartialPayment, Period

TWO_PLACES = Decimal("0.01")
DAYS_PER_YEAR = 365


def day_count(start: date, end: date) -> int:
    return (end - start).days


def period_interest(principal: Decimal, interest_rate: Decimal, days: int) -> Decimal:
    """Interest on ``principal`` at ``interest_rate`` percent p.a. over ``days``."""
    # I = P * r * d / (100 * 365)
    interest = principal * interest_rate * days / (100 * DAYS_PER_YEAR)
    return interest.quantize(TWO_PLACES, ROUND_HALF_UP)


def apply_payment(principal: Decimal, payment: PartialPayment | None) -> Decimal:
    """Reduce principal by a payment, never below zero."""
    if payment is None:
        return principal
    return max(Decimal("0"), principal - payment.amount)


def accrue_periods(
    segments: Iterable[Segment],
    principal: Decimal,
    surcharge: Decimal,
) -> list[Period]:
    """Compute interest for each segment against the running principal.

    Accrued interest is never added to the principal (§289 BGB). Segments
    reached after the principal is fully repaid produce no period.
    """
    periods: list[Period] = []

    for seg in segments:
        principal = apply_payment(principal, seg.opening_payment)

        if principal > 0:
            interest_rate = seg.base_rate + surcharge
            periods.append(Period(
                start=seg.start,
                end=seg.end,
                days=seg.days,
                base_rate=seg.base_rate,
                interest_rate=interest_rate,
                interest=period_interest(principal, interest_rate, seg.days),
                principal=principal,
                partial_payment=seg.payment,
            ))

        principal = apply_payment(principal, seg.payment)

    return periods


def total_interest(periods: Iterable[Period]) -> Decimal:
    total = sum((p.interest for p in periods), Decimal("0"))
    return total.quantize(TWO_PLACES, ROUND_HALF_UP)
