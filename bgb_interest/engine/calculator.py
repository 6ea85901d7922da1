"""Default interest calculator for §288 BGB.

Orchestrates validation, period segmentation and accrual. Holds no state
between calls: the rate series and settings are read-only snapshots.
"""

import logging
from collections.abc import Mapping
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Iterable

from bgb_interest.config import Settings, settings as default_settings
from bgb_interest.engine.accrual import accrue_periods, day_count, total_interest
from bgb_interest.engine.segmenter import segment_periods
from bgb_interest.errors import (
    InvalidAmountError,
    InvalidPaymentAmountError,
    InvalidPaymentDateError,
    InvalidPaymentFormatError,
)
from bgb_interest.models.interest import CalculationResult, PartialPayment
from bgb_interest.models.rates import RateSeries

logger = logging.getLogger(__name__)


def to_decimal(value: Any) -> Decimal:
    """Convert ints, floats and numeric strings to Decimal without float noise."""
    if isinstance(value, bool):
        raise TypeError("bool is not a monetary amount")
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, (int, float, str)):
        result = Decimal(str(value))
    else:
        raise TypeError(f"Not a monetary amount: {value!r}")
    if not result.is_finite():
        raise ValueError(f"Not a finite amount: {value!r}")
    return result


def _as_date(value: date) -> date:
    return value.date() if isinstance(value, datetime) else value


def _parse_payment(payment: Any) -> PartialPayment:
    if isinstance(payment, PartialPayment):
        raw_date, raw_amount = payment.date, payment.amount
    elif isinstance(payment, Mapping) and "date" in payment and "amount" in payment:
        raw_date, raw_amount = payment["date"], payment["amount"]
    else:
        raise InvalidPaymentFormatError(
            'Invalid partial payment format. Expected mapping with "date" and "amount" keys.'
        )

    if not isinstance(raw_date, date):
        raise InvalidPaymentDateError("Partial payment date must be a date object.")

    try:
        amount = to_decimal(raw_amount)
    except (TypeError, ValueError, InvalidOperation) as e:
        raise InvalidPaymentAmountError("Partial payment amount must be a number.") from e
    if amount <= 0:
        raise InvalidPaymentAmountError("Partial payment amount must be greater than zero.")

    return PartialPayment(date=_as_date(raw_date), amount=amount)


def validate_partial_payments(
    payments: Iterable[Any],
    due_date: date,
    payment_date: date,
) -> list[PartialPayment]:
    """Validate payments, drop those outside ``(due_date, payment_date]`` and sort by date.

    The sort is stable: payments on the same date keep their input order.
    """
    validated = []
    for raw in payments:
        payment = _parse_payment(raw)
        if due_date < payment.date <= payment_date:
            validated.append(payment)
        else:
            logger.debug("Ignoring partial payment outside default span: %s", payment)
    validated.sort(key=lambda p: p.date)
    return validated


class InterestCalculator:
    def __init__(self, rates: RateSeries, settings: Settings | None = None):
        self.rates = rates
        self.settings = settings or default_settings

    def calculate(
        self,
        amount: Decimal | float | int | str,
        due_date: date,
        payment_date: date,
        is_consumer: bool = True,
        split_by_year: bool = False,
    ) -> CalculationResult:
        """Calculate default interest without partial payments."""
        return self.calculate_with_partial_payments(
            amount,
            due_date,
            payment_date,
            is_consumer=is_consumer,
            partial_payments=(),
            split_by_year=split_by_year,
        )

    def calculate_with_partial_payments(
        self,
        amount: Decimal | float | int | str,
        due_date: date,
        payment_date: date,
        is_consumer: bool = True,
        partial_payments: Iterable[Any] = (),
        split_by_year: bool = False,
    ) -> CalculationResult:
        """Calculate default interest, reducing principal at each partial payment.

        Args:
            amount: Principal owed on ``due_date``.
            due_date: Start of default.
            payment_date: End of default.
            is_consumer: Consumer (base + 5) or business (base + 9) surcharge.
            partial_payments: PartialPayment objects or ``{"date", "amount"}`` mappings.
            split_by_year: Break periods at every Dec 31.

        Raises:
            InvalidAmountError: ``amount`` is not a positive number.
            InvalidPaymentFormatError, InvalidPaymentDateError,
            InvalidPaymentAmountError: a malformed partial payment.
            RateNotFoundError: ``due_date`` precedes the rate series.
        """
        try:
            principal = to_decimal(amount)
        except (TypeError, ValueError, InvalidOperation) as e:
            raise InvalidAmountError("Amount must be a number") from e
        if principal <= 0:
            raise InvalidAmountError("Amount must be greater than zero")

        due_date = _as_date(due_date)
        payment_date = _as_date(payment_date)
        payments = validate_partial_payments(partial_payments, due_date, payment_date)

        if due_date >= payment_date:
            return CalculationResult(
                total_interest=Decimal("0.00"),
                total_days=0,
                amount=principal,
                is_consumer=is_consumer,
                periods=(),
                partial_payments=tuple(payments),
            )

        surcharge = self.settings.surcharge_for(is_consumer)
        segments = segment_periods(due_date, payment_date, self.rates, payments, split_by_year)
        periods = accrue_periods(segments, principal, surcharge)

        logger.debug(
            "Calculated %d periods for %s from %s to %s", len(periods), principal, due_date, payment_date
        )

        return CalculationResult(
            total_interest=total_interest(periods),
            total_days=day_count(due_date, payment_date),
            amount=principal,
            is_consumer=is_consumer,
            periods=tuple(periods),
            partial_payments=tuple(payments),
        )
