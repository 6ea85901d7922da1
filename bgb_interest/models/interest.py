from dataclasses import dataclass
from datetime import date
from decimal import Decimal


@dataclass(frozen=True)
class PartialPayment:
    date: date
    amount: Decimal

    def to_dict(self) -> dict:
        return {"date": self.date.isoformat(), "amount": self.amount}


@dataclass(frozen=True)
class Period:
    """One sub-period with constant base rate, calendar year and principal.

    ``end`` is inclusive; ``days`` is ``end - start`` in calendar days.
    """
    start: date
    end: date
    days: int
    base_rate: Decimal
    interest_rate: Decimal  # base rate + surcharge
    interest: Decimal
    principal: Decimal
    partial_payment: PartialPayment | None = None  # Paid on ``end``

    def to_dict(self) -> dict:
        data = {
            "from": self.start.isoformat(),
            "to": self.end.isoformat(),
            "days": self.days,
            "base_rate": self.base_rate,
            "interest_rate": self.interest_rate,
            "interest": self.interest,
            "principal": self.principal,
        }
        if self.partial_payment is not None:
            data["partial_payment"] = self.partial_payment.to_dict()
        return data


@dataclass(frozen=True)
class CalculationResult:
    total_interest: Decimal
    total_days: int
    amount: Decimal
    is_consumer: bool
    periods: tuple[Period, ...] = ()
    partial_payments: tuple[PartialPayment, ...] = ()

    @property
    def total_claim(self) -> Decimal:
        return self.amount + self.total_interest

    def to_dict(self) -> dict:
        return {
            "total_interest": self.total_interest,
            "total_days": self.total_days,
            "amount": self.amount,
            "is_consumer": self.is_consumer,
            "periods": [p.to_dict() for p in self.periods],
            "partial_payments": [p.to_dict() for p in self.partial_payments],
        }
