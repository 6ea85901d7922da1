"""Pydantic schemas for API request/response models."""

import datetime
from decimal import Decimal

from pydantic import BaseModel, Field


# ---- Request schemas ----

class PartialPaymentSchema(BaseModel):
    date: datetime.date
    amount: Decimal


class InterestRequest(BaseModel):
    amount: Decimal = Field(..., description="Principal owed on the due date (EUR)")
    due_date: datetime.date = Field(..., description="Start of default")
    payment_date: datetime.date = Field(..., description="End of default")
    is_consumer: bool = True
    split_by_year: bool = False
    partial_payments: list[PartialPaymentSchema] = []


# ---- Response schemas ----

class PeriodResponse(BaseModel):
    start: datetime.date
    end: datetime.date
    days: int
    base_rate: Decimal
    interest_rate: Decimal
    interest: Decimal
    principal: Decimal
    partial_payment: PartialPaymentSchema | None = None


class InterestResponse(BaseModel):
    total_interest: Decimal
    total_days: int
    amount: Decimal
    total_claim: Decimal
    is_consumer: bool
    periods: list[PeriodResponse]
    partial_payments: list[PartialPaymentSchema]


class RateChangeResponse(BaseModel):
    month: str  # YYYY-MM
    rate: Decimal


class RatesResponse(BaseModel):
    count: int
    current_rate: Decimal
    changes: list[RateChangeResponse]
