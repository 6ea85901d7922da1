"""Default interest calculation routes."""

from fastapi import APIRouter, Depends, HTTPException

from bgb_interest.api.deps import get_calculator
from bgb_interest.api.schemas import (
    InterestRequest,
    InterestResponse,
    PartialPaymentSchema,
    PeriodResponse,
)
from bgb_interest.engine.calculator import InterestCalculator
from bgb_interest.errors import InterestError
from bgb_interest.models.interest import CalculationResult, PartialPayment

router = APIRouter(prefix="/api/v1", tags=["interest"])


def _payment_schema(payment: PartialPayment | None) -> PartialPaymentSchema | None:
    if payment is None:
        return None
    return PartialPaymentSchema(date=payment.date, amount=payment.amount)


def _result_to_response(result: CalculationResult) -> InterestResponse:
    """Convert engine CalculationResult to API response."""
    periods = [
        PeriodResponse(
            start=p.start,
            end=p.end,
            days=p.days,
            base_rate=p.base_rate,
            interest_rate=p.interest_rate,
            interest=p.interest,
            principal=p.principal,
            partial_payment=_payment_schema(p.partial_payment),
        )
        for p in result.periods
    ]
    return InterestResponse(
        total_interest=result.total_interest,
        total_days=result.total_days,
        amount=result.amount,
        total_claim=result.total_claim,
        is_consumer=result.is_consumer,
        periods=periods,
        partial_payments=[_payment_schema(p) for p in result.partial_payments],
    )


@router.post("/interest", response_model=InterestResponse)
async def calculate_interest(
    req: InterestRequest,
    calculator: InterestCalculator = Depends(get_calculator),
):
    """Calculate §288 BGB default interest, optionally with partial payments."""
    try:
        result = calculator.calculate_with_partial_payments(
            req.amount,
            req.due_date,
            req.payment_date,
            is_consumer=req.is_consumer,
            partial_payments=[PartialPayment(date=p.date, amount=p.amount) for p in req.partial_payments],
            split_by_year=req.split_by_year,
        )
    except InterestError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return _result_to_response(result)
