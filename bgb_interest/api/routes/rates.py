"""Base rate routes."""

from fastapi import APIRouter, Depends

from bgb_interest.api.deps import get_rate_series
from bgb_interest.api.schemas import RateChangeResponse, RatesResponse
from bgb_interest.models.rates import RateSeries

router = APIRouter(prefix="/api/v1/rates", tags=["rates"])


@router.get("", response_model=RatesResponse)
async def get_rates(rates: RateSeries = Depends(get_rate_series)):
    """List the base rate changes currently in use."""
    return RatesResponse(
        count=len(rates),
        current_rate=rates.latest.rate,
        changes=[RateChangeResponse(month=c.key, rate=c.rate) for c in rates],
    )
