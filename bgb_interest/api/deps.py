"""FastAPI dependency injection."""

from fastapi import Depends, HTTPException

from bgb_interest.config import settings
from bgb_interest.data.provider import BaseRateProvider
from bgb_interest.engine.calculator import InterestCalculator
from bgb_interest.errors import InterestError
from bgb_interest.models.rates import RateSeries


def get_provider() -> BaseRateProvider:
    return BaseRateProvider(settings)


async def get_rate_series(provider: BaseRateProvider = Depends(get_provider)) -> RateSeries:
    try:
        return await provider.refresh_if_stale()
    except InterestError as e:
        raise HTTPException(status_code=503, detail=f"Base rates unavailable: {e}")


def get_calculator(rates: RateSeries = Depends(get_rate_series)) -> InterestCalculator:
    return InterestCalculator(rates, settings)
