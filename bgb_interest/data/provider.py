"""Base rate provider: owns fetching, caching and the refresh policy.

The calculator only ever receives the RateSeries this produces.
"""

import logging
from datetime import timedelta

from bgb_interest.config import Settings, settings as default_settings
from bgb_interest.data.bundesbank import BundesbankClient
from bgb_interest.data.rate_cache import RateCache
from bgb_interest.errors import InterestError, RateParseError, RateSeriesError
from bgb_interest.models.rates import RateSeries

logger = logging.getLogger(__name__)


class BaseRateProvider:
    def __init__(
        self,
        settings: Settings | None = None,
        client: BundesbankClient | None = None,
        cache: RateCache | None = None,
    ):
        self.settings = settings or default_settings
        self.client = client or BundesbankClient(
            url=self.settings.bundesbank_url, timeout=self.settings.http_timeout
        )
        self.cache = cache or RateCache(self.settings.cache_directory, self.settings.cache_filename)

    @property
    def cache_file_path(self):
        return self.cache.path

    def load(self) -> RateSeries:
        """Read the cached series.

        Raises SourceUnavailableError if there is no cache and RateParseError
        if it cannot be turned into a valid series.
        """
        doc = self.cache.read()
        try:
            return RateSeries.from_mapping(doc.data)
        except RateSeriesError as e:
            raise RateParseError(f"Invalid base rate data in {self.cache.path}: {e}") from e

    async def update_cache(self) -> RateSeries:
        """Fetch from the Bundesbank, parse and persist. Raises on any failure."""
        rates = await self.client.fetch_rates()
        try:
            series = RateSeries.from_mapping(rates)
        except RateSeriesError as e:
            raise RateParseError(f"Invalid base rate data from Bundesbank: {e}") from e
        self.cache.save(series.to_mapping(), source_url=self.client.url)
        return series

    async def refresh_if_stale(self, max_age: timedelta | None = None) -> RateSeries:
        """Return the cached series, refreshing it first when older than ``max_age``.

        A failed refresh keeps the last known good series. Without any cache
        the refresh error propagates.
        """
        max_age = max_age or timedelta(days=self.settings.cache_max_age_days)

        if not self.cache.exists():
            logger.info("No base rate cache at %s, fetching", self.cache.path)
            return await self.update_cache()

        current = self.load()
        if not self.cache.is_stale(max_age):
            return current

        logger.info("Base rate cache older than %s, refreshing", max_age)
        try:
            return await self.update_cache()
        except InterestError as e:
            logger.warning("Base rate refresh failed, using cached rates: %s", e)
            return current
