"""JSON file cache for the base rate series.

Layout: ``{"metadata": {"source_url", "last_updated"}, "data": {"YYYY-MM": rate}}``.
"""

import json
import logging
from datetime import datetime, timedelta
from decimal import Decimal
from pathlib import Path

from pydantic import ValidationError

from bgb_interest.config import settings
from bgb_interest.errors import RateParseError, SourceUnavailableError
from bgb_interest.models.rate_cache import RateCacheDocument, RateCacheMetadata

logger = logging.getLogger(__name__)


class RateCache:
    def __init__(self, cache_directory: str | Path | None = None, filename: str | None = None):
        self.cache_directory = Path(cache_directory or settings.cache_directory)
        self.filename = filename or settings.cache_filename

    @property
    def path(self) -> Path:
        return self.cache_directory / self.filename

    def exists(self) -> bool:
        return self.path.is_file()

    def read(self) -> RateCacheDocument:
        """Load and validate the cache document."""
        try:
            content = self.path.read_text(encoding="utf-8")
        except FileNotFoundError as e:
            raise SourceUnavailableError(
                f"Base rate cache file not found. Run `bgb-interest --refresh rates` first. "
                f"Expected file: {self.path}"
            ) from e
        except OSError as e:
            raise SourceUnavailableError(f"Failed to read base rate cache file: {self.path}") from e

        try:
            return RateCacheDocument.model_validate_json(content)
        except ValidationError as e:
            raise RateParseError(f"Invalid base rate cache file format: {self.path}") from e

    def save(self, rates: dict[str, Decimal], source_url: str = "") -> Path:
        """Write rates with a fresh ``last_updated`` stamp; returns the file path."""
        doc = RateCacheDocument(
            metadata=RateCacheMetadata(source_url=source_url, last_updated=datetime.now()),
            data={month: float(rate) for month, rate in rates.items()},
        )
        try:
            self.cache_directory.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(doc.model_dump(mode="json"), indent=4), encoding="utf-8")
        except OSError as e:
            raise SourceUnavailableError(f"Failed to write base rate cache file: {self.path}") from e

        logger.info("Saved %d base rate entries to %s", len(rates), self.path)
        return self.path

    def last_updated(self) -> datetime | None:
        return self.read().metadata.last_updated

    def is_stale(self, max_age: timedelta) -> bool:
        """True if the cache is older than ``max_age``.

        A cache without a ``last_updated`` stamp is never stale; it is kept until
        an explicit refresh.
        """
        updated = self.last_updated()
        if updated is None:
            return False
        if updated.tzinfo is not None:
            updated = updated.astimezone().replace(tzinfo=None)
        return updated < datetime.now() - max_age
