"""Deutsche Bundesbank client for the statutory base rate (Basiszinssatz)."""

import logging
import xml.etree.ElementTree as ET
from decimal import Decimal, InvalidOperation

import httpx

from bgb_interest.config import settings
from bgb_interest.errors import RateParseError, SourceUnavailableError

logger = logging.getLogger(__name__)

SDMX_GENERIC_NS = "http://www.sdmx.org/resources/sdmxml/schemas/v2_1/data/generic"
NS = {"generic": SDMX_GENERIC_NS}


class BundesbankClient:
    def __init__(self, url: str | None = None, timeout: float | None = None):
        self.url = url or settings.bundesbank_url
        self.timeout = timeout or settings.http_timeout

    async def fetch_xml(self) -> str:
        """Download the SDMX document for the base rate series."""
        try:
            async with httpx.AsyncClient(timeout=self.timeout, follow_redirects=True) as client:
                resp = await client.get(self.url)
                resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.warning("Bundesbank request failed: %s", e)
            raise SourceUnavailableError("Failed to fetch data from Bundesbank API") from e
        except httpx.RequestError as e:
            logger.warning("Bundesbank unreachable: %s", e)
            raise SourceUnavailableError("Failed to fetch data from Bundesbank API") from e
        return resp.text

    async def fetch_rates(self) -> dict[str, Decimal]:
        return parse_sdmx(await self.fetch_xml())


def parse_sdmx(xml_content: str) -> dict[str, Decimal]:
    """Extract ``{"YYYY-MM": rate}`` from an SDMX generic data message.

    Observations missing a dimension or value are skipped. The result is sorted
    oldest first and keeps only the months where the rate changed.
    """
    try:
        root = ET.fromstring(xml_content)
    except ET.ParseError as e:
        raise RateParseError("Failed to parse XML data") from e

    observations = root.findall(".//generic:Obs", NS)
    if not observations:
        raise RateParseError("No observations found in XML data")

    rates: dict[str, Decimal] = {}
    for obs in observations:
        dimension = obs.find("generic:ObsDimension", NS)
        value = obs.find("generic:ObsValue", NS)
        if dimension is None or value is None:
            continue
        month = dimension.get("value")
        raw_rate = value.get("value")
        if not month or raw_rate is None:
            continue
        try:
            rate = Decimal(raw_rate)
        except InvalidOperation:
            rate = None
        if rate is None or not rate.is_finite():
            logger.debug("Skipping non-numeric observation %s=%r", month, raw_rate)
            continue
        rates[month] = rate

    return filter_changes_only(dict(sorted(rates.items())))


def filter_changes_only(rates: dict[str, Decimal]) -> dict[str, Decimal]:
    """Keep the first month of each run of equal consecutive rates."""
    filtered: dict[str, Decimal] = {}
    previous: Decimal | None = None
    for month, rate in rates.items():
        if previous is None or rate != previous:
            filtered[month] = rate
            previous = rate
    return filtered
