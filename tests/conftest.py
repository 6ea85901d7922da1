"""Shared fixtures.

Fixture rate series: German base rate changes 2023-01 through 2025-01.
"""

import json
from datetime import datetime, timedelta
from decimal import Decimal

import pytest

from bgb_interest.config import Settings
from bgb_interest.engine.calculator import InterestCalculator
from bgb_interest.models.rates import RateSeries

FIXTURE_RATES = {
    "2023-01": Decimal("1.62"),
    "2023-07": Decimal("3.12"),
    "2024-01": Decimal("3.62"),
    "2024-07": Decimal("3.37"),
    "2025-01": Decimal("2.27"),
}

SAMPLE_SDMX = """<?xml version="1.0" encoding="UTF-8"?>
<message:GenericData xmlns:message="http://www.sdmx.org/resources/sdmxml/schemas/v2_1/message">
    <message:DataSet>
        <generic:Obs xmlns:generic="http://www.sdmx.org/resources/sdmxml/schemas/v2_1/data/generic">
            <generic:ObsDimension value="2023-07"/>
            <generic:ObsValue value="3.12"/>
        </generic:Obs>
        <generic:Obs xmlns:generic="http://www.sdmx.org/resources/sdmxml/schemas/v2_1/data/generic">
            <generic:ObsDimension value="2023-01"/>
            <generic:ObsValue value="1.62"/>
        </generic:Obs>
        <generic:Obs xmlns:generic="http://www.sdmx.org/resources/sdmxml/schemas/v2_1/data/generic">
            <generic:ObsDimension value="2023-02"/>
            <generic:ObsValue value="1.62"/>
        </generic:Obs>
        <generic:Obs xmlns:generic="http://www.sdmx.org/resources/sdmxml/schemas/v2_1/data/generic">
            <generic:ObsDimension value="2024-01"/>
            <generic:ObsValue value="3.62"/>
        </generic:Obs>
    </message:DataSet>
</message:GenericData>
"""


@pytest.fixture
def rate_series() -> RateSeries:
    return RateSeries.from_mapping(FIXTURE_RATES)


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    return Settings(cache_directory=str(tmp_path / "cache"))


@pytest.fixture
def calculator(rate_series, test_settings) -> InterestCalculator:
    return InterestCalculator(rate_series, test_settings)


@pytest.fixture
def write_cache():
    """Write a cache document by hand, e.g. with an old ``last_updated``."""
    def _write(directory, data, age: timedelta | None = None):
        directory.mkdir(parents=True, exist_ok=True)
        metadata = {"source_url": "https://example.invalid/sdmx"}
        if age is not None:
            metadata["last_updated"] = (datetime.now() - age).strftime("%Y-%m-%d %H:%M:%S")
        path = directory / "base_rates.json"
        path.write_text(json.dumps({
            "metadata": metadata,
            "data": {month: float(rate) for month, rate in data.items()},
        }))
        return path
    return _write


@pytest.fixture
def sample_sdmx() -> str:
    return SAMPLE_SDMX
