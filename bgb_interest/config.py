import tempfile
from decimal import Decimal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "BGB_INTEREST_",
        "frozen": True,
    }

    # Rate cache
    cache_directory: str = tempfile.gettempdir()
    cache_filename: str = "base_rates.json"
    cache_max_age_days: int = 30

    # Deutsche Bundesbank SDMX download of the monthly base rate series
    bundesbank_url: str = (
        "https://api.statistiken.bundesbank.de/rest/download/BBIN1/"
        "M.DE.BBK.BBKBAS2.EUR.ME?format=sdmx&lang=de"
    )
    http_timeout: float = 30.0

    # §288 BGB surcharges in percentage points on top of the base rate
    consumer_surcharge: Decimal = Decimal("5.0")
    business_surcharge: Decimal = Decimal("9.0")

    # Logging
    log_level: str = "INFO"

    def surcharge_for(self, is_consumer: bool) -> Decimal:
        return self.consumer_surcharge if is_consumer else self.business_surcharge


settings = Settings()
