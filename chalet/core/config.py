import os
from decimal import Decimal

from dotenv import load_dotenv
from pydantic import BaseModel

from chalet.domain.pricing import PricingConfig

# Load variables from .env
load_dotenv()


class Settings(BaseModel):
    app_name: str = "Chalé Serra Crato"
    database_url: str = "sqlite+aiosqlite:///./chalet.db"

    # Pricing rules
    base_price: Decimal = Decimal("400")
    base_guests: int = 2
    extra_person_fee: Decimal = Decimal("50")
    max_guests: int = 8
    max_pets: int = 5

    # Rate limiting settings
    rate_limit_enabled: bool = True  # Killswitch for quick disable
    rate_limit_reservations: str = "10/minute"

    # Logging settings
    log_format: str = "console"  # Options: "console", "json"
    log_slow_request_threshold_ms: int = 500  # Log timing only if duration > threshold

    @property
    def pricing(self) -> PricingConfig:
        return PricingConfig(
            base_price=self.base_price,
            base_guests=self.base_guests,
            extra_person_fee=self.extra_person_fee,
            max_guests=self.max_guests,
            max_pets=self.max_pets,
        )


settings = Settings(
    app_name=os.environ.get("APP_NAME", "Chalé Serra Crato"),
    database_url=os.environ.get("DATABASE_URL", "sqlite+aiosqlite:///./chalet.db"),
    base_price=Decimal(os.environ.get("BASE_PRICE", "400")),
    base_guests=int(os.environ.get("BASE_GUESTS", "2")),
    extra_person_fee=Decimal(os.environ.get("EXTRA_PERSON_FEE", "50")),
    max_guests=int(os.environ.get("MAX_GUESTS", "8")),
    max_pets=int(os.environ.get("MAX_PETS", "5")),
    rate_limit_enabled=os.environ.get("RATE_LIMIT_ENABLED", "true").lower() == "true",
    rate_limit_reservations=os.environ.get("RATE_LIMIT_RESERVATIONS", "10/minute"),
    log_format=os.environ.get("LOG_FORMAT", "console"),
    log_slow_request_threshold_ms=int(
        os.environ.get("LOG_SLOW_REQUEST_THRESHOLD_MS", "500")
    ),
)
