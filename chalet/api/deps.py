from chalet.core.config import settings
from chalet.domain.pricing import PricingConfig
from chalet.services.reservation_service import ReservationService, reservation_service
from chalet.services.site_config_service import SiteConfigService, site_config_service


def get_pricing_config() -> PricingConfig:
    return settings.pricing


def get_reservation_service() -> ReservationService:
    return reservation_service


def get_site_config_service() -> SiteConfigService:
    return site_config_service
