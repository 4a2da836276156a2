import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

from chalet.core.errors import StorageError
from chalet.database import AsyncSessionLocal
from chalet.models import SiteSetting
from chalet.utils.sanitizer import clean_text, safe_url

logger = logging.getLogger(__name__)


class SiteConfigService:
    """
    Key/value site settings such as `logo_url`.
    URL keys only keep safe URLs; everything else is HTML-escaped.
    """

    def __init__(self, session_factory=None):
        self.session_factory = session_factory or AsyncSessionLocal

    @staticmethod
    def clean_value(key: str, value: Optional[str]) -> str:
        if "url" in key.lower():
            return safe_url(value)
        return clean_text(value)

    async def get(self, key: str) -> Optional[str]:
        try:
            async with self.session_factory() as session:
                setting = await session.get(SiteSetting, key)
                return setting.value if setting else None
        except SQLAlchemyError as e:
            logger.error(f"Error reading site setting {key}: {e}", exc_info=True)
            raise StorageError() from e

    async def set(self, key: str, value: Optional[str]) -> str:
        clean_value = self.clean_value(key, value)
        logger.info("Updating site setting", extra={"key": key})

        try:
            async with self.session_factory() as session:
                setting = await session.get(SiteSetting, key)
                if setting is None:
                    setting = SiteSetting(key=key)
                    session.add(setting)
                setting.value = clean_value
                setting.updated_at = datetime.now(timezone.utc)
                await session.commit()
        except SQLAlchemyError as e:
            logger.error(f"Error updating site setting {key}: {e}", exc_info=True)
            raise StorageError() from e

        return clean_value


site_config_service = SiteConfigService()
