from fastapi import APIRouter, Depends

from chalet.api.deps import get_site_config_service
from chalet.schemas.reservation import SiteSettingIn, SiteSettingOut
from chalet.services.site_config_service import SiteConfigService

router = APIRouter(prefix="/site-config", tags=["site-config"])


@router.get("/{key}", response_model=SiteSettingOut)
async def get_site_setting(
    key: str,
    service: SiteConfigService = Depends(get_site_config_service),
):
    return SiteSettingOut(key=key, value=await service.get(key))


@router.put("/{key}", response_model=SiteSettingOut)
async def put_site_setting(
    key: str,
    payload: SiteSettingIn,
    service: SiteConfigService = Depends(get_site_config_service),
):
    return SiteSettingOut(key=key, value=await service.set(key, payload.value))
