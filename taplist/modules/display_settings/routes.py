from fastapi import APIRouter, Depends, UploadFile, File
from taplist.core.dependencies import require_admin
from taplist.core.realtime import ChangeFeed, get_change_feed
from taplist.database.supabase_client import get_supabase
from taplist.modules.display_settings.schemas import DisplaySettingsUpdate, DisplaySettingsResponse
from taplist.modules.display_settings.service import DisplaySettingsService
from supabase import Client
from typing import Dict

router = APIRouter(prefix="/settings", tags=["settings"])


def get_display_settings_service(
    supabase: Client = Depends(get_supabase),
    feed: ChangeFeed = Depends(get_change_feed)
) -> DisplaySettingsService:
    return DisplaySettingsService(supabase, feed)


@router.get("", response_model=DisplaySettingsResponse)
async def get_settings(service: DisplaySettingsService = Depends(get_display_settings_service)):
    """Get display settings (public)"""
    return service.get_settings()


@router.put("", response_model=DisplaySettingsResponse)
async def update_settings(
    settings_data: DisplaySettingsUpdate,
    user_data: Dict = Depends(require_admin),
    service: DisplaySettingsService = Depends(get_display_settings_service)
):
    """Update title, fonts, colors or background"""
    return service.update_settings(settings_data)


@router.post("/background", response_model=DisplaySettingsResponse)
async def upload_background(
    file: UploadFile = File(...),
    user_data: Dict = Depends(require_admin),
    service: DisplaySettingsService = Depends(get_display_settings_service)
):
    """Upload a background image"""
    return await service.upload_background(file)


@router.delete("/background", response_model=DisplaySettingsResponse)
async def remove_background(
    user_data: Dict = Depends(require_admin),
    service: DisplaySettingsService = Depends(get_display_settings_service)
):
    """Remove the background image"""
    return service.remove_background()
