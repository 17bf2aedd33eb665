from fastapi import APIRouter, Depends
from taplist.core.dependencies import require_admin
from taplist.core.realtime import ChangeFeed, get_change_feed
from taplist.database.supabase_client import get_supabase
from taplist.modules.taps.schemas import TapAssign, TapResponse
from taplist.modules.taps.service import TapService
from supabase import Client
from typing import List, Dict

router = APIRouter(prefix="/taps", tags=["taps"])


def get_tap_service(
    supabase: Client = Depends(get_supabase),
    feed: ChangeFeed = Depends(get_change_feed)
) -> TapService:
    return TapService(supabase, feed)


@router.get("", response_model=List[TapResponse])
async def list_taps(service: TapService = Depends(get_tap_service)):
    """List all taps with their beverages (public)"""
    return service.list_taps()


@router.get("/{tap_id}", response_model=TapResponse)
async def get_tap(tap_id: int, service: TapService = Depends(get_tap_service)):
    """Get tap by ID (public)"""
    return service.get_tap(tap_id)


@router.put("/{tap_id}", response_model=TapResponse)
async def assign_tap(
    tap_id: int,
    assignment: TapAssign,
    user_data: Dict = Depends(require_admin),
    service: TapService = Depends(get_tap_service)
):
    """Assign a beverage to a tap; a null beverage_id empties it"""
    return service.assign_tap(tap_id, assignment.beverage_id)


@router.delete("/{tap_id}/beverage", response_model=TapResponse)
async def clear_tap(
    tap_id: int,
    user_data: Dict = Depends(require_admin),
    service: TapService = Depends(get_tap_service)
):
    """Empty a tap"""
    return service.clear_tap(tap_id)
