from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse
from taplist.config import settings
from taplist.core.dependencies import get_current_user
from taplist.core.rate_limit import limiter
from taplist.core.realtime import ChangeFeed, get_change_feed, event_stream
from taplist.database.supabase_client import get_supabase
from taplist.modules.display.schemas import DisplayResponse, SummaryResponse
from taplist.modules.display.service import DisplayService
from supabase import Client
from typing import Dict

router = APIRouter(prefix="/display", tags=["display"])


def get_display_service(supabase: Client = Depends(get_supabase)) -> DisplayService:
    return DisplayService(supabase)


@router.get("", response_model=DisplayResponse)
async def get_display(service: DisplayService = Depends(get_display_service)):
    """Public taplist: settings, resolved styles and taps"""
    return service.get_display()


@router.get("/summary", response_model=SummaryResponse)
async def get_summary(
    user_data: Dict = Depends(get_current_user),
    service: DisplayService = Depends(get_display_service)
):
    """Beverage and active tap counts for the management console"""
    return service.get_summary()


@router.get("/events")
@limiter.exempt
async def display_events(feed: ChangeFeed = Depends(get_change_feed)):
    """Server-Sent Events stream of beverage, tap and settings changes"""
    return StreamingResponse(
        event_stream(feed, settings.events_heartbeat_seconds),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache", "X-Accel-Buffering": "no"},
    )
