from fastapi import APIRouter, Depends, UploadFile, File
from taplist.core.dependencies import get_current_user, require_admin
from taplist.core.realtime import ChangeFeed, get_change_feed
from taplist.database.supabase_client import get_supabase
from taplist.modules.beverages.schemas import BeverageCreate, BeverageUpdate, BeverageResponse, BeverageType
from taplist.modules.beverages.service import BeverageService
from supabase import Client
from typing import List, Optional, Dict

router = APIRouter(prefix="/beverages", tags=["beverages"])


def get_beverage_service(
    supabase: Client = Depends(get_supabase),
    feed: ChangeFeed = Depends(get_change_feed)
) -> BeverageService:
    return BeverageService(supabase, feed)


@router.get("", response_model=List[BeverageResponse])
async def list_beverages(
    type: Optional[BeverageType] = None,
    user_data: Dict = Depends(get_current_user),
    service: BeverageService = Depends(get_beverage_service)
):
    """List the beverage library"""
    return service.list_beverages(beverage_type=type)


@router.post("", response_model=BeverageResponse, status_code=201)
async def create_beverage(
    beverage_data: BeverageCreate,
    user_data: Dict = Depends(require_admin),
    service: BeverageService = Depends(get_beverage_service)
):
    """Add a beverage to the library"""
    return service.create_beverage(beverage_data)


@router.get("/{beverage_id}", response_model=BeverageResponse)
async def get_beverage(
    beverage_id: str,
    user_data: Dict = Depends(get_current_user),
    service: BeverageService = Depends(get_beverage_service)
):
    """Get beverage by ID"""
    return service.get_beverage_by_id(beverage_id)


@router.put("/{beverage_id}", response_model=BeverageResponse)
async def update_beverage(
    beverage_id: str,
    beverage_data: BeverageUpdate,
    user_data: Dict = Depends(require_admin),
    service: BeverageService = Depends(get_beverage_service)
):
    """Update beverage"""
    return service.update_beverage(beverage_id, beverage_data)


@router.delete("/{beverage_id}", status_code=204)
async def delete_beverage(
    beverage_id: str,
    user_data: Dict = Depends(require_admin),
    service: BeverageService = Depends(get_beverage_service)
):
    """Delete beverage; taps serving it are emptied first"""
    service.delete_beverage(beverage_id)
    return None


@router.post("/{beverage_id}/label", response_model=BeverageResponse)
async def upload_label(
    beverage_id: str,
    file: UploadFile = File(...),
    user_data: Dict = Depends(require_admin),
    service: BeverageService = Depends(get_beverage_service)
):
    """Upload a label image for a beverage"""
    return await service.upload_label(beverage_id, file)
