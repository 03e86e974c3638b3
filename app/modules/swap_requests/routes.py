from fastapi import APIRouter, Depends
from app.database.supabase_client import get_supabase
from app.modules.swap_requests.schemas import (
    SwapRequestCreate, SwapStatusUpdate, SwapRequestResponse, SwapRequestListResponse
)
from app.modules.swap_requests.service import SwapRequestService
from app.core.dependencies import AuthContext, get_current_user
from supabase import Client

router = APIRouter(prefix="/swap-requests", tags=["swap-requests"])


def get_swap_request_service(supabase: Client = Depends(get_supabase)) -> SwapRequestService:
    return SwapRequestService(supabase)


@router.post("", response_model=SwapRequestResponse, status_code=201)
async def create_swap_request(
    request_data: SwapRequestCreate,
    ctx: AuthContext = Depends(get_current_user),
    service: SwapRequestService = Depends(get_swap_request_service)
):
    """Send a swap request offering one of your skills for one of theirs"""
    return service.create_request(ctx, request_data)


@router.get("", response_model=SwapRequestListResponse)
async def list_swap_requests(
    ctx: AuthContext = Depends(get_current_user),
    service: SwapRequestService = Depends(get_swap_request_service)
):
    """List sent and received swap requests"""
    return service.list_requests(ctx)


@router.patch("/{request_id}", response_model=SwapRequestResponse)
async def update_swap_request_status(
    request_id: str,
    status_update: SwapStatusUpdate,
    ctx: AuthContext = Depends(get_current_user),
    service: SwapRequestService = Depends(get_swap_request_service)
):
    """Accept or reject a pending swap request"""
    return service.update_status(ctx, request_id, status_update.status)


@router.delete("/{request_id}", status_code=204)
async def delete_swap_request(
    request_id: str,
    ctx: AuthContext = Depends(get_current_user),
    service: SwapRequestService = Depends(get_swap_request_service)
):
    """Delete a pending swap request you sent"""
    service.delete_request(ctx, request_id)
    return None
