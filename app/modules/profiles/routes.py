from fastapi import APIRouter, Depends, UploadFile, File
from app.database.supabase_client import get_supabase
from app.modules.profiles.schemas import ProfileUpdate, ProfileResponse, AvatarUploadResponse
from app.modules.profiles.service import ProfileService
from app.core.dependencies import AuthContext, get_current_user
from supabase import Client

router = APIRouter(prefix="/profiles", tags=["profiles"])


def get_profile_service(supabase: Client = Depends(get_supabase)) -> ProfileService:
    return ProfileService(supabase)


@router.get("/me", response_model=ProfileResponse)
async def get_my_profile(
    ctx: AuthContext = Depends(get_current_user),
    service: ProfileService = Depends(get_profile_service)
):
    """Get the caller's profile"""
    return service.get_my_profile(ctx)


@router.put("/me", response_model=ProfileResponse)
async def save_my_profile(
    profile_data: ProfileUpdate,
    ctx: AuthContext = Depends(get_current_user),
    service: ProfileService = Depends(get_profile_service)
):
    """Save profile settings (creates the row if the signup trigger did not)"""
    return service.save_profile(ctx, profile_data)


@router.post("/me/avatar", response_model=AvatarUploadResponse)
async def upload_avatar(
    file: UploadFile = File(...),
    ctx: AuthContext = Depends(get_current_user),
    service: ProfileService = Depends(get_profile_service)
):
    """Upload a profile picture to <user_id>/avatar.<ext>"""
    content = await file.read()
    return service.upload_avatar(ctx, content, file.content_type or "")


@router.get("/{user_id}", response_model=ProfileResponse)
async def get_profile(
    user_id: str,
    ctx: AuthContext = Depends(get_current_user),
    service: ProfileService = Depends(get_profile_service)
):
    """Get a user's profile (public profiles, or your own)"""
    return service.get_profile(ctx.user_id, user_id)
