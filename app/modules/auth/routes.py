from fastapi import APIRouter, Depends
from app.database.supabase_client import get_supabase
from app.modules.auth.schemas import (
    LoginRequest, RegisterRequest, TokenResponse, RegisterResponse,
    CurrentUserResponse
)
from app.modules.auth.service import AuthService
from app.modules.profiles.service import ProfileService
from app.core.dependencies import AuthContext, get_current_user, get_sign_in_service
from supabase import Client

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=RegisterResponse, status_code=201)
async def register(
    register_data: RegisterRequest,
    service: AuthService = Depends(get_sign_in_service)
):
    """Register a new user"""
    return service.register(register_data)


@router.post("/login", response_model=TokenResponse)
async def login(
    login_data: LoginRequest,
    service: AuthService = Depends(get_sign_in_service)
):
    """Login and get access token"""
    return service.login(login_data)


@router.post("/logout", status_code=200)
async def logout(
    ctx: AuthContext = Depends(get_current_user),
    supabase: Client = Depends(get_supabase)
):
    """Logout: revoke the caller's session and drop it from the cache"""
    AuthService(supabase).logout(ctx.access_token)
    return {"message": "Logged out successfully"}


@router.get("/me", response_model=CurrentUserResponse)
async def get_me(
    ctx: AuthContext = Depends(get_current_user),
    supabase: Client = Depends(get_supabase),
):
    """Get current authenticated user and their profile, if the signup trigger created one."""
    profile = ProfileService(supabase).find_profile(ctx.user_id)
    return CurrentUserResponse(
        id=ctx.user_id,
        email=ctx.email,
        user_metadata=ctx.user_metadata,
        profile=profile.model_dump(mode="json") if profile else None,
    )
