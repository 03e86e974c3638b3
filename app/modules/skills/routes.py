from fastapi import APIRouter, Depends
from app.database.supabase_client import get_supabase
from app.modules.skills.schemas import (
    SkillCreate, SkillResponse, UserSkillAdd, UserSkillResponse, MySkillsResponse
)
from app.modules.skills.service import SkillService
from app.core.dependencies import AuthContext, get_current_user
from supabase import Client
from typing import List

router = APIRouter(prefix="/skills", tags=["skills"])


def get_skill_service(supabase: Client = Depends(get_supabase)) -> SkillService:
    return SkillService(supabase)


@router.get("", response_model=List[SkillResponse])
async def list_skills(
    ctx: AuthContext = Depends(get_current_user),
    service: SkillService = Depends(get_skill_service)
):
    """List approved skills"""
    return service.list_skills()


@router.post("", response_model=SkillResponse, status_code=201)
async def create_skill(
    skill_data: SkillCreate,
    ctx: AuthContext = Depends(get_current_user),
    service: SkillService = Depends(get_skill_service)
):
    """Create a new skill tag"""
    return service.create_skill(ctx, skill_data)


@router.get("/me", response_model=MySkillsResponse)
async def list_my_skills(
    ctx: AuthContext = Depends(get_current_user),
    service: SkillService = Depends(get_skill_service)
):
    """List the caller's offered and wanted skills"""
    return service.list_my_skills(ctx)


@router.post("/me", response_model=UserSkillResponse, status_code=201)
async def add_my_skill(
    skill_data: UserSkillAdd,
    ctx: AuthContext = Depends(get_current_user),
    service: SkillService = Depends(get_skill_service)
):
    """Add an offered or wanted skill by name"""
    return service.add_my_skill(ctx, skill_data)


@router.delete("/me/{user_skill_id}", status_code=204)
async def remove_my_skill(
    user_skill_id: str,
    ctx: AuthContext = Depends(get_current_user),
    service: SkillService = Depends(get_skill_service)
):
    """Remove one of the caller's skills"""
    service.remove_my_skill(ctx, user_skill_id)
    return None
