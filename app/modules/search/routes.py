from fastapi import APIRouter, Depends, Query
from app.database.supabase_client import get_supabase
from app.modules.search.schemas import SearchResult, MySkill
from app.modules.search.service import SearchService
from app.core.dependencies import AuthContext, get_current_user
from supabase import Client
from typing import List

router = APIRouter(prefix="/search", tags=["search"])


def get_search_service(supabase: Client = Depends(get_supabase)) -> SearchService:
    return SearchService(supabase)


@router.get("", response_model=List[SearchResult])
async def search_users(
    q: str = Query("", max_length=100),
    ctx: AuthContext = Depends(get_current_user),
    service: SearchService = Depends(get_search_service)
):
    """Find other users offering a skill whose name contains `q`"""
    return service.search_users(ctx, q)


@router.get("/my-skills", response_model=List[MySkill])
async def list_my_skills(
    ctx: AuthContext = Depends(get_current_user),
    service: SearchService = Depends(get_search_service)
):
    """Caller's skills for composing a swap request"""
    return service.list_my_skills(ctx)
