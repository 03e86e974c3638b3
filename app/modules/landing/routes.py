from fastapi import APIRouter, Depends, Query
from app.modules.landing.schemas import NavigationResponse, RouteResolution, LandingResponse
from app.modules.landing import service
from app.core.dependencies import AuthContext, get_optional_user
from typing import Optional

router = APIRouter(tags=["landing"])


@router.get("/landing", response_model=LandingResponse)
async def get_landing(ctx: Optional[AuthContext] = Depends(get_optional_user)):
    """Landing page content for the current session"""
    return service.landing(ctx)


@router.get("/navigation", response_model=NavigationResponse)
async def get_navigation(ctx: Optional[AuthContext] = Depends(get_optional_user)):
    """Navigation bar links for the current session"""
    return service.navigation(ctx)


@router.get("/navigation/resolve", response_model=RouteResolution)
async def resolve_route(
    path: str = Query(...),
    ctx: Optional[AuthContext] = Depends(get_optional_user)
):
    """Check whether the current session may open a client route"""
    return service.resolve_route(path, ctx)
