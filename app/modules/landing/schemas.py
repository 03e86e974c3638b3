from pydantic import BaseModel
from typing import List, Optional


class NavLink(BaseModel):
    label: str
    path: str
    action: Optional[str] = None  # e.g. "sign_out" for links that end the session


class NavigationResponse(BaseModel):
    authenticated: bool
    links: List[NavLink]


class RouteResolution(BaseModel):
    path: str
    allowed: bool
    redirect: Optional[str] = None


class LandingResponse(BaseModel):
    title: str
    tagline: str
    authenticated: bool
    actions: List[NavLink]
