"""
Landing page and route shell.

The client-side routes are split into public and protected ones; protected
routes need a session and send anonymous visitors to the login page, and
unknown routes fall back to the landing page.
"""

from typing import Optional

from app.core.dependencies import AuthContext
from app.modules.landing.schemas import NavLink, NavigationResponse, RouteResolution, LandingResponse

PUBLIC_ROUTES = ("/", "/login", "/register")
PROTECTED_ROUTES = ("/profile", "/skills", "/search", "/swap-requests", "/feedback")
LOGIN_ROUTE = "/login"
HOME_ROUTE = "/"

_SIGNED_IN_LINKS = [
    NavLink(label="Profile", path="/profile"),
    NavLink(label="My Skills", path="/skills"),
    NavLink(label="Search", path="/search"),
    NavLink(label="Requests", path="/swap-requests"),
    NavLink(label="Feedback", path="/feedback"),
    NavLink(label="Sign Out", path=HOME_ROUTE, action="sign_out"),
]

_SIGNED_OUT_LINKS = [
    NavLink(label="Sign In", path=LOGIN_ROUTE),
    NavLink(label="Get Started", path="/register"),
]


def _normalize(path: str) -> str:
    path = "/" + (path or "").strip().strip("/")
    return path.split("?", 1)[0]


def navigation(ctx: Optional[AuthContext]) -> NavigationResponse:
    links = _SIGNED_IN_LINKS if ctx is not None else _SIGNED_OUT_LINKS
    return NavigationResponse(authenticated=ctx is not None, links=list(links))


def resolve_route(path: str, ctx: Optional[AuthContext]) -> RouteResolution:
    """Route guard: may the current session open `path`, and where to go otherwise"""
    path = _normalize(path)
    if path in PUBLIC_ROUTES:
        return RouteResolution(path=path, allowed=True)
    if path in PROTECTED_ROUTES:
        if ctx is None:
            return RouteResolution(path=path, allowed=False, redirect=LOGIN_ROUTE)
        return RouteResolution(path=path, allowed=True)
    return RouteResolution(path=path, allowed=False, redirect=HOME_ROUTE)


def landing(ctx: Optional[AuthContext]) -> LandingResponse:
    if ctx is not None:
        actions = [NavLink(label="Find Skills", path="/search")]
    else:
        actions = [NavLink(label="Get Started", path="/register"), NavLink(label="Sign In", path=LOGIN_ROUTE)]
    return LandingResponse(
        title="Exchange Skills, Grow Together",
        tagline="Connect with people who can teach what you want to learn, and share what you know in return.",
        authenticated=ctx is not None,
        actions=actions,
    )
