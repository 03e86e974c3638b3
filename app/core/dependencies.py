"""
Core dependencies for route protection and the per-request auth context
"""

from dataclasses import dataclass, field
from fastapi import Depends, HTTPException, Security, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from app.database.supabase_client import get_auth_client, get_session_client
from app.modules.auth.service import AuthService
from supabase import Client
from typing import Any, Dict, Optional
import logging

logger = logging.getLogger(__name__)

security = HTTPBearer()
optional_security = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class AuthContext:
    """Session of the calling user, passed explicitly into every service call."""
    user_id: str
    email: Optional[str] = None
    access_token: str = ""
    user_metadata: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_user_data(cls, user_data: Dict[str, Any], token: str) -> "AuthContext":
        return cls(
            user_id=user_data["id"],
            email=user_data.get("email"),
            access_token=token,
            user_metadata=user_data.get("user_metadata") or {},
        )


def get_auth_service(supabase: Client = Depends(get_auth_client)) -> AuthService:
    return AuthService(supabase)


def get_sign_in_service(supabase: Client = Depends(get_session_client)) -> AuthService:
    return AuthService(supabase)


def get_current_user(
    credentials: HTTPAuthorizationCredentials = Security(security),
    auth_service: AuthService = Depends(get_auth_service)
) -> AuthContext:
    """Restore the session from the bearer token; 401 when it cannot be resolved."""
    token = credentials.credentials
    user_data = auth_service.get_current_user(token)
    return AuthContext.from_user_data(user_data, token)


def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(optional_security),
    auth_service: AuthService = Depends(get_auth_service)
) -> Optional[AuthContext]:
    """Like get_current_user, but anonymous or invalid sessions yield None."""
    if credentials is None:
        return None
    try:
        user_data = auth_service.get_current_user(credentials.credentials)
    except HTTPException as e:
        if e.status_code == status.HTTP_401_UNAUTHORIZED:
            logger.debug("Ignoring unresolvable session token: %s", e.detail)
            return None
        raise
    return AuthContext.from_user_data(user_data, credentials.credentials)
