"""
Exception types shared by the feature modules.

Domain errors inherit from SkillSwapError and are mapped to HTTP responses
by the handlers registered in app.main. Backend (Supabase/PostgREST) failures
are converted with backend_error() at the call site.
"""

import logging

from fastapi import HTTPException
from postgrest.exceptions import APIError

logger = logging.getLogger(__name__)


class SkillSwapError(Exception):
    """Base exception for all SkillSwap domain errors."""
    pass


class PermissionDeniedError(SkillSwapError):
    """The acting identity is not allowed to perform the operation on the row."""

    def __init__(self, message: str, table: str = "", action: str = ""):
        super().__init__(message)
        self.message = message
        self.table = table
        self.action = action


class InvalidTransitionError(SkillSwapError):
    """Swap request status change out of a terminal state."""

    def __init__(self, current: str, requested: str):
        super().__init__(f"Cannot change status from '{current}' to '{requested}'")
        self.current = current
        self.requested = requested


def backend_error(exc: Exception) -> HTTPException:
    """Map a failed backend call to an HTTPException carrying the backend message."""
    if isinstance(exc, APIError):
        # Constraint, validation and policy failures come back as PostgREST errors
        return HTTPException(status_code=400, detail=exc.message or str(exc))
    return HTTPException(status_code=500, detail=str(exc))
