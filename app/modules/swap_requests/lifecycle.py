"""Swap request status machine: pending -> accepted | rejected, both terminal."""

from enum import Enum
from typing import Dict, FrozenSet

from app.core.errors import InvalidTransitionError


class SwapStatus(str, Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


ALLOWED_TRANSITIONS: Dict[SwapStatus, FrozenSet[SwapStatus]] = {
    SwapStatus.PENDING: frozenset({SwapStatus.ACCEPTED, SwapStatus.REJECTED}),
    SwapStatus.ACCEPTED: frozenset(),
    SwapStatus.REJECTED: frozenset(),
}


def is_terminal(status: SwapStatus) -> bool:
    return not ALLOWED_TRANSITIONS[SwapStatus(status)]


def check_transition(current, requested) -> SwapStatus:
    """Return the new status, or raise InvalidTransitionError."""
    current = SwapStatus(current)
    requested = SwapStatus(requested)
    if requested not in ALLOWED_TRANSITIONS[current]:
        raise InvalidTransitionError(current.value, requested.value)
    return requested
