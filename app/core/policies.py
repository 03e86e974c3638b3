"""
Row-level authorization rules.

These mirror the policies provisioned on the Supabase tables and are checked
in-process before every mutation, so a privileged (service role) client can be
used without widening access. Every predicate works on plain row dicts and the
acting user id; an actor of None is an anonymous caller.
"""

from typing import Any, Dict, Optional

from app.core.errors import PermissionDeniedError

Row = Dict[str, Any]


def _deny(table: str, action: str, message: str):
    raise PermissionDeniedError(message, table=table, action=action)


# profiles

def can_read_profile(actor_id: Optional[str], profile: Row) -> bool:
    return bool(profile.get("is_public")) or (actor_id is not None and profile.get("user_id") == actor_id)


def authorize_profile_write(actor_id: Optional[str], user_id: str) -> None:
    """Profiles are inserted and updated only by their owner."""
    if actor_id is None or actor_id != user_id:
        _deny("profiles", "write", "You can only modify your own profile")


# skills

def authorize_skill_insert(actor_id: Optional[str]) -> None:
    if actor_id is None:
        _deny("skills", "insert", "Authentication required to create skills")


# user_skills

def authorize_user_skill_write(actor_id: Optional[str], user_skill: Row) -> None:
    if actor_id is None or user_skill.get("user_id") != actor_id:
        _deny("user_skills", "write", "You can only manage your own skills")


# swap_requests

def is_swap_participant(actor_id: Optional[str], swap: Row) -> bool:
    return actor_id is not None and actor_id in (swap.get("requester_id"), swap.get("recipient_id"))


def can_read_swap_request(actor_id: Optional[str], swap: Row) -> bool:
    return is_swap_participant(actor_id, swap)


def authorize_swap_request_insert(actor_id: Optional[str], swap: Row) -> None:
    if actor_id is None or swap.get("requester_id") != actor_id:
        _deny("swap_requests", "insert", "Swap requests can only be sent on your own behalf")


def authorize_swap_request_update(actor_id: Optional[str], swap: Row) -> None:
    if not is_swap_participant(actor_id, swap):
        _deny("swap_requests", "update", "Only the requester or recipient can update a swap request")


def authorize_swap_request_delete(actor_id: Optional[str], swap: Row) -> None:
    # Recipients never delete; requesters only before a decision is made
    if actor_id is None or swap.get("requester_id") != actor_id:
        _deny("swap_requests", "delete", "Only the requester can delete a swap request")
    if swap.get("status") != "pending":
        _deny("swap_requests", "delete", "Only pending swap requests can be deleted")


# feedback

def can_read_feedback(actor_id: Optional[str], feedback: Row) -> bool:
    return actor_id is not None and actor_id in (feedback.get("reviewer_id"), feedback.get("reviewee_id"))


def authorize_feedback_insert(actor_id: Optional[str], feedback: Row) -> None:
    if actor_id is None or feedback.get("reviewer_id") != actor_id:
        _deny("feedback", "insert", "Feedback can only be submitted as yourself")


# storage (avatars bucket)

def authorize_avatar_write(actor_id: Optional[str], path: str) -> None:
    """Objects are namespaced by user id: the first path segment must be the caller."""
    first_segment = path.strip("/").split("/", 1)[0] if path else ""
    if actor_id is None or first_segment != actor_id:
        _deny("storage.objects", "write", "You can only upload to your own avatar folder")
