from supabase import Client
from app.modules.swap_requests.schemas import (
    SwapRequestCreate, SwapRequestResponse, SwapRequestView, SwapRequestListResponse, Participant
)
from app.modules.swap_requests.lifecycle import SwapStatus, check_transition
from app.core.dependencies import AuthContext
from app.core.errors import InvalidTransitionError, backend_error
from app.core.joins import batch_fetch, collect_ids, project
from app.core.policies import (
    authorize_swap_request_delete, authorize_swap_request_insert,
    authorize_swap_request_update, can_read_profile, can_read_swap_request
)
from typing import Any, Dict, List, Optional
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


def participant(user_id: str, profile: Optional[Dict[str, Any]]) -> Participant:
    profile = profile or {}
    return Participant(id=user_id, display_name=profile.get("display_name"), avatar_url=profile.get("avatar_url"))


def load_participants(supabase: Client, actor_id: str, rows: List[Dict[str, Any]], *fields: str) -> Dict[str, Dict[str, Any]]:
    """Profiles of the users referenced by `fields`, limited to those the actor may read"""
    return batch_fetch(
        supabase, "profiles", collect_ids(rows, *fields), key="user_id",
        columns="user_id, display_name, avatar_url, is_public",
        row_filter=lambda p: can_read_profile(actor_id, p),
    )


class SwapRequestService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def get_row(self, request_id: str) -> Dict[str, Any]:
        try:
            result = self.supabase.table("swap_requests")\
                .select("*")\
                .eq("id", request_id)\
                .maybe_single()\
                .execute()
            row = result.data if result else None
        except Exception as e:
            logger.error(f"Error loading swap request {request_id}: {e}")
            raise backend_error(e)
        if not row:
            raise HTTPException(status_code=404, detail="Swap request not found")
        return row

    def create_request(self, ctx: AuthContext, request_data: SwapRequestCreate) -> SwapRequestResponse:
        """Send a swap request from the caller to another user"""
        if request_data.recipient_id == ctx.user_id:
            raise HTTPException(status_code=400, detail="You cannot send a swap request to yourself")

        row = {
            "requester_id": ctx.user_id,
            "recipient_id": request_data.recipient_id,
            "offered_skill_id": request_data.offered_skill_id,
            "wanted_skill_id": request_data.wanted_skill_id,
            "message": request_data.message,
        }
        authorize_swap_request_insert(ctx.user_id, row)
        try:
            result = self.supabase.table("swap_requests").insert(row).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to send swap request")

            logger.info("Swap request %s sent by %s to %s", result.data[0]["id"], ctx.user_id, request_data.recipient_id)
            return SwapRequestResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error sending swap request from {ctx.user_id}: {e}")
            raise backend_error(e)

    def enrich(self, ctx: AuthContext, rows: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """Join participant profiles and skill names onto flat swap_requests rows"""
        profiles = load_participants(self.supabase, ctx.user_id, rows, "requester_id", "recipient_id")
        skills = batch_fetch(
            self.supabase, "skills", collect_ids(rows, "offered_skill_id", "wanted_skill_id"), columns="id, name"
        )
        projected = project(rows, {
            "requester": ("requester_id", profiles),
            "recipient": ("recipient_id", profiles),
            "offered_skill": ("offered_skill_id", skills),
            "wanted_skill": ("wanted_skill_id", skills),
        })
        for item in projected:
            item["requester"] = participant(item["requester_id"], item["requester"])
            item["recipient"] = participant(item["recipient_id"], item["recipient"])
        return projected

    def list_requests(self, ctx: AuthContext) -> SwapRequestListResponse:
        """Requests the caller sent and received, newest first"""
        try:
            result = self.supabase.table("swap_requests")\
                .select("id, message, status, created_at, requester_id, recipient_id, offered_skill_id, wanted_skill_id")\
                .or_(f"requester_id.eq.{ctx.user_id},recipient_id.eq.{ctx.user_id}")\
                .order("created_at", desc=True)\
                .execute()
            rows = [r for r in result.data or [] if can_read_swap_request(ctx.user_id, r)]
            views = [SwapRequestView(**item) for item in self.enrich(ctx, rows)]
            return SwapRequestListResponse(
                sent=[v for v in views if v.requester.id == ctx.user_id],
                received=[v for v in views if v.recipient.id == ctx.user_id],
            )
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error loading swap requests for {ctx.user_id}: {e}")
            raise backend_error(e)

    def update_status(self, ctx: AuthContext, request_id: str, status: SwapStatus) -> SwapRequestResponse:
        """Accept or reject a pending request"""
        row = self.get_row(request_id)
        authorize_swap_request_update(ctx.user_id, row)
        new_status = check_transition(row["status"], status)
        try:
            # The status guard keeps a concurrent decision from being overwritten
            result = self.supabase.table("swap_requests")\
                .update({"status": new_status.value})\
                .eq("id", request_id)\
                .eq("status", SwapStatus.PENDING.value)\
                .execute()
        except Exception as e:
            logger.error(f"Error updating swap request {request_id}: {e}")
            raise backend_error(e)

        if not result.data:
            raise InvalidTransitionError(self.get_row(request_id)["status"], new_status.value)

        logger.info("Swap request %s %s by %s", request_id, new_status.value, ctx.user_id)
        return SwapRequestResponse(**result.data[0])

    def delete_request(self, ctx: AuthContext, request_id: str) -> None:
        """Withdraw a pending request (requester only)"""
        row = self.get_row(request_id)
        authorize_swap_request_delete(ctx.user_id, row)
        try:
            result = self.supabase.table("swap_requests")\
                .delete()\
                .eq("id", request_id)\
                .eq("status", SwapStatus.PENDING.value)\
                .execute()
        except Exception as e:
            logger.error(f"Error deleting swap request {request_id}: {e}")
            raise backend_error(e)

        if not result.data:
            # Decided or withdrawn since it was read
            raise HTTPException(status_code=409, detail="Swap request is no longer pending")
        logger.info("Swap request %s withdrawn by %s", request_id, ctx.user_id)
