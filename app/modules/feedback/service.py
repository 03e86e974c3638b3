from supabase import Client
from app.modules.feedback.schemas import FeedbackCreate, FeedbackResponse, AcceptedSwapView, FeedbackView
from app.modules.swap_requests.lifecycle import SwapStatus
from app.modules.swap_requests.service import SwapRequestService, load_participants, participant
from app.core.dependencies import AuthContext
from app.core.errors import backend_error
from app.core.joins import project
from app.core.policies import authorize_feedback_insert, can_read_feedback, can_read_swap_request
from typing import Any, Dict, List
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


def other_participant(swap: Dict[str, Any], user_id: str) -> str:
    return swap["recipient_id"] if swap["requester_id"] == user_id else swap["requester_id"]


class FeedbackService:
    def __init__(self, supabase: Client):
        self.supabase = supabase
        self.swaps = SwapRequestService(supabase)

    def _reviewed_swap_ids(self, ctx: AuthContext, swap_ids: List[str]) -> set:
        if not swap_ids:
            return set()
        result = self.supabase.table("feedback")\
            .select("swap_request_id")\
            .in_("swap_request_id", swap_ids)\
            .eq("reviewer_id", ctx.user_id)\
            .execute()
        return {f["swap_request_id"] for f in result.data or []}

    def list_accepted_swaps(self, ctx: AuthContext) -> List[AcceptedSwapView]:
        """Accepted swaps the caller took part in, flagged with whether they already left feedback"""
        try:
            result = self.supabase.table("swap_requests")\
                .select("id, message, status, created_at, requester_id, recipient_id, offered_skill_id, wanted_skill_id")\
                .eq("status", SwapStatus.ACCEPTED.value)\
                .or_(f"requester_id.eq.{ctx.user_id},recipient_id.eq.{ctx.user_id}")\
                .order("created_at", desc=True)\
                .execute()
            rows = [
                r for r in result.data or []
                if r.get("status") == SwapStatus.ACCEPTED.value and can_read_swap_request(ctx.user_id, r)
            ]
            reviewed = self._reviewed_swap_ids(ctx, [r["id"] for r in rows])
            return [
                AcceptedSwapView(**item, has_feedback=item["id"] in reviewed)
                for item in self.swaps.enrich(ctx, rows)
            ]
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error loading accepted swaps for {ctx.user_id}: {e}")
            raise backend_error(e)

    def list_pending_feedback(self, ctx: AuthContext) -> List[AcceptedSwapView]:
        return [swap for swap in self.list_accepted_swaps(ctx) if not swap.has_feedback]

    def list_received(self, ctx: AuthContext) -> List[FeedbackView]:
        """Feedback other users left about the caller, newest first"""
        try:
            result = self.supabase.table("feedback")\
                .select("id, rating, comment, created_at, reviewer_id, reviewee_id")\
                .eq("reviewee_id", ctx.user_id)\
                .order("created_at", desc=True)\
                .execute()
            rows = [r for r in result.data or [] if can_read_feedback(ctx.user_id, r)]
            profiles = load_participants(self.supabase, ctx.user_id, rows, "reviewer_id", "reviewee_id")
            views = []
            for item in project(rows, {"reviewer": ("reviewer_id", profiles), "reviewee": ("reviewee_id", profiles)}):
                item["reviewer"] = participant(item["reviewer_id"], item["reviewer"])
                item["reviewee"] = participant(item["reviewee_id"], item["reviewee"])
                views.append(FeedbackView(**item))
            return views
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error loading feedback for {ctx.user_id}: {e}")
            raise backend_error(e)

    def submit_feedback(self, ctx: AuthContext, feedback_data: FeedbackCreate) -> FeedbackResponse:
        """Rate the other participant of an accepted swap, once per swap"""
        swap = self.swaps.get_row(feedback_data.swap_request_id)
        if not can_read_swap_request(ctx.user_id, swap):
            raise HTTPException(status_code=404, detail="Swap request not found")
        if swap["status"] != SwapStatus.ACCEPTED.value:
            raise HTTPException(status_code=400, detail="Feedback can only be left for accepted swaps")

        row = {
            "swap_request_id": swap["id"],
            "reviewer_id": ctx.user_id,
            "reviewee_id": other_participant(swap, ctx.user_id),
            "rating": feedback_data.rating,
            "comment": feedback_data.comment,
        }
        authorize_feedback_insert(ctx.user_id, row)
        try:
            if self._reviewed_swap_ids(ctx, [swap["id"]]):
                raise HTTPException(status_code=400, detail="You have already left feedback for this swap")

            result = self.supabase.table("feedback").insert(row).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to submit feedback")

            logger.info("Feedback %s left by %s on swap %s", result.data[0]["id"], ctx.user_id, swap["id"])
            return FeedbackResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error submitting feedback on swap {swap['id']}: {e}")
            raise backend_error(e)
