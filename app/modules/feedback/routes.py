from fastapi import APIRouter, Depends
from app.database.supabase_client import get_supabase
from app.modules.feedback.schemas import FeedbackCreate, FeedbackResponse, AcceptedSwapView, FeedbackView
from app.modules.feedback.service import FeedbackService
from app.core.dependencies import AuthContext, get_current_user
from supabase import Client
from typing import List

router = APIRouter(prefix="/feedback", tags=["feedback"])


def get_feedback_service(supabase: Client = Depends(get_supabase)) -> FeedbackService:
    return FeedbackService(supabase)


@router.get("/swaps", response_model=List[AcceptedSwapView])
async def list_accepted_swaps(
    ctx: AuthContext = Depends(get_current_user),
    service: FeedbackService = Depends(get_feedback_service)
):
    """Accepted swaps you took part in, with feedback status"""
    return service.list_accepted_swaps(ctx)


@router.get("/pending", response_model=List[AcceptedSwapView])
async def list_pending_feedback(
    ctx: AuthContext = Depends(get_current_user),
    service: FeedbackService = Depends(get_feedback_service)
):
    """Accepted swaps still waiting for your feedback"""
    return service.list_pending_feedback(ctx)


@router.get("/received", response_model=List[FeedbackView])
async def list_received_feedback(
    ctx: AuthContext = Depends(get_current_user),
    service: FeedbackService = Depends(get_feedback_service)
):
    """Feedback other users left about you"""
    return service.list_received(ctx)


@router.post("", response_model=FeedbackResponse, status_code=201)
async def submit_feedback(
    feedback_data: FeedbackCreate,
    ctx: AuthContext = Depends(get_current_user),
    service: FeedbackService = Depends(get_feedback_service)
):
    """Leave feedback on an accepted swap"""
    return service.submit_feedback(ctx, feedback_data)
