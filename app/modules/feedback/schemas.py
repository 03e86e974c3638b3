from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

from app.modules.swap_requests.schemas import Participant, SwapRequestView


class FeedbackCreate(BaseModel):
    swap_request_id: str
    rating: int = Field(ge=1, le=5)
    comment: Optional[str] = Field(default=None, max_length=2000)


class FeedbackResponse(BaseModel):
    id: str
    swap_request_id: str
    reviewer_id: str
    reviewee_id: str
    rating: int
    comment: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class AcceptedSwapView(SwapRequestView):
    has_feedback: bool = False


class FeedbackView(BaseModel):
    id: str
    rating: int
    comment: Optional[str] = None
    created_at: Optional[datetime] = None
    reviewer: Participant
    reviewee: Participant
