from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime

from app.modules.swap_requests.lifecycle import SwapStatus


class SwapRequestCreate(BaseModel):
    recipient_id: str
    offered_skill_id: str
    wanted_skill_id: str
    message: Optional[str] = Field(default=None, max_length=1000)


class SwapStatusUpdate(BaseModel):
    status: SwapStatus


class SwapRequestResponse(BaseModel):
    id: str
    requester_id: str
    recipient_id: str
    offered_skill_id: str
    wanted_skill_id: str
    message: Optional[str] = None
    status: SwapStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class Participant(BaseModel):
    id: str
    display_name: Optional[str] = None
    avatar_url: Optional[str] = None


class SkillSummary(BaseModel):
    id: str
    name: str


class SwapRequestView(BaseModel):
    id: str
    message: Optional[str] = None
    status: SwapStatus
    created_at: Optional[datetime] = None
    requester: Participant
    recipient: Participant
    offered_skill: Optional[SkillSummary] = None
    wanted_skill: Optional[SkillSummary] = None


class SwapRequestListResponse(BaseModel):
    sent: List[SwapRequestView]
    received: List[SwapRequestView]
