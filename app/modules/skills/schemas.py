from enum import Enum
from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime


class SkillType(str, Enum):
    OFFERED = "offered"
    WANTED = "wanted"


class SkillCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    category: Optional[str] = None


class SkillResponse(BaseModel):
    id: str
    name: str
    category: Optional[str] = None
    is_approved: bool = True
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class SkillRef(BaseModel):
    id: str
    name: str
    category: Optional[str] = None


class UserSkillAdd(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    skill_type: SkillType


class UserSkillResponse(BaseModel):
    id: str
    skill_type: SkillType
    skill: Optional[SkillRef] = None


class MySkillsResponse(BaseModel):
    offered: List[UserSkillResponse]
    wanted: List[UserSkillResponse]
