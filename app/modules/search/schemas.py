from pydantic import BaseModel
from typing import Optional, List


class OfferedSkill(BaseModel):
    id: str
    name: str


class SearchResult(BaseModel):
    id: str
    user_id: str
    display_name: Optional[str] = None
    location: Optional[str] = None
    avatar_url: Optional[str] = None
    availability: Optional[str] = None
    offered_skills: List[OfferedSkill] = []


class MySkill(BaseModel):
    id: str
    name: str
    skill_type: str
