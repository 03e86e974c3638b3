from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class ProfileUpdate(BaseModel):
    display_name: Optional[str] = None
    location: Optional[str] = None
    availability: Optional[str] = None
    is_public: Optional[bool] = None
    avatar_url: Optional[str] = None


class ProfileResponse(BaseModel):
    id: str
    user_id: str
    display_name: Optional[str] = None
    location: Optional[str] = None
    avatar_url: Optional[str] = None
    availability: Optional[str] = None
    is_public: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class AvatarUploadResponse(BaseModel):
    path: str
    avatar_url: str
