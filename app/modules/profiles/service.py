from supabase import Client
from app.modules.profiles.schemas import ProfileUpdate, ProfileResponse, AvatarUploadResponse
from app.modules.profiles.avatar_storage import ALLOWED_CONTENT_TYPES, avatar_path, get_avatar_storage
from app.core.dependencies import AuthContext
from app.core.errors import backend_error
from app.core.policies import authorize_avatar_write, authorize_profile_write, can_read_profile
from app.config import settings
from typing import Optional
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


class ProfileService:
    def __init__(self, supabase: Client, storage=None):
        self.supabase = supabase
        self._storage = storage

    @property
    def storage(self):
        if self._storage is None:
            self._storage = get_avatar_storage(self.supabase)
        return self._storage

    def _fetch(self, user_id: str) -> Optional[dict]:
        result = self.supabase.table("profiles")\
            .select("*")\
            .eq("user_id", user_id)\
            .maybe_single()\
            .execute()
        return result.data if result else None

    def find_profile(self, user_id: str) -> Optional[ProfileResponse]:
        """Profile row for user_id, or None when it does not exist yet"""
        try:
            row = self._fetch(user_id)
            return ProfileResponse(**row) if row else None
        except Exception as e:
            logger.error(f"Error loading profile for {user_id}: {e}")
            raise backend_error(e)

    def get_my_profile(self, ctx: AuthContext) -> ProfileResponse:
        profile = self.find_profile(ctx.user_id)
        if profile is None:
            raise HTTPException(status_code=404, detail="Profile not found")
        return profile

    def get_profile(self, actor_id: Optional[str], user_id: str) -> ProfileResponse:
        """Another user's profile; private profiles are hidden from everyone but the owner"""
        try:
            row = self._fetch(user_id)
        except Exception as e:
            logger.error(f"Error loading profile for {user_id}: {e}")
            raise backend_error(e)
        if not row or not can_read_profile(actor_id, row):
            raise HTTPException(status_code=404, detail="Profile not found")
        return ProfileResponse(**row)

    def save_profile(self, ctx: AuthContext, profile_data: ProfileUpdate) -> ProfileResponse:
        """Upsert the caller's profile settings"""
        authorize_profile_write(ctx.user_id, ctx.user_id)
        try:
            upsert_data = {"user_id": ctx.user_id}
            upsert_data.update(profile_data.model_dump(exclude_none=True))

            result = self.supabase.table("profiles")\
                .upsert(upsert_data, on_conflict="user_id")\
                .execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to save profile")

            return ProfileResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error saving profile for {ctx.user_id}: {e}")
            raise backend_error(e)

    def upload_avatar(
        self,
        ctx: AuthContext,
        content: bytes,
        content_type: str
    ) -> AvatarUploadResponse:
        """Store the avatar under the caller's folder and point the profile at it"""
        if content_type not in ALLOWED_CONTENT_TYPES:
            raise HTTPException(status_code=400, detail="Avatar must be a PNG, JPEG, GIF or WebP image")
        if not content:
            raise HTTPException(status_code=400, detail="Avatar file is empty")
        if len(content) > settings.avatar_max_bytes:
            raise HTTPException(status_code=400, detail="Avatar file is too large")

        path = avatar_path(ctx.user_id, content_type)
        authorize_avatar_write(ctx.user_id, path)
        try:
            public_url = self.storage.upload_file(content, path, content_type)
        except Exception as e:
            logger.error(f"Error uploading avatar for {ctx.user_id}: {e}")
            raise HTTPException(status_code=500, detail=f"Avatar upload failed: {str(e)}")

        self.save_profile(ctx, ProfileUpdate(avatar_url=public_url))
        logger.info("Avatar for %s stored at %s", ctx.user_id, path)
        return AvatarUploadResponse(path=path, avatar_url=public_url)
