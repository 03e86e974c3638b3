from supabase import Client
from app.modules.skills.schemas import (
    SkillCreate, SkillResponse, SkillType, UserSkillAdd, UserSkillResponse, MySkillsResponse
)
from app.core.dependencies import AuthContext
from app.core.errors import backend_error
from app.core.joins import batch_fetch, collect_ids, project
from app.core.policies import authorize_skill_insert, authorize_user_skill_write
from typing import List, Optional
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


class SkillService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def list_skills(self) -> List[SkillResponse]:
        """Approved skills ordered by name"""
        try:
            result = self.supabase.table("skills")\
                .select("*")\
                .eq("is_approved", True)\
                .order("name")\
                .execute()
            return [SkillResponse(**skill) for skill in result.data or []]
        except Exception as e:
            logger.error(f"Error listing skills: {e}")
            raise backend_error(e)

    def create_skill(self, ctx: AuthContext, skill_data: SkillCreate) -> SkillResponse:
        """Create a skill tag; any signed-in user may add one"""
        authorize_skill_insert(ctx.user_id)
        name = skill_data.name.strip()
        if not name:
            raise HTTPException(status_code=400, detail="Skill name is required")
        try:
            insert_data = {"name": name}
            if skill_data.category:
                insert_data["category"] = skill_data.category
            result = self.supabase.table("skills").insert(insert_data).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create skill")

            logger.info("Skill %r created by %s", name, ctx.user_id)
            return SkillResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error creating skill {name!r}: {e}")
            raise backend_error(e)

    def find_skill_by_name(self, name: str) -> Optional[SkillResponse]:
        """Approved skill whose name equals `name` ignoring case"""
        wanted = name.strip().lower()
        for skill in self.list_skills():
            if skill.name.lower() == wanted:
                return skill
        return None

    def list_my_skills(self, ctx: AuthContext) -> MySkillsResponse:
        """The caller's offered and wanted skills"""
        try:
            result = self.supabase.table("user_skills")\
                .select("id, user_id, skill_id, skill_type")\
                .eq("user_id", ctx.user_id)\
                .execute()
            rows = result.data or []
            skills = batch_fetch(
                self.supabase, "skills", collect_ids(rows, "skill_id"), columns="id, name, category"
            )
            items = [
                UserSkillResponse(id=row["id"], skill_type=row["skill_type"], skill=row["skill"])
                for row in project(rows, {"skill": ("skill_id", skills)})
            ]
            return MySkillsResponse(
                offered=[i for i in items if i.skill_type == SkillType.OFFERED],
                wanted=[i for i in items if i.skill_type == SkillType.WANTED],
            )
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error loading skills for {ctx.user_id}: {e}")
            raise backend_error(e)

    def add_my_skill(self, ctx: AuthContext, skill_data: UserSkillAdd) -> UserSkillResponse:
        """Attach a skill to the caller, creating the skill tag the first time the name is seen"""
        name = skill_data.name.strip()
        if not name:
            raise HTTPException(status_code=400, detail="Skill name is required")

        skill = self.find_skill_by_name(name)
        if skill is None:
            skill = self.create_skill(ctx, SkillCreate(name=name))

        row = {
            "user_id": ctx.user_id,
            "skill_id": skill.id,
            "skill_type": skill_data.skill_type.value,
        }
        authorize_user_skill_write(ctx.user_id, row)
        try:
            result = self.supabase.table("user_skills").insert(row).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to add skill")

            return UserSkillResponse(
                id=result.data[0]["id"],
                skill_type=skill_data.skill_type,
                skill={"id": skill.id, "name": skill.name, "category": skill.category},
            )
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error adding {skill_data.skill_type.value} skill {name!r} for {ctx.user_id}: {e}")
            raise backend_error(e)

    def remove_my_skill(self, ctx: AuthContext, user_skill_id: str) -> None:
        """Detach one of the caller's skills"""
        try:
            result = self.supabase.table("user_skills")\
                .select("*")\
                .eq("id", user_skill_id)\
                .maybe_single()\
                .execute()
            row = result.data if result else None
        except Exception as e:
            logger.error(f"Error loading user skill {user_skill_id}: {e}")
            raise backend_error(e)

        if not row:
            raise HTTPException(status_code=404, detail="Skill not found")
        authorize_user_skill_write(ctx.user_id, row)

        try:
            result = self.supabase.table("user_skills")\
                .delete()\
                .eq("id", user_skill_id)\
                .execute()
        except Exception as e:
            logger.error(f"Error removing user skill {user_skill_id}: {e}")
            raise backend_error(e)

        if not result.data:
            raise HTTPException(status_code=404, detail="Skill not found")
