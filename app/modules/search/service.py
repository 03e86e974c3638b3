"""
Counterparty search.

A term matches skills by case-insensitive substring. Users offering any
matching skill are returned with their full list of offered skills; the
searching user and private profiles are dropped silently.
"""

from supabase import Client
from app.modules.search.schemas import OfferedSkill, SearchResult, MySkill
from app.core.dependencies import AuthContext
from app.core.errors import backend_error
from app.core.joins import batch_fetch, collect_ids
from typing import List
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


class SearchService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def search_users(self, ctx: AuthContext, term: str) -> List[SearchResult]:
        term = (term or "").strip()
        if not term:
            return []
        try:
            # 1. Skills whose name contains the term
            skills_result = self.supabase.table("skills")\
                .select("id")\
                .ilike("name", f"%{term}%")\
                .execute()
            skill_ids = collect_ids(skills_result.data or [], "id")
            if not skill_ids:
                return []

            # 2. Users offering any of them
            offers_result = self.supabase.table("user_skills")\
                .select("user_id")\
                .eq("skill_type", "offered")\
                .in_("skill_id", skill_ids)\
                .execute()
            user_ids = [u for u in collect_ids(offers_result.data or [], "user_id") if u != ctx.user_id]
            if not user_ids:
                return []

            # 3. Their public profiles
            profiles_result = self.supabase.table("profiles")\
                .select("id, user_id, display_name, location, avatar_url, availability, is_public")\
                .eq("is_public", True)\
                .neq("user_id", ctx.user_id)\
                .in_("user_id", user_ids)\
                .execute()
            profiles = [
                p for p in profiles_result.data or []
                if p.get("is_public") and p.get("user_id") != ctx.user_id
            ]
            if not profiles:
                return []

            # 4. Everything those users offer, not just the matching skills
            visible_ids = collect_ids(profiles, "user_id")
            all_offers_result = self.supabase.table("user_skills")\
                .select("user_id, skill_id")\
                .eq("skill_type", "offered")\
                .in_("user_id", visible_ids)\
                .execute()
            all_offers = all_offers_result.data or []
            skills = batch_fetch(self.supabase, "skills", collect_ids(all_offers, "skill_id"), columns="id, name")

            # 5. One record per user with de-duplicated skills
            results = {}
            for profile in profiles:
                if profile["user_id"] not in results:
                    results[profile["user_id"]] = SearchResult(**profile, offered_skills=[])
            for offer in all_offers:
                result = results.get(offer["user_id"])
                skill = skills.get(offer["skill_id"])
                if result is None or skill is None:
                    continue
                if any(s.id == skill["id"] for s in result.offered_skills):
                    continue
                result.offered_skills.append(OfferedSkill(id=skill["id"], name=skill["name"]))

            logger.debug("Search %r by %s: %d users", term, ctx.user_id, len(results))
            return list(results.values())
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error searching users for {term!r}: {e}")
            raise backend_error(e)

    def list_my_skills(self, ctx: AuthContext) -> List[MySkill]:
        """Caller's skills, flattened for picking the offered side of a swap"""
        try:
            result = self.supabase.table("user_skills")\
                .select("skill_id, skill_type")\
                .eq("user_id", ctx.user_id)\
                .execute()
            rows = result.data or []
            skills = batch_fetch(self.supabase, "skills", collect_ids(rows, "skill_id"), columns="id, name")
            return [
                MySkill(id=row["skill_id"], name=skills[row["skill_id"]]["name"], skill_type=row["skill_type"])
                for row in rows
                if row["skill_id"] in skills
            ]
        except Exception as e:
            logger.error(f"Error loading skills for {ctx.user_id}: {e}")
            raise backend_error(e)
