# recipe_reco/domain/repositories/user_repo.py

from __future__ import annotations
from typing import Any, Dict, List, Optional
from motor.motor_asyncio import AsyncIOMotorDatabase
from recipe_reco.domain.models.recipe import UserProfile

PROFILE_PROJECTION = {"_id": 0, "user_id": 1, "username": 1, "preferences": 1}


def to_profile(doc: Dict[str, Any]) -> UserProfile:
    data = dict(doc)
    if data.get("preferences") is None:
        data.pop("preferences", None)
    return UserProfile.model_validate(data)


class UserRepo:
    """Profile repository backed by the 'profiles' collection (identity + declared preferences)."""

    def __init__(self, db: AsyncIOMotorDatabase, collection_name: str = "profiles"):
        self.col = db[collection_name]

    async def get_by_id(self, user_id: str) -> Optional[UserProfile]:
        doc = await self.col.find_one({"user_id": user_id}, PROFILE_PROJECTION)
        return to_profile(doc) if doc else None

    async def list_all(self) -> List[UserProfile]:
        cursor = self.col.find({}, PROFILE_PROJECTION)
        return [to_profile(doc) async for doc in cursor]
