# recipe_reco/domain/repositories/interaction_repo.py

from __future__ import annotations
from datetime import datetime
from typing import Any, Dict, List
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument
from recipe_reco.domain.models.recipe import Interaction

INTERACTION_PROJECTION = {
    "_id": 0,
    "user_id": 1,
    "recipe_id": 1,
    "view_count": 1,
    "saved": 1,
    "first_interaction": 1,
    "last_interaction": 1,
}


def to_interaction(doc: Dict[str, Any]) -> Interaction:
    return Interaction.model_validate(doc)


class InteractionRepo:
    """
    Interaction repository backed by the 'user_interactions' collection.
    Writes are upserts keyed on (user_id, recipe_id) so a pair never gets a
    second record; a unique compound index on those two fields backs this up.
    """

    def __init__(self, db: AsyncIOMotorDatabase, collection_name: str = "user_interactions"):
        self.col = db[collection_name]

    async def ensure_indexes(self) -> None:
        await self.col.create_index([("user_id", 1), ("recipe_id", 1)], unique=True)

    async def list_for_user(self, user_id: str) -> List[Interaction]:
        cursor = self.col.find({"user_id": user_id}, INTERACTION_PROJECTION)
        return [to_interaction(doc) async for doc in cursor]

    async def upsert_view(self, user_id: str, recipe_id: str, *, at: datetime) -> Interaction:
        doc = await self.col.find_one_and_update(
            {"user_id": user_id, "recipe_id": recipe_id},
            {
                "$inc": {"view_count": 1},
                "$set": {"last_interaction": at},
                "$setOnInsert": {"saved": False, "first_interaction": at},
            },
            projection=INTERACTION_PROJECTION,
            upsert=True,
            return_document=ReturnDocument.AFTER,
        )
        return to_interaction(doc)

    async def upsert_saved(self, user_id: str, recipe_id: str, saved: bool, *, at: datetime) -> Interaction:
        doc = await self.col.find_one_and_update(
            {"user_id": user_id, "recipe_id": recipe_id},
            {
                "$set": {"saved": saved, "last_interaction": at},
                "$setOnInsert": {"view_count": 1, "first_interaction": at},
            },
            projection=INTERACTION_PROJECTION,
            upsert=True,
            return_document=ReturnDocument.AFTER,
        )
        return to_interaction(doc)
