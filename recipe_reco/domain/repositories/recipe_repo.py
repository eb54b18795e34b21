# recipe_reco/domain/repositories/recipe_repo.py

from __future__ import annotations
from typing import Any, Dict, Iterable, List, Optional
from motor.motor_asyncio import AsyncIOMotorDatabase
from recipe_reco.domain.models.recipe import Recipe

# Only the fields the recommender reads; steps, images and ratings stay in storage.
RECIPE_PROJECTION = {
    "_id": 0,
    "recipe_id": 1,
    "title": 1,
    "description": 1,
    "image_url": 1,
    "ingredients": 1,
    "category": 1,
    "cuisine": 1,
    "difficulty": 1,
    "prep_time": 1,
    "seasonal_score": 1,
    "created_at": 1,
    "updated_at": 1,
}


def _ingredient_kind(item: Any) -> Optional[str]:
    """
    Reduce one stored ingredient to its kind token.
    Accepts plain strings ("TOMATO") or ingredient documents ({"type": "TOMATO", "amount": "2", ...}).
    """
    if isinstance(item, dict):
        return item.get("type")
    return item


def to_recipe(doc: Dict[str, Any]) -> Recipe:
    data = dict(doc)
    data["ingredients"] = [k for k in (_ingredient_kind(i) for i in data.get("ingredients") or []) if k]
    return Recipe.model_validate(data)


class RecipeRepo:
    """
    Recipe repository backed by the 'recipes' collection.
    Read-only: recipes are owned and mutated by the catalog service.
    """

    def __init__(self, db: AsyncIOMotorDatabase, collection_name: str = "recipes"):
        self.col = db[collection_name]

    async def get_by_id(self, recipe_id: str) -> Optional[Recipe]:
        doc = await self.col.find_one({"recipe_id": recipe_id}, RECIPE_PROJECTION)
        return to_recipe(doc) if doc else None

    async def list_all(self) -> List[Recipe]:
        cursor = self.col.find({}, RECIPE_PROJECTION)
        return [to_recipe(doc) async for doc in cursor]

    async def get_many_by_ids(self, ids: Iterable[str]) -> List[Recipe]:
        ids = list(ids)
        if not ids:
            return []
        cursor = self.col.find({"recipe_id": {"$in": ids}}, RECIPE_PROJECTION)
        return [to_recipe(doc) async for doc in cursor]
