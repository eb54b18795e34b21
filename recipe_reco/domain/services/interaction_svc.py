import logging
from datetime import datetime, timezone
from typing import Callable

from recipe_reco.domain.errors import RecipeNotFoundError, UserNotFoundError
from recipe_reco.domain.models.recipe import Interaction
from recipe_reco.domain.repositories.base import InteractionStore, RecipeStore, UserStore

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class InteractionService:
    """Records the engagement signals the recommender feeds on (views and saves)."""

    def __init__(
        self,
        recipes: RecipeStore,
        users: UserStore,
        interactions: InteractionStore,
        *,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.recipes = recipes
        self.users = users
        self.interactions = interactions
        self.clock = clock

    async def track_view(self, user_id: str, recipe_id: str) -> Interaction:
        await self._require(user_id, recipe_id)
        interaction = await self.interactions.upsert_view(user_id, recipe_id, at=self.clock())
        logger.info(f"track_view user_id={user_id} recipe_id={recipe_id} view_count={interaction.view_count}")
        return interaction

    async def save_recipe(self, user_id: str, recipe_id: str, saved: bool = True) -> Interaction:
        await self._require(user_id, recipe_id)
        interaction = await self.interactions.upsert_saved(user_id, recipe_id, saved, at=self.clock())
        logger.info(f"save_recipe user_id={user_id} recipe_id={recipe_id} saved={interaction.saved}")
        return interaction

    async def _require(self, user_id: str, recipe_id: str) -> None:
        if await self.users.get_by_id(user_id) is None:
            raise UserNotFoundError(user_id)
        if await self.recipes.get_by_id(recipe_id) is None:
            raise RecipeNotFoundError(recipe_id)
