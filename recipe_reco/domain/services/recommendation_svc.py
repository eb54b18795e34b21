import asyncio
import logging
import time
from typing import Dict, List, Optional, Set

from recipe_reco.domain.errors import RecipeNotFoundError, UserNotFoundError
from recipe_reco.domain.models.recipe import Interaction, Recipe, RecoResult, UserProfile
from recipe_reco.domain.models.weights import HybridWeights, PreferenceWeights, SimilarityWeights
from recipe_reco.domain.repositories.base import InteractionStore, RecipeStore, UserStore
from recipe_reco.domain.services.collaborative import score_collaborative
from recipe_reco.domain.services.constants import ANCHOR_LIMIT, DEFAULT_LIMIT, NEIGHBOR_LIMIT
from recipe_reco.domain.services.content_based import score_content
from recipe_reco.domain.services.hybrid import combine_scores, order_by_rank, rank
from recipe_reco.domain.services.preference import score_preferences
from recipe_reco.domain.services.seasonality import SeasonalityProvider, StoredSeasonalScore
from recipe_reco.domain.services.similarity import recipe_similarity

logger = logging.getLogger(__name__)


class RecommendationService:
    """
    Hybrid recipe recommender.

    Every call reads a fresh snapshot of recipes, users and interactions,
    scores it in memory and returns; nothing is cached or written back, so
    concurrent calls share no state beyond the stores themselves.
    """

    def __init__(
        self,
        recipes: RecipeStore,
        users: UserStore,
        interactions: InteractionStore,
        *,
        seasonality: Optional[SeasonalityProvider] = None,
        hybrid_weights: HybridWeights = HybridWeights(),
        similarity_weights: SimilarityWeights = SimilarityWeights(),
        preference_weights: PreferenceWeights = PreferenceWeights(),
        anchor_limit: int = ANCHOR_LIMIT,
        neighbor_limit: int = NEIGHBOR_LIMIT,
        default_limit: int = DEFAULT_LIMIT,
    ) -> None:
        self.recipes = recipes
        self.users = users
        self.interactions = interactions
        self.seasonality = seasonality or StoredSeasonalScore()
        self.hybrid_weights = hybrid_weights
        self.similarity_weights = similarity_weights
        self.preference_weights = preference_weights
        self.anchor_limit = anchor_limit
        self.neighbor_limit = neighbor_limit
        self.default_limit = default_limit

    # ------------------------------------------------------------------
    # Public APIs
    # ------------------------------------------------------------------
    async def rank_for_user(
        self, user_id: str, limit: Optional[int] = None, include_previous: bool = False
    ) -> RecoResult:
        """
        Score and rank recipes for a user without materializing them.
        limit=None falls back to the configured default_limit.

        High-level flow:
          1) Load the user (UserNotFoundError if unknown) and the full snapshot.
          2) Build the exclusion set: the user's interacted recipes, or nothing
             when include_previous is set.
          3) Run the content, collaborative and preference scorers.
          4) Blend with the hybrid weights, sort (ties by recipe id), truncate.
        """
        limit = self._limit(limit)
        t0 = time.perf_counter()
        logger.info(f"rank_for_user start user_id={user_id} limit={limit} include_previous={include_previous}")

        user = await self._require_user(user_id)

        db_t0 = time.perf_counter()
        recipes = await self.recipes.list_all()
        interactions_by_user = await self._interactions_by_user(user.user_id)
        logger.info(
            f"rank_for_user snapshot recipes={len(recipes)} users={len(interactions_by_user)} "
            f"db_time={time.perf_counter() - db_t0:.3f}s"
        )

        own = interactions_by_user.get(user.user_id, [])
        exclude_ids: Set[str] = set() if include_previous else {i.recipe_id for i in own}

        content = score_content(
            own, recipes, exclude_ids, weights=self.similarity_weights, anchor_limit=self.anchor_limit
        )
        collaborative = score_collaborative(
            user.user_id, interactions_by_user, exclude_ids, neighbor_limit=self.neighbor_limit
        )
        preference = score_preferences(
            user.preferences,
            recipes,
            exclude_ids,
            seasonal_scores=self._seasonal_scores(recipes) if user.preferences.prefers_seasonal else None,
            weights=self.preference_weights,
        )
        logger.debug(
            f"rank_for_user scores content={len(content)} collaborative={len(collaborative)} "
            f"preference={len(preference)}"
        )

        items = rank(combine_scores(content, collaborative, preference, self.hybrid_weights).values(), limit)
        logger.info(
            f"rank_for_user done user_id={user_id} items={len(items)} total_time={time.perf_counter() - t0:.3f}s"
        )
        return RecoResult(user_id=user.user_id, items=items, count=len(items))

    async def recommend_for_user(
        self, user_id: str, limit: Optional[int] = None, include_previous: bool = False
    ) -> List[Recipe]:
        """Ranked recipe records for a user, best first."""
        result = await self.rank_for_user(user_id, limit=limit, include_previous=include_previous)
        return await self._materialize([item.recipe_id for item in result.items])

    async def similar_recipes(self, recipe_id: str, limit: Optional[int] = None) -> List[Recipe]:
        """
        Recipes closest to the given one by recipe_similarity(), best first,
        ties by recipe id. The target itself is never part of the result.
        """
        limit = self._limit(limit)
        logger.info(f"similar_recipes start recipe_id={recipe_id} limit={limit}")
        target = await self.recipes.get_by_id(recipe_id)
        if target is None:
            logger.warning(f"Recipe not found: recipe_id={recipe_id}")
            raise RecipeNotFoundError(recipe_id)

        if limit <= 0:
            return []

        scored = [
            (recipe_similarity(target, r, self.similarity_weights), r)
            for r in await self.recipes.list_all()
            if r.recipe_id != target.recipe_id
        ]
        scored.sort(key=lambda pair: (-pair[0], pair[1].recipe_id))
        out = [r for _, r in scored[:limit]]
        logger.info(f"similar_recipes done recipe_id={recipe_id} items={len(out)}")
        return out

    async def seasonal_recommendations(self, limit: Optional[int] = None) -> List[Recipe]:
        """Recipes with the most in-season ingredients first; equal scores keep corpus order."""
        limit = self._limit(limit)
        logger.info(f"seasonal_recommendations start limit={limit}")
        if limit <= 0:
            return []
        recipes = await self.recipes.list_all()
        seasonal = self._seasonal_scores(recipes)
        ordered = sorted(recipes, key=lambda r: seasonal[r.recipe_id], reverse=True)
        logger.info(f"seasonal_recommendations done items={min(limit, len(ordered))}")
        return ordered[:limit]

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _limit(self, limit: Optional[int]) -> int:
        return self.default_limit if limit is None else limit

    async def _require_user(self, user_id: str) -> UserProfile:
        user = await self.users.get_by_id(user_id)
        if user is None:
            logger.warning(f"User not found: user_id={user_id}")
            raise UserNotFoundError(user_id)
        return user

    async def _interactions_by_user(self, user_id: str) -> Dict[str, List[Interaction]]:
        user_ids = [p.user_id for p in await self.users.list_all()]
        if user_id not in user_ids:
            user_ids.append(user_id)
        # per-user reads are independent; issue them concurrently
        lists = await asyncio.gather(*(self.interactions.list_for_user(uid) for uid in user_ids))
        return dict(zip(user_ids, lists))

    def _seasonal_scores(self, recipes: List[Recipe]) -> Dict[str, int]:
        return {r.recipe_id: self.seasonality.get_seasonal_score(r) for r in recipes}

    async def _materialize(self, ranked_ids: List[str]) -> List[Recipe]:
        if not ranked_ids:
            return []
        return order_by_rank(await self.recipes.get_many_by_ids(ranked_ids), ranked_ids)
