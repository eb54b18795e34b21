"""
Preference scoring: match recipes against what the user explicitly declared
(categories, cuisines, liked/disliked ingredients, difficulty, prep time,
seasonal taste).
"""
import logging
from typing import AbstractSet, Dict, Mapping, Optional, Sequence

from recipe_reco.domain.models.recipe import PreferenceSet, Recipe
from recipe_reco.domain.models.weights import PreferenceWeights
from recipe_reco.domain.services.constants import SEASONAL_SCORE_MAX

logger = logging.getLogger(__name__)

DEFAULT_PREFERENCE_WEIGHTS = PreferenceWeights()


def preference_match(
    recipe: Recipe,
    prefs: PreferenceSet,
    seasonal_score: Optional[int] = None,
    weights: PreferenceWeights = DEFAULT_PREFERENCE_WEIGHTS,
) -> float:
    """Clamped [0, 1] match of one recipe against declared preferences."""
    score = 0.0

    if recipe.category is not None and recipe.category in prefs.preferred_categories:
        score += weights.category
    if recipe.cuisine is not None and recipe.cuisine in prefs.preferred_cuisines:
        score += weights.cuisine

    score += weights.favorite_ingredient * len(recipe.ingredients & prefs.favorite_ingredients)
    score += weights.disliked_ingredient * len(recipe.ingredients & prefs.disliked_ingredients)

    if (
        prefs.difficulty_preference is not None
        and recipe.difficulty is not None
        and recipe.difficulty == prefs.difficulty_preference
    ):
        score += weights.difficulty
    if prefs.max_prep_time is not None and recipe.prep_time is not None and recipe.prep_time <= prefs.max_prep_time:
        score += weights.prep_time

    if prefs.prefers_seasonal:
        seasonal = recipe.seasonal_score if seasonal_score is None else seasonal_score
        score += seasonal / SEASONAL_SCORE_MAX * weights.seasonal

    return max(0.0, min(1.0, score))


def score_preferences(
    prefs: PreferenceSet,
    recipes: Sequence[Recipe],
    exclude_ids: AbstractSet[str],
    *,
    seasonal_scores: Optional[Mapping[str, int]] = None,
    weights: PreferenceWeights = DEFAULT_PREFERENCE_WEIGHTS,
) -> Dict[str, float]:
    """
    Score every candidate against prefs. Recipes scoring 0 after clamping are
    left out of the map entirely, so they never enter the hybrid union on
    preference alone.
    """
    seasonal_scores = seasonal_scores or {}
    scores: Dict[str, float] = {}
    for recipe in recipes:
        if recipe.recipe_id in exclude_ids:
            continue
        score = preference_match(recipe, prefs, seasonal_scores.get(recipe.recipe_id), weights)
        if score > 0:
            scores[recipe.recipe_id] = score

    logger.debug(f"[PREF] {len(scores)} of {len(recipes)} recipes matched")
    return scores
