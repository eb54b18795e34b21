"""
Content-based scoring: how close each candidate recipe is to the recipes a
user engaged with the most.
"""
import logging
from typing import AbstractSet, Dict, List, Sequence

from recipe_reco.domain.models.recipe import Interaction, Recipe
from recipe_reco.domain.models.weights import SimilarityWeights
from recipe_reco.domain.services.constants import ANCHOR_LIMIT
from recipe_reco.domain.services.similarity import DEFAULT_SIMILARITY_WEIGHTS, recipe_similarity

logger = logging.getLogger(__name__)


def select_anchors(interactions: Sequence[Interaction], limit: int = ANCHOR_LIMIT) -> List[Interaction]:
    """Most viewed interactions first; equal view counts keep storage order."""
    ordered = sorted(interactions, key=lambda i: i.view_count, reverse=True)
    return ordered[: max(limit, 0)]


def score_content(
    interactions: Sequence[Interaction],
    recipes: Sequence[Recipe],
    exclude_ids: AbstractSet[str],
    *,
    weights: SimilarityWeights = DEFAULT_SIMILARITY_WEIGHTS,
    anchor_limit: int = ANCHOR_LIMIT,
) -> Dict[str, float]:
    """
    Score every candidate (recipe not in exclude_ids) by its best similarity to
    one of the user's anchor recipes.

    Aggregation is max, not sum: one strong match dominates instead of being
    diluted by many weak anchors. A user without interactions gets an empty map.
    """
    scores: Dict[str, float] = {}
    if not interactions:
        return scores

    by_id = {r.recipe_id: r for r in recipes}
    anchors = [by_id[i.recipe_id] for i in select_anchors(interactions, anchor_limit) if i.recipe_id in by_id]
    logger.debug(f"[CB] {len(anchors)} anchors from {len(interactions)} interactions")

    for anchor in anchors:
        for candidate in recipes:
            if candidate.recipe_id in exclude_ids:
                continue
            similarity = recipe_similarity(anchor, candidate, weights)
            scores[candidate.recipe_id] = max(similarity, scores.get(candidate.recipe_id, 0.0))

    logger.debug(f"[CB] scored {len(scores)} candidates")
    return scores
