import logging
from typing import Dict, Iterable, List, Mapping, Sequence

from recipe_reco.domain.models.recipe import Recipe, RecoItem
from recipe_reco.domain.models.weights import HybridWeights

logger = logging.getLogger(__name__)

DEFAULT_HYBRID_WEIGHTS = HybridWeights()


def combine_scores(
    content: Mapping[str, float],
    collaborative: Mapping[str, float],
    preference: Mapping[str, float],
    weights: HybridWeights = DEFAULT_HYBRID_WEIGHTS,
) -> Dict[str, RecoItem]:
    """
    Weighted blend over the union of candidates; a scorer that did not
    produce a recipe contributes 0 for it.
    """
    combined: Dict[str, RecoItem] = {}
    for recipe_id in set(content) | set(collaborative) | set(preference):
        c = content.get(recipe_id, 0.0)
        cf = collaborative.get(recipe_id, 0.0)
        p = preference.get(recipe_id, 0.0)
        combined[recipe_id] = RecoItem(
            recipe_id=recipe_id,
            score=weights.content * c + weights.collaborative * cf + weights.preference * p,
            content=c,
            collaborative=cf,
            preference=p,
        )
    return combined


def rank(items: Iterable[RecoItem], limit: int) -> List[RecoItem]:
    """Highest score first; equal scores fall back to recipe id ascending."""
    if limit <= 0:
        return []
    ordered = sorted(items, key=lambda item: (-item.score, item.recipe_id))
    return ordered[:limit]


def order_by_rank(recipes: Iterable[Recipe], ranked_ids: Sequence[str]) -> List[Recipe]:
    """
    Reorder fetched records to the ranked id order. Stores return bulk
    lookups in their own order, so it must never leak into the result;
    ids the store no longer knows about are dropped.
    """
    position = {recipe_id: idx for idx, recipe_id in enumerate(ranked_ids)}
    kept = {r.recipe_id: r for r in recipes if r.recipe_id in position}
    missing = len(position) - len(kept)
    if missing:
        logger.warning(f"order_by_rank dropped {missing} ranked ids missing from storage")
    return sorted(kept.values(), key=lambda r: position[r.recipe_id])
