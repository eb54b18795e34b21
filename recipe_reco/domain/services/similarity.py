from typing import AbstractSet, Hashable, Optional

from recipe_reco.domain.models.recipe import Recipe
from recipe_reco.domain.models.weights import SimilarityWeights

DEFAULT_SIMILARITY_WEIGHTS = SimilarityWeights()


def jaccard(a: AbstractSet[Hashable], b: AbstractSet[Hashable]) -> float:
    """
    Intersection size over union size.
    Two empty sets share no evidence of similarity, so they score 0.0 (not 1.0).
    """
    if not a and not b:
        return 0.0
    union = len(a | b)
    return len(a & b) / union


def _match(left: Optional[str], right: Optional[str]) -> float:
    # A missing value on either side counts as a mismatch, never as "skip".
    if left is None or right is None:
        return 0.0
    return 1.0 if left == right else 0.0


def recipe_similarity(r1: Recipe, r2: Recipe, weights: SimilarityWeights = DEFAULT_SIMILARITY_WEIGHTS) -> float:
    """Weighted blend of ingredient-kind Jaccard, category equality and cuisine equality, in [0, 1]."""
    return (
        weights.ingredients * jaccard(r1.ingredients, r2.ingredients)
        + weights.category * _match(r1.category, r2.category)
        + weights.cuisine * _match(r1.cuisine, r2.cuisine)
    )
