"""
Collaborative scoring: propagate the engagement of behaviourally similar users
onto recipes the target user has not seen.
"""
import logging
from typing import AbstractSet, Dict, List, Mapping, Sequence, Tuple

from recipe_reco.domain.models.recipe import Interaction
from recipe_reco.domain.services.constants import NEIGHBOR_LIMIT
from recipe_reco.domain.services.similarity import jaccard

logger = logging.getLogger(__name__)


def find_neighbors(
    user_id: str,
    interactions_by_user: Mapping[str, Sequence[Interaction]],
    limit: int = NEIGHBOR_LIMIT,
) -> List[Tuple[str, float]]:
    """
    Users whose interacted-recipe sets overlap the target's, as (user_id, similarity)
    pairs sorted by similarity desc then user id asc. Only positive similarities are kept.
    """
    own = {i.recipe_id for i in interactions_by_user.get(user_id, ())}
    neighbors: List[Tuple[str, float]] = []
    for other_id, other_interactions in interactions_by_user.items():
        if other_id == user_id:
            continue
        similarity = jaccard(own, {i.recipe_id for i in other_interactions})
        if similarity > 0:
            neighbors.append((other_id, similarity))

    neighbors.sort(key=lambda pair: (-pair[1], pair[0]))
    return neighbors[: max(limit, 0)]


def normalize_by_max(scores: Dict[str, float]) -> Dict[str, float]:
    """Scale into [0, 1] by the largest value; empty maps and a zero max are returned untouched."""
    if not scores:
        return scores
    max_score = max(scores.values())
    if max_score <= 0:
        return scores
    return {recipe_id: value / max_score for recipe_id, value in scores.items()}


def score_collaborative(
    user_id: str,
    interactions_by_user: Mapping[str, Sequence[Interaction]],
    exclude_ids: AbstractSet[str],
    *,
    neighbor_limit: int = NEIGHBOR_LIMIT,
) -> Dict[str, float]:
    """
    Sum neighbour_similarity * interaction_strength per candidate recipe, then
    normalize by the maximum. Normalization needs every contribution first, so
    nothing is final until the whole neighbourhood has been scanned.
    """
    neighbors = find_neighbors(user_id, interactions_by_user, neighbor_limit)
    logger.debug(f"[CF] user_id={user_id} neighbors={neighbors}")

    scores: Dict[str, float] = {}
    for neighbor_id, similarity in neighbors:
        for interaction in interactions_by_user.get(neighbor_id, ()):
            if interaction.recipe_id in exclude_ids:
                continue
            scores[interaction.recipe_id] = scores.get(interaction.recipe_id, 0.0) + similarity * interaction.strength

    scores = normalize_by_max(scores)
    logger.debug(f"[CF] scored {len(scores)} candidates")
    return scores
