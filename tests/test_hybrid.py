"""Unit tests for the hybrid combiner, ranking and rank-preserving materialization."""
from __future__ import annotations

import pytest

from fakes import make_recipe
from recipe_reco.domain.models.recipe import RecoItem
from recipe_reco.domain.models.weights import HybridWeights
from recipe_reco.domain.services.hybrid import combine_scores, order_by_rank, rank


def test_combined_score_matches_weighted_sum():
    combined = combine_scores({"r1": 1.0}, {"r1": 0.5}, {"r1": 0.0})
    assert combined["r1"].score == pytest.approx(0.55)


def test_missing_contributors_default_to_zero():
    combined = combine_scores({"a": 1.0}, {"b": 1.0}, {"c": 1.0})
    assert set(combined) == {"a", "b", "c"}
    assert combined["a"].score == pytest.approx(0.4)
    assert combined["b"].score == pytest.approx(0.3)
    assert combined["c"].score == pytest.approx(0.3)
    assert combined["b"].content == 0.0 and combined["b"].collaborative == 1.0


def test_combine_uses_injected_weights():
    weights = HybridWeights(content=0.0, collaborative=0.0, preference=1.0)
    combined = combine_scores({"a": 1.0}, {"a": 1.0}, {"a": 0.25}, weights)
    assert combined["a"].score == pytest.approx(0.25)


def test_rank_sorts_desc_with_recipe_id_tiebreak():
    items = [
        RecoItem(recipe_id="b", score=0.5),
        RecoItem(recipe_id="c", score=0.9),
        RecoItem(recipe_id="a", score=0.5),
        RecoItem(recipe_id="d", score=0.1),
    ]
    assert [i.recipe_id for i in rank(items, 3)] == ["c", "a", "b"]


@pytest.mark.parametrize("limit", [0, -3])
def test_rank_non_positive_limit_is_empty(limit):
    assert rank([RecoItem(recipe_id="a", score=1.0)], limit) == []


def test_order_by_rank_ignores_store_order_and_drops_missing():
    fetched = [make_recipe("a"), make_recipe("b"), make_recipe("c")]
    ordered = order_by_rank(fetched, ["c", "gone", "a", "b"])
    assert [r.recipe_id for r in ordered] == ["c", "a", "b"]


def test_order_by_rank_collapses_duplicate_records():
    fetched = [make_recipe("a"), make_recipe("b"), make_recipe("a")]
    assert [r.recipe_id for r in order_by_rank(fetched, ["b", "a"])] == ["b", "a"]
