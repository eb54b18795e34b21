"""Configuration tests: defaults, env overrides and weight models handed to the services."""
from __future__ import annotations

import pytest
from pydantic import ValidationError

from recipe_reco.core.config import Settings, get_settings
from recipe_reco.domain.models.weights import HybridWeights, PreferenceWeights, SimilarityWeights


def test_default_weights_match_scoring_rules():
    settings = Settings()
    assert settings.hybrid_weights() == HybridWeights(content=0.4, collaborative=0.3, preference=0.3)
    assert settings.similarity_weights() == SimilarityWeights(ingredients=0.6, category=0.2, cuisine=0.2)
    assert settings.preference_weights() == PreferenceWeights()
    assert (settings.anchor_limit, settings.neighbor_limit, settings.default_limit) == (5, 10, 10)


def test_env_overrides_weights(monkeypatch):
    monkeypatch.setenv("content_weight", "0.5")
    monkeypatch.setenv("neighbor_limit", "3")
    settings = Settings()
    assert settings.hybrid_weights().content == 0.5
    assert settings.neighbor_limit == 3


def test_weights_are_frozen():
    weights = HybridWeights()
    with pytest.raises(ValidationError):
        weights.content = 1.0


def test_negative_weight_rejected():
    with pytest.raises(ValidationError):
        Settings(content_weight=-0.1).hybrid_weights()


def test_get_settings_is_cached(monkeypatch):
    monkeypatch.setenv("APP_ENV", "development")
    get_settings.cache_clear()
    try:
        assert get_settings() is get_settings()
    finally:
        get_settings.cache_clear()
