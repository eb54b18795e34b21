from functools import lru_cache
from typing import Literal, Optional
import os
from pydantic_settings import BaseSettings, SettingsConfigDict

from recipe_reco.domain.models.weights import HybridWeights, PreferenceWeights, SimilarityWeights
from recipe_reco.domain.services.constants import ANCHOR_LIMIT, DEFAULT_LIMIT, NEIGHBOR_LIMIT

EnvName = Literal["development", "production"]

def _env_file_for(app_env: EnvName) -> str:
    return ".env.development" if app_env == "development" else ".env.production"

class Settings(BaseSettings):

    # Core
    APP_ENV: EnvName = "development"
    APP_NAME: str = "RecipeRecommender"
    DEBUG: bool = False

    # Mongo
    MONGO_URI: Optional[str] = None
    MONGO_DB: str = "receiptify"
    MONGO_TLS: bool = True
    recipes_collection: str = "recipes"
    users_collection: str = "profiles"
    interactions_collection: str = "user_interactions"

    # Request shaping
    default_limit: int = DEFAULT_LIMIT
    anchor_limit: int = ANCHOR_LIMIT          # top viewed recipes used as content anchors
    neighbor_limit: int = NEIGHBOR_LIMIT      # most similar users kept for collaborative scoring

    # Hybrid blend
    content_weight: float = 0.4
    collaborative_weight: float = 0.3
    preference_weight: float = 0.3

    # Recipe similarity blend
    ingredient_weight: float = 0.6
    category_weight: float = 0.2
    cuisine_weight: float = 0.2

    # pydantic-settings config will be set dynamically in the factory below
    model_config = SettingsConfigDict(env_file=None, case_sensitive=True)

    def hybrid_weights(self) -> HybridWeights:
        return HybridWeights(
            content=self.content_weight,
            collaborative=self.collaborative_weight,
            preference=self.preference_weight,
        )

    def similarity_weights(self) -> SimilarityWeights:
        return SimilarityWeights(
            ingredients=self.ingredient_weight,
            category=self.category_weight,
            cuisine=self.cuisine_weight,
        )

    def preference_weights(self) -> PreferenceWeights:
        # Per-rule preference bonuses are not exposed as env knobs yet.
        return PreferenceWeights()

@lru_cache
def get_settings() -> Settings:
    """
    Factory that chooses the right .env file based on APP_ENV.
    Cached so every caller shares one Settings instance.
    """
    app_env: EnvName = os.getenv("APP_ENV", "development")  # earliest switch
    env_file = _env_file_for(app_env)
    return Settings(
                _env_file=env_file,  # load .env.development or .env.production
                _env_file_encoding="utf-8"
    )
