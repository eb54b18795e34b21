from pydantic import BaseModel, Field


class HybridWeights(BaseModel):
    """Blend of the three scorer outputs into one combined score."""
    content: float = Field(default=0.4, ge=0)
    collaborative: float = Field(default=0.3, ge=0)
    preference: float = Field(default=0.3, ge=0)
    model_config = {"frozen": True}


class SimilarityWeights(BaseModel):
    """Blend used by recipe_similarity(): ingredient overlap, category and cuisine equality."""
    ingredients: float = Field(default=0.6, ge=0)
    category: float = Field(default=0.2, ge=0)
    cuisine: float = Field(default=0.2, ge=0)
    model_config = {"frozen": True}


class PreferenceWeights(BaseModel):
    """Additive bonuses/penalties applied by the preference scorer."""
    category: float = 0.4
    cuisine: float = 0.4
    favorite_ingredient: float = 0.2       # per matching ingredient kind
    disliked_ingredient: float = -0.5      # per matching ingredient kind
    difficulty: float = 0.3
    prep_time: float = 0.3
    seasonal: float = 0.5                  # scaled by seasonal_score / 100
    model_config = {"frozen": True}
