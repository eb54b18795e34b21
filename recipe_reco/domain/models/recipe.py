from pydantic import BaseModel, Field, field_validator
from typing import Optional, FrozenSet, List
from datetime import datetime

from recipe_reco.domain.services.constants import SAVED_MULTIPLIER, SEASONAL_SCORE_MAX, SEASONAL_SCORE_MIN


def _kinds(values) -> FrozenSet[str]:
    """Normalize ingredient kinds to upper-case tokens ("tomato" -> "TOMATO")."""
    if values is None:
        return frozenset()
    return frozenset(str(v).strip().upper() for v in values if v is not None and str(v).strip())


class Recipe(BaseModel):
    recipe_id: str
    title: str = ""
    description: Optional[str] = None
    image_url: Optional[str] = None
    ingredients: FrozenSet[str] = frozenset()   # ingredient kinds, e.g. {"TOMATO", "BASIL"}
    category: Optional[str] = None
    cuisine: Optional[str] = None
    difficulty: Optional[str] = None
    prep_time: Optional[int] = None             # minutes
    seasonal_score: int = Field(default=0, ge=0, le=100)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"frozen": True}  # read-only snapshot for a scoring pass

    @field_validator("ingredients", mode="before")
    @classmethod
    def _normalize_ingredients(cls, v):
        return _kinds(v)

    @field_validator("seasonal_score", mode="before")
    @classmethod
    def _clamp_seasonal_score(cls, v):
        # stored scores outside 0..100 are clamped rather than rejected
        if v is None:
            return SEASONAL_SCORE_MIN
        return max(SEASONAL_SCORE_MIN, min(SEASONAL_SCORE_MAX, int(v)))


class PreferenceSet(BaseModel):
    """Explicit, user-declared preferences used by the preference scorer."""
    preferred_categories: FrozenSet[str] = frozenset()
    preferred_cuisines: FrozenSet[str] = frozenset()
    favorite_ingredients: FrozenSet[str] = frozenset()
    disliked_ingredients: FrozenSet[str] = frozenset()
    max_prep_time: Optional[int] = None
    difficulty_preference: Optional[str] = None
    prefers_seasonal: bool = False

    model_config = {"frozen": True}

    @field_validator("favorite_ingredients", "disliked_ingredients", mode="before")
    @classmethod
    def _normalize_ingredients(cls, v):
        return _kinds(v)

    @field_validator("preferred_categories", "preferred_cuisines", mode="before")
    @classmethod
    def _none_as_empty(cls, v):
        return frozenset() if v is None else v


class UserProfile(BaseModel):
    user_id: str
    username: Optional[str] = None
    preferences: PreferenceSet = PreferenceSet()

    model_config = {"frozen": True}


class Interaction(BaseModel):
    """One (user, recipe) engagement record; storage keeps at most one per pair."""
    user_id: str
    recipe_id: str
    view_count: int = Field(default=0, ge=0)
    saved: bool = False
    first_interaction: Optional[datetime] = None
    last_interaction: Optional[datetime] = None

    model_config = {"frozen": True}

    @property
    def strength(self) -> float:
        return self.view_count * (SAVED_MULTIPLIER if self.saved else 1.0)


class RecoItem(BaseModel):
    recipe_id: str
    score: float = Field(ge=0)
    content: float = 0.0
    collaborative: float = 0.0
    preference: float = 0.0
    model_config = {"frozen": True}


class RecoResult(BaseModel):
    user_id: str
    items: List[RecoItem]
    count: int
    model_config = {"frozen": True}
