from typing import Protocol

from recipe_reco.domain.models.recipe import Recipe


class SeasonalityProvider(Protocol):
    """Seasonality collaborator: how many of a recipe's ingredients are in season, as 0..100."""

    def get_seasonal_score(self, recipe: Recipe) -> int: ...


class StoredSeasonalScore:
    """Reads the score already attached to the recipe snapshot (clamped to 0..100 on load)."""

    def get_seasonal_score(self, recipe: Recipe) -> int:
        return recipe.seasonal_score
