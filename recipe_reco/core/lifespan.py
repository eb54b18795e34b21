# recipe_reco/core/lifespan.py
import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import AsyncIterator, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import ConnectionFailure

from recipe_reco.core.config import Settings, get_settings
from recipe_reco.core.logging import configure_logging
from recipe_reco.db import mongo
from recipe_reco.domain.repositories.interaction_repo import InteractionRepo
from recipe_reco.domain.repositories.recipe_repo import RecipeRepo
from recipe_reco.domain.repositories.user_repo import UserRepo
from recipe_reco.domain.services.interaction_svc import InteractionService
from recipe_reco.domain.services.recommendation_svc import RecommendationService
from recipe_reco.domain.services.seasonality import SeasonalityProvider

logger = logging.getLogger(__name__)


@dataclass
class Services:
    recommendations: RecommendationService
    interactions: InteractionService


def build_services(
    db: AsyncIOMotorDatabase,
    settings: Settings,
    seasonality: Optional[SeasonalityProvider] = None,
) -> Services:
    """Wire Mongo-backed repositories and configured weights into the services."""
    recipes = RecipeRepo(db, settings.recipes_collection)
    users = UserRepo(db, settings.users_collection)
    interactions = InteractionRepo(db, settings.interactions_collection)
    return Services(
        recommendations=RecommendationService(
            recipes,
            users,
            interactions,
            seasonality=seasonality,
            hybrid_weights=settings.hybrid_weights(),
            similarity_weights=settings.similarity_weights(),
            preference_weights=settings.preference_weights(),
            anchor_limit=settings.anchor_limit,
            neighbor_limit=settings.neighbor_limit,
            default_limit=settings.default_limit,
        ),
        interactions=InteractionService(recipes, users, interactions),
    )


@asynccontextmanager
async def lifespan(
    settings: Optional[Settings] = None,
    seasonality: Optional[SeasonalityProvider] = None,
) -> AsyncIterator[Services]:
    settings = settings or get_settings()
    configure_logging(level=logging.DEBUG if settings.DEBUG else logging.INFO)

    # --- Startup ---
    db = await mongo.connect(settings)
    try:
        try:
            await InteractionRepo(db, settings.interactions_collection).ensure_indexes()
        except ConnectionFailure as e:
            # store unreachable: retried on the next startup; any other failure aborts startup
            logger.error(f"ensure_indexes skipped, Mongo unreachable: {e}")

        # Services run
        yield build_services(db, settings, seasonality)
    finally:
        # --- Shutdown ---
        await mongo.disconnect()
