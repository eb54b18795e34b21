# recipe_reco/domain/repositories/base.py
"""
Storage collaborator contracts consumed by the recommendation services.
Any backend (Mongo adapters in this package, in-memory fakes in tests) only
needs to satisfy these shapes.
"""
from __future__ import annotations
from datetime import datetime
from typing import Iterable, List, Optional, Protocol

from recipe_reco.domain.models.recipe import Interaction, Recipe, UserProfile


class RecipeStore(Protocol):
    async def get_by_id(self, recipe_id: str) -> Optional[Recipe]: ...

    async def list_all(self) -> List[Recipe]: ...

    async def get_many_by_ids(self, ids: Iterable[str]) -> List[Recipe]:
        """Records for the given ids, in whatever order the backend returns them."""
        ...


class UserStore(Protocol):
    async def get_by_id(self, user_id: str) -> Optional[UserProfile]: ...

    async def list_all(self) -> List[UserProfile]: ...


class InteractionStore(Protocol):
    async def list_for_user(self, user_id: str) -> List[Interaction]: ...

    async def upsert_view(self, user_id: str, recipe_id: str, *, at: datetime) -> Interaction:
        """Increment view_count (a new record starts at 1, unsaved) and stamp last_interaction."""
        ...

    async def upsert_saved(self, user_id: str, recipe_id: str, saved: bool, *, at: datetime) -> Interaction:
        """Set the saved flag (a new record starts with view_count 1) and stamp last_interaction."""
        ...
