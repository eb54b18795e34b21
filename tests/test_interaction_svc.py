"""Tests for InteractionService: view/save tracking with one record per (user, recipe)."""
from __future__ import annotations

import asyncio
from datetime import datetime, timezone

import pytest

from fakes import MemoryInteractionStore, MemoryRecipeStore, MemoryUserStore, make_recipe, make_user
from recipe_reco.domain.errors import RecipeNotFoundError, UserNotFoundError
from recipe_reco.domain.services.interaction_svc import InteractionService

T0 = datetime(2026, 10, 1, 12, 0, tzinfo=timezone.utc)
T1 = datetime(2026, 10, 2, 12, 0, tzinfo=timezone.utc)
T2 = datetime(2026, 10, 3, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def store():
    return MemoryInteractionStore()


@pytest.fixture
def service(store):
    return InteractionService(
        MemoryRecipeStore([make_recipe("r1"), make_recipe("r2")]),
        MemoryUserStore([make_user("alice")]),
        store,
        clock=lambda: T0,
    )


def test_first_view_creates_record(service):
    interaction = asyncio.run(service.track_view("alice", "r1"))
    assert interaction.view_count == 1
    assert interaction.saved is False
    assert interaction.last_interaction == T0
    assert interaction.first_interaction == T0


def test_repeat_views_increment_single_record(service, store):
    for _ in range(3):
        asyncio.run(service.track_view("alice", "r1"))
    records = asyncio.run(store.list_for_user("alice"))
    assert len(records) == 1
    assert records[0].view_count == 3


def test_save_then_unsave_keeps_view_count(service, store):
    asyncio.run(service.track_view("alice", "r2"))
    asyncio.run(service.track_view("alice", "r2"))
    saved = asyncio.run(service.save_recipe("alice", "r2"))
    assert saved.saved is True and saved.view_count == 2
    assert saved.strength == 4.0

    unsaved = asyncio.run(service.save_recipe("alice", "r2", saved=False))
    assert unsaved.saved is False and unsaved.view_count == 2
    assert len(asyncio.run(store.list_for_user("alice"))) == 1


def test_save_without_prior_view_starts_at_one_view(service):
    interaction = asyncio.run(service.save_recipe("alice", "r1"))
    assert interaction.view_count == 1
    assert interaction.saved is True


def test_unknown_user_or_recipe_is_not_found(service, store):
    with pytest.raises(UserNotFoundError):
        asyncio.run(service.track_view("mallory", "r1"))
    with pytest.raises(RecipeNotFoundError):
        asyncio.run(service.save_recipe("alice", "missing"))
    assert store.records == {}


def test_first_interaction_is_kept_across_updates(store):
    times = iter([T0, T1, T2])
    service = InteractionService(
        MemoryRecipeStore([make_recipe("r1")]),
        MemoryUserStore([make_user("alice")]),
        store,
        clock=lambda: next(times),
    )
    asyncio.run(service.track_view("alice", "r1"))
    asyncio.run(service.track_view("alice", "r1"))
    saved = asyncio.run(service.save_recipe("alice", "r1"))
    assert saved.first_interaction == T0
    assert saved.last_interaction == T2
