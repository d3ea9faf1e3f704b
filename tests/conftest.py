"""Shared fixtures for favorites tests."""
from __future__ import annotations

import pytest

from rental_frontend.config import Settings
from rental_frontend.state.favorites import FavoritesStateManager
from tests.helpers import FakeFavoritesAPI, listing_payload


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        api_url="http://test/api",
        load_retry_attempts=1,
        load_retry_min_wait=0,
        load_retry_max_wait=0,
    )


@pytest.fixture
def api() -> FakeFavoritesAPI:
    return FakeFavoritesAPI([listing_payload("L1"), listing_payload("L2")])


@pytest.fixture
def token_holder() -> dict[str, str | None]:
    return {"token": "session-token"}


@pytest.fixture
def manager(api, settings, token_holder) -> FavoritesStateManager:
    return FavoritesStateManager(api, lambda: token_holder["token"], settings=settings)
