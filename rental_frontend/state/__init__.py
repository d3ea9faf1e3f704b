"""State management for the frontend."""

from rental_frontend.state.errors import (
    AuthError,
    FavoritesError,
    FetchError,
    NetworkError,
    NotFoundError,
    PendingToggleError,
    ToggleError,
)
from rental_frontend.state.favorites import (
    FavoriteSet,
    FavoritesAPI,
    FavoritesStateManager,
)

__all__ = [
    "AuthError",
    "FavoritesError",
    "FetchError",
    "NetworkError",
    "NotFoundError",
    "PendingToggleError",
    "ToggleError",
    "FavoriteSet",
    "FavoritesAPI",
    "FavoritesStateManager",
]
