"""Data models for the rental frontend."""

from rental_frontend.models.enums import FavoritesSort, ListingState, ToggleDirection
from rental_frontend.models.listing import Listing

__all__ = [
    "FavoritesSort",
    "Listing",
    "ListingState",
    "ToggleDirection",
]
