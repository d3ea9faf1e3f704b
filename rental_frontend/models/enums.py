"""Enumerations for favorites state."""

from enum import Enum


class ListingState(str, Enum):
    """Favorite status of a single listing as seen by the client."""

    UNFAVORITED = "unfavorited"
    """Not in the user's favorites."""

    FAVORITED = "favorited"
    """In the user's favorites."""

    TOGGLING_TO_FAVORITED = "toggling_to_favorited"
    """Optimistically added, add request in flight."""

    TOGGLING_TO_UNFAVORITED = "toggling_to_unfavorited"
    """Optimistically removed, remove request in flight."""


class ToggleDirection(str, Enum):
    """Direction of a favorite mutation."""

    FAVORITE = "favorite"
    UNFAVORITE = "unfavorite"

    @classmethod
    def from_membership(cls, was_favorite: bool) -> "ToggleDirection":
        """Direction a toggle takes given the current membership."""
        return cls.UNFAVORITE if was_favorite else cls.FAVORITE


class FavoritesSort(str, Enum):
    """Sort orders offered on the favorites page."""

    RECENTLY_ADDED = "recently_added"
    PRICE_LOW_TO_HIGH = "price_low_to_high"
    PRICE_HIGH_TO_LOW = "price_high_to_low"
    LOCATION = "location"

    @property
    def label(self) -> str:
        return _SORT_LABELS[self]


_SORT_LABELS = {
    FavoritesSort.RECENTLY_ADDED: "Recently added",
    FavoritesSort.PRICE_LOW_TO_HIGH: "Price: Low to High",
    FavoritesSort.PRICE_HIGH_TO_LOW: "Price: High to Low",
    FavoritesSort.LOCATION: "Location",
}
