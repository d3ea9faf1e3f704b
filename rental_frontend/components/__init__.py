"""UI components for the frontend."""

from rental_frontend.components.favorite_button import (
    get_favorites_manager,
    render_favorite_button,
    run_async,
)
from rental_frontend.components.favorites_page import render_favorites_page
from rental_frontend.components.listing_card import render_listing_card

__all__ = [
    # Favorites
    "get_favorites_manager",
    "render_favorite_button",
    "render_favorites_page",
    "run_async",
    # Listings
    "render_listing_card",
]
