"""Favorite button component bound to the session's favorites state."""

import asyncio

import streamlit as st

from rental_frontend.models.listing import Listing
from rental_frontend.state.errors import FavoritesError
from rental_frontend.state.favorites import FavoritesStateManager
from rental_frontend.utils.api_client import get_api_client
from rental_frontend.utils.session import SessionStateTokenProvider

SESSION_KEY = "favorites_manager"


def run_async(coro):
    """Run async coroutine safely in Streamlit."""
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


def get_favorites_manager() -> FavoritesStateManager:
    """Get the favorites manager for the current browser session."""
    if SESSION_KEY not in st.session_state:
        st.session_state[SESSION_KEY] = FavoritesStateManager(
            api_client=get_api_client(),
            token_provider=SessionStateTokenProvider(),
        )
    return st.session_state[SESSION_KEY]


def render_favorite_button(
    listing: Listing,
    manager: FavoritesStateManager | None = None,
    key: str = "",
):
    """Render the heart button for a listing.

    Args:
        listing: Listing to toggle
        manager: Favorites manager, defaults to the session's
        key: Unique key suffix
    """
    manager = manager or get_favorites_manager()

    is_fav = manager.is_favorite(listing.id)
    btn_label = "❤️" if is_fav else "🤍"
    btn_help = "Remove from favorites" if is_fav else "Add to favorites"

    clicked = st.button(
        btn_label,
        key=f"fav_{listing.id}_{key}",
        help=btn_help,
        disabled=manager.is_pending(listing.id),
    )
    if not clicked:
        return

    try:
        run_async(manager.toggle(listing.id, listing))
    except FavoritesError as e:
        st.warning(e.message)
    else:
        st.rerun()
