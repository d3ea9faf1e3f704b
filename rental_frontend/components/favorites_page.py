"""My favorites page."""

import streamlit as st

from rental_frontend.components.favorite_button import get_favorites_manager, run_async
from rental_frontend.components.listing_card import render_listing_card
from rental_frontend.models.enums import FavoritesSort
from rental_frontend.state.errors import FavoritesError
from rental_frontend.state.favorites import FavoritesStateManager

LOADED_KEY = "favorites_loaded"


def render_favorites_page(manager: FavoritesStateManager | None = None):
    """Render the signed-in user's favorites."""
    manager = manager or get_favorites_manager()

    st.header("My Favorites")
    st.caption("Your saved properties that caught your eye")

    if not st.session_state.get(LOADED_KEY):
        try:
            run_async(manager.load())
        except FavoritesError as e:
            st.error(f"Failed to load your favorites. {e.message}")
            if st.button("Try Again", key="favorites_retry"):
                st.rerun()
            return
        st.session_state[LOADED_KEY] = True

    favorites = manager.favorites
    if not favorites:
        st.info("No favorites yet. Click the heart on a listing to save it here.")
        return

    col1, col2 = st.columns([3, 1])
    with col1:
        sort = st.selectbox(
            "Sort by",
            options=list(FavoritesSort),
            format_func=lambda s: s.label,
            key="favorites_sort",
        )
    with col2:
        st.metric("Saved", len(favorites))
        if st.button("Refresh", key="favorites_refresh"):
            st.session_state[LOADED_KEY] = False
            st.rerun()

    for listing in manager.listings(sort):
        render_listing_card(listing, manager, key="favorites")
        if st.button(
            "❌ Remove",
            key=f"rm_fav_{listing.id}",
            help="Remove from favorites",
            disabled=manager.is_pending(listing.id),
        ):
            try:
                run_async(manager.remove(listing.id))
            except FavoritesError as e:
                st.warning(f"Failed to remove from favorites. {e.message}")
            else:
                st.rerun()
