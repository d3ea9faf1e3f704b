"""Listing card component."""

import streamlit as st

from rental_frontend.components.favorite_button import render_favorite_button
from rental_frontend.config import get_settings
from rental_frontend.models.listing import Listing
from rental_frontend.state.favorites import FavoritesStateManager


def render_listing_card(
    listing: Listing,
    manager: FavoritesStateManager | None = None,
    key: str = "",
):
    """Render a listing card with its favorite button."""
    settings = get_settings()
    img_url = listing.image_url(settings.files_url)

    with st.container():
        col1, col2, col3 = st.columns([1, 3, 1])

        with col1:
            if img_url:
                st.image(img_url, width=120)
            else:
                st.write("No image")

        with col2:
            st.markdown(f"**{listing.location or 'Unknown location'}**")

            if listing.address:
                st.caption(listing.address)

            if listing.rent_money is not None:
                st.markdown(f"**${listing.rent_money:,.0f}/month**")

            features = []
            if listing.bedrooms:
                features.append(f"{listing.bedrooms} bed")
            if listing.bathrooms:
                features.append(f"{listing.bathrooms:g} bath")
            if listing.area:
                features.append(f"{listing.area:,.0f} sq ft")
            if features:
                st.caption(" | ".join(features))

        with col3:
            render_favorite_button(listing, manager, key=key)

        st.divider()
