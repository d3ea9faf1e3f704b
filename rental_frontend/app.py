"""Rental Finder - favorites frontend.

Run with: streamlit run rental_frontend/app.py
"""

import streamlit as st

from rental_frontend.components import get_favorites_manager, render_favorites_page
from rental_frontend.components.favorites_page import LOADED_KEY
from rental_frontend.config import get_settings
from rental_frontend.log_config import configure_logging

settings = get_settings()
configure_logging()

# Page configuration
st.set_page_config(
    page_title=settings.app_title,
    page_icon="🏠",
    layout="centered",
    initial_sidebar_state="auto",
)


def render_session_sidebar():
    """Sidebar holding the session token set by the sign-in flow."""
    manager = get_favorites_manager()

    with st.sidebar:
        st.subheader("Session")
        token = st.session_state.get(settings.token_session_key)

        if token:
            st.caption("Signed in")
            if st.button("Sign out", use_container_width=True):
                st.session_state.pop(settings.token_session_key, None)
                st.session_state[LOADED_KEY] = False
                manager.reset()
                st.rerun()
        else:
            entered = st.text_input("Session token", type="password")
            if entered:
                st.session_state[settings.token_session_key] = entered
                st.session_state[LOADED_KEY] = False
                st.rerun()


def main():
    """Main application entry point."""
    st.title(settings.app_title)
    render_session_sidebar()

    if not st.session_state.get(settings.token_session_key):
        st.info("Sign in to see your favorites.")
        return

    render_favorites_page()


main()
