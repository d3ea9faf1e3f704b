"""Session token providers."""

from typing import Protocol

import streamlit as st

from rental_frontend.config import get_settings


class TokenProvider(Protocol):
    """Returns the current session token, or None when signed out."""

    def __call__(self) -> str | None: ...


class StaticTokenProvider:
    """Token provider for a fixed token (CLI, tests)."""

    def __init__(self, token: str | None):
        self._token = token or None

    def __call__(self) -> str | None:
        return self._token


class SessionStateTokenProvider:
    """Reads the persisted session token from Streamlit session state."""

    def __init__(self, key: str | None = None):
        self.key = key or get_settings().token_session_key

    def __call__(self) -> str | None:
        token = st.session_state.get(self.key)
        return token or None
