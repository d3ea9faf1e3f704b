"""Utilities for the rental frontend."""

from rental_frontend.utils.api_client import RentalAPIClient, get_api_client
from rental_frontend.utils.session import (
    SessionStateTokenProvider,
    StaticTokenProvider,
    TokenProvider,
)

__all__ = [
    "RentalAPIClient",
    "get_api_client",
    "SessionStateTokenProvider",
    "StaticTokenProvider",
    "TokenProvider",
]
