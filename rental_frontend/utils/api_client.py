"""API client for the rental listings backend."""

from typing import Any
from urllib.parse import quote

import httpx
import structlog

from rental_frontend.config import Settings, get_settings
from rental_frontend.state.errors import (
    AuthError,
    FavoritesError,
    NetworkError,
    NotFoundError,
)

logger = structlog.get_logger()

FAVORITES_PATH = "/users/favorites"


class RentalAPIClient:
    """HTTP client for the favorites endpoints.

    Every call is bearer-token authenticated. Failures are translated into
    AuthError, NotFoundError or NetworkError; no httpx exception escapes.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.settings = settings or get_settings()
        self._transport = transport

    def _get_client(self) -> httpx.AsyncClient:
        """Create a new HTTP client for current event loop."""
        return httpx.AsyncClient(
            base_url=self.settings.api_url,
            timeout=httpx.Timeout(
                connect=self.settings.connect_timeout,
                read=self.settings.request_timeout,
                write=self.settings.request_timeout,
                pool=self.settings.request_timeout,
            ),
            transport=self._transport,
        )

    @staticmethod
    def _headers(token: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {token}"}

    @staticmethod
    def _favorite_path(listing_id: str) -> str:
        return f"{FAVORITES_PATH}/{quote(listing_id, safe='')}"

    async def _request(
        self,
        method: str,
        path: str,
        token: str,
        listing_id: str | None = None,
    ) -> httpx.Response:
        """Send a request and map failures onto favorites errors."""
        try:
            async with self._get_client() as client:
                response = await client.request(method, path, headers=self._headers(token))
                response.raise_for_status()
                return response
        except httpx.HTTPStatusError as e:
            error = _error_for_status(e.response.status_code, listing_id)
        except httpx.TimeoutException:
            error = NetworkError("Request timed out")
        except httpx.TransportError as e:
            error = NetworkError(f"Connection error: {e}")
        except httpx.HTTPError as e:
            error = NetworkError(f"Request failed: {e}")

        logger.warning(
            "favorites_api_error",
            method=method,
            path=path,
            error_code=error.error_code,
            status_code=error.status_code,
        )
        raise error

    # ==========================================================================
    # Favorites Endpoints
    # ==========================================================================

    async def get_favorites(self, token: str) -> list[dict[str, Any]]:
        """Get the current user's favorited listings."""
        response = await self._request("GET", FAVORITES_PATH, token)
        try:
            data = response.json()
        except ValueError as e:
            raise NetworkError(f"Malformed favorites response: {e}") from e

        if not isinstance(data, list):
            raise NetworkError("Malformed favorites response: expected a list")
        return data

    async def add_favorite(self, listing_id: str, token: str) -> None:
        """Add a listing to favorites."""
        await self._request("POST", self._favorite_path(listing_id), token, listing_id)

    async def remove_favorite(self, listing_id: str, token: str) -> None:
        """Remove a listing from favorites."""
        await self._request("DELETE", self._favorite_path(listing_id), token, listing_id)


def _error_for_status(status_code: int, listing_id: str | None) -> FavoritesError:
    if status_code in (401, 403):
        return AuthError(status_code=status_code)
    if status_code == 404:
        return NotFoundError(listing_id)
    return NetworkError(f"Server error: {status_code}", status_code=status_code)


def get_api_client() -> RentalAPIClient:
    """Get API client instance."""
    return RentalAPIClient()
