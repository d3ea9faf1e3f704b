"""Tests for the rental API client."""
from __future__ import annotations

import httpx
import pytest

from rental_frontend.state.errors import (
    AuthError,
    FetchError,
    NetworkError,
    NotFoundError,
    ToggleError,
)
from rental_frontend.state.favorites import FavoritesStateManager
from rental_frontend.utils.api_client import RentalAPIClient


def make_client(settings, handler) -> RentalAPIClient:
    return RentalAPIClient(settings=settings, transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_get_favorites_sends_bearer_token(settings):
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=[{"_id": "L1"}, {"_id": "L2"}])

    client = make_client(settings, handler)
    favorites = await client.get_favorites("tok-123")

    assert favorites == [{"_id": "L1"}, {"_id": "L2"}]
    assert seen[0].method == "GET"
    assert seen[0].url.path == "/api/users/favorites"
    assert seen[0].headers["Authorization"] == "Bearer tok-123"


@pytest.mark.asyncio
async def test_add_and_remove_use_canonical_path(settings):
    seen: list[tuple[str, str]] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append((request.method, request.url.path))
        status = 201 if request.method == "POST" else 204
        return httpx.Response(status)

    client = make_client(settings, handler)
    await client.add_favorite("L1", "tok")
    await client.remove_favorite("L1", "tok")

    assert seen == [
        ("POST", "/api/users/favorites/L1"),
        ("DELETE", "/api/users/favorites/L1"),
    ]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("status", "error_type"),
    [
        (401, AuthError),
        (403, AuthError),
        (404, NotFoundError),
        (500, NetworkError),
        (503, NetworkError),
    ],
)
async def test_status_codes_map_to_errors(settings, status, error_type):
    client = make_client(settings, lambda request: httpx.Response(status))

    with pytest.raises(error_type) as exc_info:
        await client.add_favorite("L1", "tok")

    assert exc_info.value.status_code == status


@pytest.mark.asyncio
async def test_not_found_names_listing(settings):
    client = make_client(settings, lambda request: httpx.Response(404))

    with pytest.raises(NotFoundError) as exc_info:
        await client.remove_favorite("L42", "tok")

    assert exc_info.value.details == {"listing_id": "L42"}
    assert "L42" in exc_info.value.message


@pytest.mark.asyncio
async def test_connection_failure_is_network_error(settings):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = make_client(settings, handler)

    with pytest.raises(NetworkError) as exc_info:
        await client.get_favorites("tok")

    assert exc_info.value.status_code is None


@pytest.mark.asyncio
async def test_timeout_is_network_error(settings):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    client = make_client(settings, handler)

    with pytest.raises(NetworkError, match="timed out"):
        await client.add_favorite("L1", "tok")


@pytest.mark.asyncio
async def test_non_list_favorites_body_is_rejected(settings):
    client = make_client(settings, lambda request: httpx.Response(200, json={"favorites": []}))

    with pytest.raises(NetworkError, match="expected a list"):
        await client.get_favorites("tok")


@pytest.mark.asyncio
async def test_invalid_json_body_is_rejected(settings):
    client = make_client(settings, lambda request: httpx.Response(200, text="<html>"))

    with pytest.raises(NetworkError, match="Malformed"):
        await client.get_favorites("tok")


def corrupt_gzip_response(request: httpx.Request) -> httpx.Response:
    return httpx.Response(200, headers={"Content-Encoding": "gzip"}, content=b"not gzip")


@pytest.mark.asyncio
async def test_undecodable_body_is_network_error(settings):
    client = make_client(settings, corrupt_gzip_response)

    with pytest.raises(NetworkError, match="Request failed"):
        await client.get_favorites("tok")
    with pytest.raises(NetworkError):
        await client.add_favorite("L1", "tok")


@pytest.mark.asyncio
async def test_manager_reports_undecodable_body_as_typed_errors(settings):
    client = make_client(settings, corrupt_gzip_response)
    manager = FavoritesStateManager(client, lambda: "tok", settings=settings)

    with pytest.raises(FetchError) as load_info:
        await manager.load()
    assert isinstance(load_info.value.cause, NetworkError)

    with pytest.raises(ToggleError) as toggle_info:
        await manager.toggle("L1")
    assert isinstance(toggle_info.value.cause, NetworkError)
    assert manager.is_favorite("L1") is False
    assert manager.is_pending("L1") is False
