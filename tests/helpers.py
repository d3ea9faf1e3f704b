"""Test helpers: fake favorites backend and task utilities."""
from __future__ import annotations

import asyncio
from typing import Any

from rental_frontend.state.errors import FavoritesError


class FakeFavoritesAPI:
    """In-memory favorites backend with controllable completion.

    Requests for a listing id in ``gates`` wait for that event; ids in
    ``failures`` raise the mapped error once released.
    """

    def __init__(self, favorites: list[Any] | None = None) -> None:
        self.favorites: list[Any] = list(favorites or [])
        self.calls: list[tuple[str, str | None, str]] = []
        self.gates: dict[str, asyncio.Event] = {}
        self.failures: dict[str, FavoritesError] = {}
        self.load_gates: dict[int, asyncio.Event] = {}
        self.load_failures: list[FavoritesError] = []
        self._load_count = 0

    async def get_favorites(self, token: str) -> list[Any]:
        index = self._load_count
        self._load_count += 1
        self.calls.append(("GET", None, token))
        payload = list(self.favorites)
        gate = self.load_gates.get(index)
        if gate is not None:
            await gate.wait()
        if self.load_failures:
            raise self.load_failures.pop(0)
        return payload

    async def add_favorite(self, listing_id: str, token: str) -> None:
        self.calls.append(("POST", listing_id, token))
        await self._finish(listing_id)

    async def remove_favorite(self, listing_id: str, token: str) -> None:
        self.calls.append(("DELETE", listing_id, token))
        await self._finish(listing_id)

    async def _finish(self, listing_id: str) -> None:
        gate = self.gates.get(listing_id)
        if gate is not None:
            await gate.wait()
        error = self.failures.get(listing_id)
        if error is not None:
            raise error

    def mutations(self) -> list[tuple[str, str | None]]:
        return [(method, listing_id) for method, listing_id, _ in self.calls if method != "GET"]


def listing_payload(listing_id: str, **fields: Any) -> dict[str, Any]:
    return {"_id": listing_id, "location": f"Location {listing_id}", **fields}


async def started(task: asyncio.Task) -> None:
    """Let a freshly created task run up to its first suspension point."""
    for _ in range(3):
        await asyncio.sleep(0)
    assert not task.done()
