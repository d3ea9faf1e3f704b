"""User favorites state with optimistic toggles."""

import itertools
from dataclasses import dataclass, field
from typing import Any, Callable, Iterator, Protocol

import structlog
from pydantic import ValidationError
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from rental_frontend.config import Settings, get_settings
from rental_frontend.models.enums import FavoritesSort, ListingState, ToggleDirection
from rental_frontend.models.listing import Listing
from rental_frontend.state.errors import (
    AuthError,
    FavoritesError,
    FetchError,
    NetworkError,
    PendingToggleError,
    ToggleError,
)

logger = structlog.get_logger()


class FavoritesAPI(Protocol):
    """Remote favorites store."""

    async def get_favorites(self, token: str) -> list[Any]: ...

    async def add_favorite(self, listing_id: str, token: str) -> None: ...

    async def remove_favorite(self, listing_id: str, token: str) -> None: ...


@dataclass(frozen=True)
class FavoriteSet:
    """Snapshot of the favorited listing ids."""

    member_ids: frozenset[str] = field(default_factory=frozenset)

    def __contains__(self, listing_id: object) -> bool:
        return listing_id in self.member_ids

    def __len__(self) -> int:
        return len(self.member_ids)

    def __iter__(self) -> Iterator[str]:
        return iter(self.member_ids)


Subscriber = Callable[[FavoriteSet], Any]


class FavoritesStateManager:
    """Owns the favorite status of every listing for the signed-in user.

    Toggles are applied locally first and then sent to the backend; a failed
    request rolls the listing back to its previous status. At most one toggle
    per listing may be in flight, toggles on different listings are
    independent.

    A load that completes while toggles are pending keeps those optimistic
    flips on top of the fetched set. Only the most recently started load
    applies its result.
    """

    def __init__(
        self,
        api_client: FavoritesAPI,
        token_provider: Callable[[], str | None],
        settings: Settings | None = None,
    ):
        self._api = api_client
        self._token_provider = token_provider
        self.settings = settings or get_settings()

        self._member_ids: set[str] = set()
        self._listings: dict[str, Listing] = {}
        self._added_seq: dict[str, int] = {}
        self._pending: dict[str, ToggleDirection] = {}
        self._subscribers: list[Subscriber] = []

        self._seq = itertools.count()
        self._epoch = 0
        self._load_generation = 0

    # Queries

    @property
    def favorites(self) -> FavoriteSet:
        """Current favorites snapshot."""
        return FavoriteSet(frozenset(self._member_ids))

    def is_favorite(self, listing_id: str) -> bool:
        """Check if a listing is in favorites.

        Args:
            listing_id: Listing ID

        Returns:
            True if favorited, including an in-flight optimistic add
        """
        return listing_id in self._member_ids

    def is_pending(self, listing_id: str) -> bool:
        """Check if a toggle for the listing is in flight."""
        return listing_id in self._pending

    def state_of(self, listing_id: str) -> ListingState:
        """Get the favorite state of a listing."""
        direction = self._pending.get(listing_id)
        if direction is ToggleDirection.FAVORITE:
            return ListingState.TOGGLING_TO_FAVORITED
        if direction is ToggleDirection.UNFAVORITE:
            return ListingState.TOGGLING_TO_UNFAVORITED
        if listing_id in self._member_ids:
            return ListingState.FAVORITED
        return ListingState.UNFAVORITED

    def listings(self, sort: FavoritesSort = FavoritesSort.RECENTLY_ADDED) -> list[Listing]:
        """Get cached listings for the current favorites.

        Favorited ids without a cached listing are left out.

        Args:
            sort: Sort order

        Returns:
            Sorted list of listings
        """
        items = [
            self._listings[listing_id]
            for listing_id in self._member_ids
            if listing_id in self._listings
        ]

        if sort is FavoritesSort.PRICE_LOW_TO_HIGH:
            items.sort(key=lambda l: (l.rent_money is None, l.rent_money or 0.0))
        elif sort is FavoritesSort.PRICE_HIGH_TO_LOW:
            items.sort(key=lambda l: (l.rent_money is None, -(l.rent_money or 0.0)))
        elif sort is FavoritesSort.LOCATION:
            items.sort(key=lambda l: (l.location.casefold(), l.id))
        else:
            items.sort(key=lambda l: self._added_seq.get(l.id, -1), reverse=True)
        return items

    # Observers

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register a callback for state changes.

        Args:
            callback: Called with the new FavoriteSet after every change

        Returns:
            Function that removes the callback
        """
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _notify(self) -> None:
        snapshot = self.favorites
        for callback in list(self._subscribers):
            try:
                callback(snapshot)
            except Exception as e:
                logger.warning("favorites_subscriber_failed", error=str(e))

    # Load

    async def load(self) -> FavoriteSet:
        """Replace local favorites with the backend's collection.

        Returns:
            The new FavoriteSet

        Raises:
            FetchError: Load failed; local state is unchanged
        """
        token = self._token_provider()
        if not token:
            raise FetchError(AuthError("No session token", status_code=None))

        self._load_generation += 1
        generation = self._load_generation
        epoch = self._epoch

        try:
            payload = await self._fetch_with_retry(token)
        except FavoritesError as e:
            logger.warning(
                "favorites_load_failed",
                error_code=e.error_code,
                status_code=e.status_code,
            )
            raise FetchError(e) from e

        if epoch != self._epoch or generation != self._load_generation:
            logger.info("favorites_load_discarded", generation=generation)
            return self.favorites

        ordered_ids, listings = self._parse_payload(payload)

        # Keep snapshots that in-flight toggles may still need
        for listing_id in self._pending:
            if listing_id not in listings and listing_id in self._listings:
                listings[listing_id] = self._listings[listing_id]

        previous_seq = self._added_seq
        self._added_seq = {}
        for listing_id in ordered_ids:
            self._added_seq[listing_id] = next(self._seq)

        self._member_ids = set(ordered_ids)
        self._listings = listings

        for listing_id, direction in self._pending.items():
            if direction is ToggleDirection.FAVORITE:
                self._member_ids.add(listing_id)
                if listing_id in previous_seq:
                    self._added_seq[listing_id] = previous_seq[listing_id]
            else:
                self._member_ids.discard(listing_id)

        logger.info(
            "favorites_loaded",
            count=len(self._member_ids),
            pending=len(self._pending),
        )
        self._notify()
        return self.favorites

    async def _fetch_with_retry(self, token: str) -> list[Any]:
        """Fetch favorites, retrying transient network errors."""
        async for attempt in AsyncRetrying(
            retry=retry_if_exception_type(NetworkError),
            stop=stop_after_attempt(self.settings.load_retry_attempts),
            wait=wait_exponential(
                multiplier=self.settings.load_retry_min_wait,
                min=self.settings.load_retry_min_wait,
                max=self.settings.load_retry_max_wait,
            ),
            before_sleep=_log_retry,
            reraise=True,
        ):
            with attempt:
                payload = await self._api.get_favorites(token)
        return payload

    @staticmethod
    def _parse_payload(payload: list[Any]) -> tuple[list[str], dict[str, Listing]]:
        """Split a favorites payload into ordered ids and listing snapshots."""
        ordered_ids: list[str] = []
        seen: set[str] = set()
        listings: dict[str, Listing] = {}

        for item in payload:
            if isinstance(item, str) and item:
                listing_id = item
            elif isinstance(item, dict):
                try:
                    listing = Listing.from_payload(item)
                except ValidationError as e:
                    logger.warning("favorite_listing_skipped", error=str(e))
                    continue
                listing_id = listing.id
                listings[listing_id] = listing
            else:
                logger.warning("favorite_listing_skipped", item_type=type(item).__name__)
                continue

            if listing_id not in seen:
                seen.add(listing_id)
                ordered_ids.append(listing_id)

        return ordered_ids, listings

    # Toggle

    async def toggle(self, listing_id: str, listing: Listing | None = None) -> FavoriteSet:
        """Flip the favorite status of a listing.

        The local flip is visible immediately; the backend request follows.
        On failure the listing is restored to its previous status.

        Args:
            listing_id: Listing ID
            listing: Optional listing snapshot to show on the favorites page

        Returns:
            FavoriteSet after the change is committed

        Raises:
            PendingToggleError: A toggle for this listing is already in flight
            ToggleError: Backend request failed; the flip was rolled back
        """
        if listing_id in self._pending:
            direction = self._pending[listing_id]
            logger.info(
                "favorite_toggle_rejected",
                listing_id=listing_id,
                pending_direction=direction.value,
            )
            raise PendingToggleError(listing_id, direction)

        was_favorite = listing_id in self._member_ids
        direction = ToggleDirection.from_membership(was_favorite)

        token = self._token_provider()
        if not token:
            raise ToggleError(listing_id, direction, AuthError("No session token", status_code=None))

        if listing is not None:
            self._listings[listing_id] = listing

        epoch = self._epoch
        self._pending[listing_id] = direction
        if direction is ToggleDirection.FAVORITE:
            self._added_seq[listing_id] = next(self._seq)
        self._set_membership(listing_id, not was_favorite)
        self._notify()
        logger.debug("favorite_toggle_started", listing_id=listing_id, direction=direction.value)

        committed = False
        try:
            if direction is ToggleDirection.FAVORITE:
                await self._api.add_favorite(listing_id, token)
            else:
                await self._api.remove_favorite(listing_id, token)
            committed = True
        except FavoritesError as e:
            logger.warning(
                "favorite_toggle_rolled_back",
                listing_id=listing_id,
                direction=direction.value,
                error_code=e.error_code,
                status_code=e.status_code,
            )
            raise ToggleError(listing_id, direction, e) from e
        finally:
            # A reset() in the meantime owns the state now
            if epoch == self._epoch:
                self._pending.pop(listing_id, None)
                if not committed:
                    self._set_membership(listing_id, was_favorite)
                self._notify()

        logger.info("favorite_toggle_committed", listing_id=listing_id, direction=direction.value)
        return self.favorites

    async def remove(self, listing_id: str) -> FavoriteSet:
        """Remove a listing from favorites.

        No-op if the listing is not favorited.
        """
        if listing_id not in self._member_ids and listing_id not in self._pending:
            return self.favorites
        return await self.toggle(listing_id)

    def _set_membership(self, listing_id: str, favorite: bool) -> None:
        if favorite:
            if listing_id not in self._member_ids:
                self._member_ids.add(listing_id)
                self._added_seq.setdefault(listing_id, next(self._seq))
        else:
            self._member_ids.discard(listing_id)

    # Lifecycle

    def reset(self) -> None:
        """Discard all local state.

        Loads and toggles still in flight resolve without touching it.
        """
        self._epoch += 1
        self._member_ids = set()
        self._listings = {}
        self._added_seq = {}
        self._pending = {}
        logger.debug("favorites_reset", epoch=self._epoch)
        self._notify()


def _log_retry(retry_state: RetryCallState) -> None:
    error = retry_state.outcome.exception() if retry_state.outcome else None
    logger.warning(
        "favorites_load_retry",
        attempt=retry_state.attempt_number,
        error=str(error),
    )
