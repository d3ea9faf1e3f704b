"""Error types for favorites state and the rental API client."""

from typing import Any

from rental_frontend.models.enums import ToggleDirection


class FavoritesError(Exception):
    """Base favorites error."""

    def __init__(
        self,
        message: str,
        error_code: str = "FAVORITES_ERROR",
        status_code: int | None = None,
        details: dict | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Format error payload for display."""
        payload: dict[str, Any] = {
            "code": self.error_code,
            "message": self.message,
        }
        if self.status_code is not None:
            payload["status_code"] = self.status_code
        if self.details:
            payload["details"] = self.details
        return {"error": payload}


# Remote failures


class AuthError(FavoritesError):
    """Missing or expired session token."""

    def __init__(self, message: str = "Not authenticated", status_code: int | None = 401):
        super().__init__(
            message=message,
            error_code="AUTH_ERROR",
            status_code=status_code,
        )


class NotFoundError(FavoritesError):
    """Listing vanished on the server."""

    def __init__(self, listing_id: str | None = None):
        message = "Listing not found"
        if listing_id:
            message = f"Listing '{listing_id}' not found"
        super().__init__(
            message=message,
            error_code="NOT_FOUND",
            status_code=404,
            details={"listing_id": listing_id} if listing_id else None,
        )


class NetworkError(FavoritesError):
    """Transient connectivity or server failure."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(
            message=message,
            error_code="NETWORK_ERROR",
            status_code=status_code,
        )


# Operation failures


class FetchError(FavoritesError):
    """Loading the favorites collection failed."""

    def __init__(self, cause: FavoritesError):
        super().__init__(
            message=f"Failed to load favorites: {cause.message}",
            error_code="FETCH_FAILED",
            status_code=cause.status_code,
            details={"cause": cause.error_code},
        )
        self.cause = cause
        self.__cause__ = cause


class ToggleError(FavoritesError):
    """A favorite toggle failed and was rolled back."""

    def __init__(
        self,
        listing_id: str,
        direction: ToggleDirection,
        cause: FavoritesError,
    ):
        super().__init__(
            message=f"Failed to {direction.value} listing '{listing_id}': {cause.message}",
            error_code="TOGGLE_FAILED",
            status_code=cause.status_code,
            details={
                "listing_id": listing_id,
                "direction": direction.value,
                "cause": cause.error_code,
            },
        )
        self.listing_id = listing_id
        self.direction = direction
        self.cause = cause
        self.__cause__ = cause


class PendingToggleError(ToggleError):
    """A toggle for the listing is already in flight."""

    def __init__(self, listing_id: str, direction: ToggleDirection):
        FavoritesError.__init__(
            self,
            message=f"A favorite change for listing '{listing_id}' is still pending",
            error_code="TOGGLE_PENDING",
            details={"listing_id": listing_id, "direction": direction.value},
        )
        self.listing_id = listing_id
        self.direction = direction
        self.cause = None
