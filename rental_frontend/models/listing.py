"""Listing model - read-only client copy of a remote listing."""

from datetime import datetime
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class Listing(BaseModel):
    """A rental listing as returned by the backend.

    Only the identifier matters to favorites state; the display fields are
    kept for the favorites page.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    id: str = Field(validation_alias=AliasChoices("_id", "id"))
    location: str = ""
    address: str = ""
    rent_money: float | None = Field(
        default=None,
        validation_alias=AliasChoices("rentMoney", "rent_money"),
    )
    bedrooms: int | None = None
    bathrooms: float | None = None
    area: float | None = None
    images: list[str] = Field(default_factory=list)
    contact_details: str | None = Field(
        default=None,
        validation_alias=AliasChoices("contactDetails", "contact_details"),
    )
    created_at: datetime | None = Field(
        default=None,
        validation_alias=AliasChoices("createdAt", "created_at"),
    )

    @field_validator("id", mode="before")
    @classmethod
    def _require_id(cls, value: Any) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValueError("listing id must be a non-empty string")
        return str(value)

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "Listing":
        """Validate a backend listing object."""
        return cls.model_validate(payload)

    def image_url(self, files_url: str) -> str | None:
        """URL of the first image, or None if the listing has no images."""
        if not self.images:
            return None
        return f"{files_url.rstrip('/')}/{self.images[0]}"
