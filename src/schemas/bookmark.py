"""Pydantic schemas for bookmark endpoints."""
from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator

from schemas.validators import validate_bookmark_fields


class BookmarkCreate(BaseModel):
    """
    Schema for creating a new bookmark.

    title, url and rating are required; description defaults to "".
    Unknown fields (including a client-supplied id) are ignored.
    """

    model_config = ConfigDict(extra="ignore")

    title: str
    url: str
    description: str = ""
    rating: int

    @model_validator(mode="before")
    @classmethod
    def check_fields(cls, data: Any) -> Any:
        """Run the ordered field rules before Pydantic's own type checks."""
        return validate_bookmark_fields(data, partial=False)


class BookmarkUpdate(BaseModel):
    """
    Schema for partially updating a bookmark.

    Only supplied fields are set, so use ``model_dump(exclude_unset=True)``
    to get the changes.
    """

    model_config = ConfigDict(extra="ignore")

    title: str | None = None
    url: str | None = None
    description: str | None = None
    rating: int | None = None

    @model_validator(mode="before")
    @classmethod
    def check_fields(cls, data: Any) -> Any:
        """Validate only the fields present; at least one is required."""
        return validate_bookmark_fields(data, partial=True)


class BookmarkResponse(BaseModel):
    """Schema for bookmark responses and store records."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    url: str
    description: str
    rating: int
