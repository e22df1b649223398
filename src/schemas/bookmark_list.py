"""Pydantic schemas for bookmark list endpoints."""
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from schemas.validators import validate_list_fields


class BookmarkListCreate(BaseModel):
    """Schema for creating a new bookmark list."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    name: str
    bookmark_ids: list[int] = Field(default_factory=list, alias="bookmarkIds")

    @model_validator(mode="before")
    @classmethod
    def check_fields(cls, data: Any) -> Any:
        """Validate name and bookmark ids."""
        return validate_list_fields(data, partial=False)


class BookmarkListUpdate(BaseModel):
    """Schema for updating a bookmark list. bookmarkIds replaces the whole sequence."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    name: str | None = None
    bookmark_ids: list[int] | None = Field(default=None, alias="bookmarkIds")

    @model_validator(mode="before")
    @classmethod
    def check_fields(cls, data: Any) -> Any:
        """Validate only the fields present; at least one is required."""
        return validate_list_fields(data, partial=True)


class BookmarkListResponse(BaseModel):
    """
    Schema for bookmark list responses and store records.

    Serialized with ``bookmarkIds`` (by alias), the ordered bookmark references.
    """

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    name: str
    bookmark_ids: list[int] = Field(default_factory=list, alias="bookmarkIds")
