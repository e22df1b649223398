"""
Shared validation functions for Pydantic schemas.

Bookmark and list payloads are checked field by field in a fixed order and the
first failing rule raises ``services.exceptions.ValidationError`` with a message
naming the field. The schemas call these from ``mode="before"`` model
validators; since ValidationError is not a ValueError, Pydantic lets it
propagate untouched and the API layer turns it into a 400 response.
"""
from typing import Any

from pydantic import HttpUrl, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from core.config import get_settings
from services.exceptions import ValidationError

BOOKMARK_FIELDS = ("title", "url", "description", "rating")
LIST_FIELDS = ("name", "bookmarkIds")

MIN_RATING = 0
MAX_RATING = 5
MAX_LIST_NAME_LENGTH = 100

MISSING_BOOKMARK_FIELDS_MESSAGE = "Request body must contain either " + ", ".join(
    f"'{field}'" for field in BOOKMARK_FIELDS
)
MISSING_LIST_FIELDS_MESSAGE = "Request body must contain either " + ", ".join(
    f"'{field}'" for field in LIST_FIELDS
)

_http_url_adapter = TypeAdapter(HttpUrl)


def validate_title(title: Any) -> str:
    """Validate that title is a non-empty string within the configured length."""
    if not isinstance(title, str) or not title.strip():
        raise ValidationError("'title' is required")
    settings = get_settings()
    if len(title) > settings.max_title_length:
        raise ValidationError(
            f"'title' must be at most {settings.max_title_length} characters",
        )
    return title


def validate_url(url: Any) -> str:
    """
    Validate that url is an absolute http(s) URL.

    The caller's spelling is kept; HttpUrl is only used to parse it, so
    'https://example.com' is not rewritten to 'https://example.com/'.
    """
    if not isinstance(url, str) or not url.strip():
        raise ValidationError("'url' is required")
    url = url.strip()
    try:
        _http_url_adapter.validate_python(url)
    except PydanticValidationError:
        raise ValidationError("'url' must be a valid URL") from None
    return url


def validate_description(description: Any) -> str:
    """Validate description; None is treated as an empty description."""
    if description is None:
        return ""
    if not isinstance(description, str):
        raise ValidationError("'description' must be a string")
    settings = get_settings()
    if len(description) > settings.max_description_length:
        raise ValidationError(
            f"'description' must be at most {settings.max_description_length} characters",
        )
    return description


def validate_rating(rating: Any) -> int:
    """
    Validate rating is an integer between 0 and 5 inclusive.

    Integral strings ("3") and floats (3.0) are coerced. Booleans are rejected
    even though bool is an int subclass.
    """
    if rating is None:
        raise ValidationError("'rating' is required")
    invalid = ValidationError(
        f"'rating' must be a number between {MIN_RATING} and {MAX_RATING}",
    )
    if isinstance(rating, bool):
        raise invalid
    if isinstance(rating, str):
        try:
            rating = int(rating.strip())
        except ValueError:
            raise invalid from None
    elif isinstance(rating, float):
        if not rating.is_integer():
            raise invalid
        rating = int(rating)
    if not isinstance(rating, int) or not MIN_RATING <= rating <= MAX_RATING:
        raise invalid
    return rating


_BOOKMARK_VALIDATORS = {
    "title": validate_title,
    "url": validate_url,
    "description": validate_description,
    "rating": validate_rating,
}


def validate_bookmark_fields(data: Any, *, partial: bool = False) -> dict[str, Any]:
    """
    Validate a bookmark payload and return only the recognized, cleaned fields.

    Args:
        data: The decoded request body.
        partial: When True (PATCH), only the fields present are validated and at
            least one recognized field is required. When False (POST), title,
            url and rating are required and description defaults to "".

    Raises:
        ValidationError: On the first failing rule, in the order
            title, url, description, rating.
    """
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")

    if partial and not any(field in data for field in BOOKMARK_FIELDS):
        raise ValidationError(MISSING_BOOKMARK_FIELDS_MESSAGE)

    cleaned: dict[str, Any] = {}
    for field in BOOKMARK_FIELDS:
        if partial and field not in data:
            continue
        cleaned[field] = _BOOKMARK_VALIDATORS[field](data.get(field))
    return cleaned


def validate_list_name(name: Any) -> str:
    """Validate list name is a non-empty string of at most 100 characters."""
    if not isinstance(name, str) or not name.strip():
        raise ValidationError("'name' is required")
    name = name.strip()
    if len(name) > MAX_LIST_NAME_LENGTH:
        raise ValidationError(
            f"'name' must be at most {MAX_LIST_NAME_LENGTH} characters",
        )
    return name


def validate_bookmark_ids(bookmark_ids: Any) -> list[int]:
    """
    Validate a list of bookmark ids.

    Returns:
        The ids with duplicates removed (preserving first occurrence order).
    """
    if bookmark_ids is None:
        return []
    if not isinstance(bookmark_ids, list) or any(
        isinstance(bid, bool) or not isinstance(bid, int) for bid in bookmark_ids
    ):
        raise ValidationError("'bookmarkIds' must be a list of bookmark ids")
    return list(dict.fromkeys(bookmark_ids))


def validate_list_fields(data: Any, *, partial: bool = False) -> dict[str, Any]:
    """
    Validate a list payload, returning cleaned fields keyed by attribute name.

    Accepts both the wire name ``bookmarkIds`` and the attribute name
    ``bookmark_ids`` so schemas can be built from JSON or from Python.
    """
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")

    ids_key = "bookmarkIds" if "bookmarkIds" in data else "bookmark_ids"
    has_ids = ids_key in data
    if partial and "name" not in data and not has_ids:
        raise ValidationError(MISSING_LIST_FIELDS_MESSAGE)

    cleaned: dict[str, Any] = {}
    if not partial or "name" in data:
        cleaned["name"] = validate_list_name(data.get("name"))
    if not partial or has_ids:
        cleaned["bookmark_ids"] = validate_bookmark_ids(data.get(ids_key))
    return cleaned
