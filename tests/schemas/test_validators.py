"""Tests for bookmark and list payload validation."""
import pytest

from schemas.bookmark import BookmarkCreate, BookmarkUpdate
from schemas.bookmark_list import BookmarkListCreate, BookmarkListUpdate
from schemas.validators import (
    validate_bookmark_fields,
    validate_bookmark_ids,
    validate_rating,
    validate_title,
    validate_url,
)
from services.exceptions import ValidationError

VALID = {
    "title": "Example",
    "url": "https://example.com",
    "description": "An example",
    "rating": 4,
}


class TestValidateBookmarkFields:
    """Tests for the ordered bookmark rules."""

    def test_valid_payload_returns_recognized_fields_only(self) -> None:
        result = validate_bookmark_fields({**VALID, "id": 12, "extra": "x"})
        assert result == VALID

    def test_description_defaults_to_empty(self) -> None:
        payload = {k: v for k, v in VALID.items() if k != "description"}
        assert validate_bookmark_fields(payload)["description"] == ""

    @pytest.mark.parametrize(
        ("field", "message"),
        [
            ("title", "'title' is required"),
            ("url", "'url' is required"),
            ("rating", "'rating' is required"),
        ],
    )
    def test_missing_required_field(self, field: str, message: str) -> None:
        payload = {k: v for k, v in VALID.items() if k != field}
        with pytest.raises(ValidationError, match=message):
            validate_bookmark_fields(payload)

    def test_rules_run_in_order(self) -> None:
        """url is reported before rating when both are bad."""
        with pytest.raises(ValidationError) as exc_info:
            validate_bookmark_fields({"title": "t", "url": "bad", "rating": "bad"})
        assert exc_info.value.message == "'url' must be a valid URL"

    def test_partial_requires_one_recognized_field(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            validate_bookmark_fields({"irrelevantField": "foo"}, partial=True)
        assert exc_info.value.message == (
            "Request body must contain either 'title', 'url', 'description', 'rating'"
        )

    def test_partial_validates_only_present_fields(self) -> None:
        assert validate_bookmark_fields({"rating": "2"}, partial=True) == {"rating": 2}

    def test_partial_still_rejects_bad_values(self) -> None:
        with pytest.raises(ValidationError, match="'title' is required"):
            validate_bookmark_fields({"title": ""}, partial=True)

    @pytest.mark.parametrize("body", [None, [], "title", 3])
    def test_non_object_body(self, body: object) -> None:
        with pytest.raises(ValidationError, match="Request body must be a JSON object"):
            validate_bookmark_fields(body)


class TestFieldRules:
    """Tests for individual field validators."""

    @pytest.mark.parametrize("title", ["", "   ", None, 42])
    def test_title_required(self, title: object) -> None:
        with pytest.raises(ValidationError, match="'title' is required"):
            validate_title(title)

    def test_title_length_limit(self) -> None:
        with pytest.raises(ValidationError, match="'title' must be at most 500 characters"):
            validate_title("x" * 501)

    def test_title_length_limit_from_settings(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MAX_TITLE_LENGTH", "10")
        with pytest.raises(ValidationError, match="at most 10 characters"):
            validate_title("x" * 11)

    @pytest.mark.parametrize(
        "url",
        ["https://example.com", "http://localhost:8000/path?q=1", "https://sub.example.org/a#b"],
    )
    def test_url_valid(self, url: str) -> None:
        assert validate_url(url) == url

    def test_url_keeps_caller_spelling(self) -> None:
        """No trailing slash is added to a bare domain."""
        assert validate_url("  https://example.com  ") == "https://example.com"

    @pytest.mark.parametrize("url", ["htp://invalid-url", "example.com", "https://", "mailto:a@b.c"])
    def test_url_invalid(self, url: str) -> None:
        with pytest.raises(ValidationError, match="'url' must be a valid URL"):
            validate_url(url)

    @pytest.mark.parametrize(("rating", "expected"), [(0, 0), (5, 5), ("3", 3), (" 1 ", 1), (4.0, 4)])
    def test_rating_valid(self, rating: object, expected: int) -> None:
        assert validate_rating(rating) == expected

    @pytest.mark.parametrize("rating", [-1, 6, "six", "", 2.5, True, False, {}, "3.5"])
    def test_rating_invalid(self, rating: object) -> None:
        with pytest.raises(
            ValidationError, match="'rating' must be a number between 0 and 5",
        ):
            validate_rating(rating)

    def test_description_must_be_string(self) -> None:
        with pytest.raises(ValidationError, match="'description' must be a string"):
            validate_bookmark_fields({**VALID, "description": 12})

    def test_description_length_limit(self) -> None:
        with pytest.raises(ValidationError, match="at most 2000 characters"):
            validate_bookmark_fields({**VALID, "description": "d" * 2001})


class TestBookmarkSchemas:
    """The Pydantic schemas run the same rules."""

    def test_create_schema(self) -> None:
        data = BookmarkCreate(**{**VALID, "rating": "5"})
        assert data.rating == 5
        assert data.url == "https://example.com"

    def test_create_schema_raises_field_error(self) -> None:
        with pytest.raises(ValidationError, match="'rating' is required"):
            BookmarkCreate(title="t", url="https://example.com")

    def test_update_schema_tracks_supplied_fields(self) -> None:
        data = BookmarkUpdate(title="New")
        assert data.model_dump(exclude_unset=True) == {"title": "New"}

    def test_update_schema_requires_a_field(self) -> None:
        with pytest.raises(ValidationError, match="Request body must contain either"):
            BookmarkUpdate()


class TestListSchemas:
    """Tests for list payload validation."""

    def test_ids_deduplicated_in_order(self) -> None:
        assert validate_bookmark_ids([3, 1, 3, 2, 1]) == [3, 1, 2]

    def test_ids_reject_booleans(self) -> None:
        with pytest.raises(ValidationError, match="'bookmarkIds' must be a list"):
            validate_bookmark_ids([True])

    def test_create_accepts_wire_and_attribute_names(self) -> None:
        assert BookmarkListCreate(name="a", bookmarkIds=[1]).bookmark_ids == [1]
        assert BookmarkListCreate(name="a", bookmark_ids=[2]).bookmark_ids == [2]

    def test_create_strips_name(self) -> None:
        assert BookmarkListCreate(name="  Reading  ").name == "Reading"

    def test_update_tracks_supplied_fields(self) -> None:
        data = BookmarkListUpdate(bookmarkIds=[1, 2])
        assert data.model_dump(exclude_unset=True) == {"bookmark_ids": [1, 2]}

    def test_update_requires_a_field(self) -> None:
        with pytest.raises(ValidationError, match="'name', 'bookmarkIds'"):
            BookmarkListUpdate(other=1)
