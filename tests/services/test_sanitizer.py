"""Tests for title and description sanitization."""
import pytest

from schemas.bookmark import BookmarkResponse
from schemas.bookmark_list import BookmarkListResponse
from services.sanitizer import (
    sanitize_bookmark,
    sanitize_bookmark_list,
    sanitize_description,
    sanitize_title,
)


class TestSanitizeTitle:
    """Titles are plain text."""

    def test_escapes_markup(self) -> None:
        assert sanitize_title("<b>bold</b>") == "&lt;b&gt;bold&lt;/b&gt;"

    def test_escapes_ampersand_once(self) -> None:
        assert sanitize_title("Tom & Jerry") == "Tom &amp; Jerry"
        assert sanitize_title("Tom &amp; Jerry") == "Tom &amp; Jerry"

    def test_leaves_quotes(self) -> None:
        assert sanitize_title('Say "hi"') == 'Say "hi"'

    @pytest.mark.parametrize(
        "title",
        ["plain", "<script>alert(1)</script>", "a < b & c > d", "&lt;already&gt;"],
    )
    def test_idempotent(self, title: str) -> None:
        once = sanitize_title(title)
        assert sanitize_title(once) == once

    def test_empty(self) -> None:
        assert sanitize_title("") == ""


class TestSanitizeDescription:
    """Descriptions keep benign markup only."""

    def test_keeps_allowed_tags(self) -> None:
        text = "<p>Read <strong>this</strong> and <em>that</em></p>"
        assert sanitize_description(text) == text

    def test_strips_event_handlers(self) -> None:
        result = sanitize_description('<img src="https://example.com/a.png" onerror="alert(1)">')
        assert result == '<img src="https://example.com/a.png">'

    def test_strips_script_tags(self) -> None:
        result = sanitize_description("before<script>alert(1)</script>after")
        assert "<script" not in result
        assert result.startswith("before")
        assert result.endswith("after")

    def test_drops_javascript_links(self) -> None:
        result = sanitize_description('<a href="javascript:alert(1)">click</a>')
        assert "javascript" not in result
        assert "click" in result

    def test_keeps_http_links(self) -> None:
        text = '<a href="https://example.com">site</a>'
        assert sanitize_description(text) == text

    def test_strips_comments(self) -> None:
        assert sanitize_description("a<!-- hidden -->b") == "ab"

    @pytest.mark.parametrize(
        "description",
        [
            "Fish & chips",
            "<div onclick=\"x()\">box</div>",
            '<img src="https://example.com/a.png" onerror="alert(1)">',
            "<strong>ok</strong> <iframe src=\"https://evil\"></iframe>",
        ],
    )
    def test_idempotent(self, description: str) -> None:
        once = sanitize_description(description)
        assert sanitize_description(once) == once


def test_sanitize_bookmark_returns_copy() -> None:
    """The stored record is not modified."""
    bookmark = BookmarkResponse(
        id=1,
        title="<i>t</i>",
        url="https://example.com",
        description="<p onclick=\"x\">d</p>",
        rating=3,
    )

    result = sanitize_bookmark(bookmark)

    assert result.title == "&lt;i&gt;t&lt;/i&gt;"
    assert result.description == "<p>d</p>"
    assert result.url == bookmark.url
    assert result.rating == 3
    assert bookmark.title == "<i>t</i>"


def test_sanitize_bookmark_list_escapes_name() -> None:
    bookmark_list = BookmarkListResponse(id=1, name="<i>Mine</i>", bookmark_ids=[2, 3])

    result = sanitize_bookmark_list(bookmark_list)

    assert result.name == "&lt;i&gt;Mine&lt;/i&gt;"
    assert result.bookmark_ids == [2, 3]
    assert bookmark_list.name == "<i>Mine</i>"
