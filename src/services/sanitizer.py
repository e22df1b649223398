"""
Sanitization of user-supplied bookmark and list text before it is returned to a client.

Titles and list names are plain text: HTML special characters are escaped. Descriptions may
carry a small amount of formatting markup, so they are cleaned against an
allow-list with bleach; anything outside it (event-handler attributes,
<script>, comments) is stripped while benign tags such as <strong> survive.

Both functions are idempotent: sanitizing sanitized output changes nothing.
"""
import html

from bleach.sanitizer import Cleaner

from schemas.bookmark import BookmarkResponse
from schemas.bookmark_list import BookmarkListResponse

ALLOWED_DESCRIPTION_TAGS = frozenset({
    "a", "abbr", "acronym", "b", "blockquote", "br", "code", "em", "i",
    "img", "li", "ol", "p", "pre", "span", "strong", "ul",
})

ALLOWED_DESCRIPTION_ATTRIBUTES = {
    "a": ["href", "title", "rel"],
    "abbr": ["title"],
    "acronym": ["title"],
    "img": ["src", "alt", "title", "width", "height"],
}

ALLOWED_DESCRIPTION_PROTOCOLS = ["http", "https", "mailto"]

_description_cleaner = Cleaner(
    tags=ALLOWED_DESCRIPTION_TAGS,
    attributes=ALLOWED_DESCRIPTION_ATTRIBUTES,
    protocols=ALLOWED_DESCRIPTION_PROTOCOLS,
    strip=True,
    strip_comments=True,
)


def sanitize_title(title: str) -> str:
    """
    Escape &, < and > in a title.

    Existing entities are decoded first so an already-escaped title is not
    escaped twice. Quotes are left as-is since titles are rendered as text
    content, not attribute values.
    """
    if not title:
        return title
    return html.escape(html.unescape(title), quote=False)


def sanitize_description(description: str) -> str:
    """Strip disallowed tags and attributes from a description, keeping benign markup."""
    if not description:
        return description
    return _description_cleaner.clean(description)


def sanitize_bookmark(bookmark: BookmarkResponse) -> BookmarkResponse:
    """Return a copy of the bookmark with title and description sanitized."""
    return bookmark.model_copy(
        update={
            "title": sanitize_title(bookmark.title),
            "description": sanitize_description(bookmark.description),
        },
    )


def sanitize_bookmark_list(bookmark_list: BookmarkListResponse) -> BookmarkListResponse:
    """Return a copy of the list with its name escaped like a title."""
    return bookmark_list.model_copy(update={"name": sanitize_title(bookmark_list.name)})
