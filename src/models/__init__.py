"""SQLAlchemy models."""
from models.base import Base, TimestampMixin
from models.bookmark import Bookmark
from models.bookmark_list import BookmarkList, BookmarkListItem

__all__ = [
    "Base",
    "Bookmark",
    "BookmarkList",
    "BookmarkListItem",
    "TimestampMixin",
]
