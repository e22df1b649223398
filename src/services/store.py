"""
Store interfaces for bookmarks and bookmark lists.

Handlers depend on these abstract classes only. One concrete store object is
created per process by the application lifespan and implements both
interfaces, so deleting a bookmark and removing it from every list can happen
in a single critical section (in-memory) or transaction (database).

Implementations:
- services.memory_store.InMemoryStore
- services.sql_store.SqlStore
"""
from abc import ABC, abstractmethod

from schemas.bookmark import BookmarkCreate, BookmarkResponse, BookmarkUpdate
from schemas.bookmark_list import (
    BookmarkListCreate,
    BookmarkListResponse,
    BookmarkListUpdate,
)
from services.exceptions import ValidationError


def check_bookmark_ids_exist(bookmark_ids: list[int], existing_ids: set[int]) -> None:
    """
    Raise if a list would reference a bookmark that does not exist.

    Raises:
        ValidationError: Naming the first unknown id.
    """
    for bookmark_id in bookmark_ids:
        if bookmark_id not in existing_ids:
            raise ValidationError(
                f"'bookmarkIds' contains unknown bookmark id {bookmark_id}",
            )


class BookmarkStore(ABC):
    """
    CRUD operations over bookmark records.

    Lookups return None (and deletes return False) for unknown ids; turning
    that into a 404 is the caller's job.
    """

    @abstractmethod
    async def list_bookmarks(self) -> list[BookmarkResponse]:
        """Return all bookmarks in insertion order."""

    @abstractmethod
    async def get_bookmark(self, bookmark_id: int) -> BookmarkResponse | None:
        """Return a bookmark by id, or None if not found."""

    @abstractmethod
    async def create_bookmark(self, data: BookmarkCreate) -> BookmarkResponse:
        """Store a new bookmark under a freshly generated id."""

    @abstractmethod
    async def update_bookmark(
        self,
        bookmark_id: int,
        data: BookmarkUpdate,
    ) -> BookmarkResponse | None:
        """Apply the supplied fields to a bookmark. Returns None if not found."""

    @abstractmethod
    async def delete_bookmark(self, bookmark_id: int) -> bool:
        """
        Delete a bookmark and remove its id from every list.

        Returns True if deleted, False if not found.
        """


class ListStore(ABC):
    """CRUD operations over bookmark lists."""

    @abstractmethod
    async def list_lists(self) -> list[BookmarkListResponse]:
        """Return all lists in insertion order."""

    @abstractmethod
    async def get_list(self, list_id: int) -> BookmarkListResponse | None:
        """Return a list by id, or None if not found."""

    @abstractmethod
    async def create_list(self, data: BookmarkListCreate) -> BookmarkListResponse:
        """
        Store a new list.

        Raises:
            ValidationError: If bookmark_ids references an unknown bookmark.
        """

    @abstractmethod
    async def update_list(
        self,
        list_id: int,
        data: BookmarkListUpdate,
    ) -> BookmarkListResponse | None:
        """
        Apply the supplied fields to a list. Returns None if not found.

        Raises:
            ValidationError: If bookmark_ids references an unknown bookmark.
        """

    @abstractmethod
    async def delete_list(self, list_id: int) -> bool:
        """Delete a list. Returns True if deleted, False if not found."""


class Store(BookmarkStore, ListStore):
    """A bookmark store and list store sharing one lifecycle."""

    async def startup(self) -> None:  # noqa: B027
        """Acquire resources. Called once by the application lifespan."""

    async def shutdown(self) -> None:  # noqa: B027
        """Release resources. Called once by the application lifespan."""

    async def ping(self) -> bool:
        """Return True if the store can serve requests."""
        return True
