"""In-process store keeping bookmarks and lists in insertion-ordered dicts."""
import asyncio
import itertools
import logging

from schemas.bookmark import BookmarkCreate, BookmarkResponse, BookmarkUpdate
from schemas.bookmark_list import (
    BookmarkListCreate,
    BookmarkListResponse,
    BookmarkListUpdate,
)
from services.store import Store, check_bookmark_ids_exist

logger = logging.getLogger(__name__)


class InMemoryStore(Store):
    """
    Store backed by plain dicts.

    All mutations run under one asyncio.Lock, so deleting a bookmark and
    scrubbing it from every list is a single critical section. Records are
    copied on the way in and out; callers never hold a reference to the
    stored objects.
    """

    def __init__(self) -> None:
        self._bookmarks: dict[int, BookmarkResponse] = {}
        self._lists: dict[int, BookmarkListResponse] = {}
        self._bookmark_ids = itertools.count(1)
        self._list_ids = itertools.count(1)
        self._lock = asyncio.Lock()

    # --- Bookmarks ---

    async def list_bookmarks(self) -> list[BookmarkResponse]:
        return [bookmark.model_copy() for bookmark in self._bookmarks.values()]

    async def get_bookmark(self, bookmark_id: int) -> BookmarkResponse | None:
        bookmark = self._bookmarks.get(bookmark_id)
        return bookmark.model_copy() if bookmark is not None else None

    async def create_bookmark(self, data: BookmarkCreate) -> BookmarkResponse:
        async with self._lock:
            bookmark = BookmarkResponse(id=next(self._bookmark_ids), **data.model_dump())
            self._bookmarks[bookmark.id] = bookmark
        return bookmark.model_copy()

    async def update_bookmark(
        self,
        bookmark_id: int,
        data: BookmarkUpdate,
    ) -> BookmarkResponse | None:
        async with self._lock:
            bookmark = self._bookmarks.get(bookmark_id)
            if bookmark is None:
                return None
            updated = bookmark.model_copy(update=data.model_dump(exclude_unset=True))
            self._bookmarks[bookmark_id] = updated
        return updated.model_copy()

    async def delete_bookmark(self, bookmark_id: int) -> bool:
        async with self._lock:
            if self._bookmarks.pop(bookmark_id, None) is None:
                return False
            for bookmark_list in self._lists.values():
                if bookmark_id in bookmark_list.bookmark_ids:
                    bookmark_list.bookmark_ids = [
                        bid for bid in bookmark_list.bookmark_ids if bid != bookmark_id
                    ]
                    logger.debug(
                        "Removed bookmark %s from list %s", bookmark_id, bookmark_list.id,
                    )
        return True

    # --- Lists ---

    async def list_lists(self) -> list[BookmarkListResponse]:
        return [bookmark_list.model_copy(deep=True) for bookmark_list in self._lists.values()]

    async def get_list(self, list_id: int) -> BookmarkListResponse | None:
        bookmark_list = self._lists.get(list_id)
        return bookmark_list.model_copy(deep=True) if bookmark_list is not None else None

    async def create_list(self, data: BookmarkListCreate) -> BookmarkListResponse:
        async with self._lock:
            check_bookmark_ids_exist(data.bookmark_ids, set(self._bookmarks))
            bookmark_list = BookmarkListResponse(
                id=next(self._list_ids),
                name=data.name,
                bookmark_ids=list(data.bookmark_ids),
            )
            self._lists[bookmark_list.id] = bookmark_list
        return bookmark_list.model_copy(deep=True)

    async def update_list(
        self,
        list_id: int,
        data: BookmarkListUpdate,
    ) -> BookmarkListResponse | None:
        async with self._lock:
            bookmark_list = self._lists.get(list_id)
            if bookmark_list is None:
                return None
            update_data = data.model_dump(exclude_unset=True)
            if update_data.get("bookmark_ids") is not None:
                check_bookmark_ids_exist(update_data["bookmark_ids"], set(self._bookmarks))
            updated = bookmark_list.model_copy(update=update_data, deep=True)
            self._lists[list_id] = updated
        return updated.model_copy(deep=True)

    async def delete_list(self, list_id: int) -> bool:
        async with self._lock:
            return self._lists.pop(list_id, None) is not None
