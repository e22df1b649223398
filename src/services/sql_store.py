"""Relational store backed by SQLAlchemy's async ORM."""
import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from sqlalchemy import delete, select, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from db.session import create_session_factory
from models.base import Base
from models.bookmark import Bookmark
from models.bookmark_list import BookmarkList, BookmarkListItem
from schemas.bookmark import BookmarkCreate, BookmarkResponse, BookmarkUpdate
from schemas.bookmark_list import (
    BookmarkListCreate,
    BookmarkListResponse,
    BookmarkListUpdate,
)
from services.exceptions import StoreError
from services.store import Store, check_bookmark_ids_exist

logger = logging.getLogger(__name__)

# Primary keys are 32-bit INTEGER columns; larger ids can't exist in the table.
MAX_ID = 2**31 - 1


def _storable_id(record_id: int) -> bool:
    return 0 < record_id <= MAX_ID


def _to_list_response(bookmark_list: BookmarkList) -> BookmarkListResponse:
    return BookmarkListResponse(
        id=bookmark_list.id,
        name=bookmark_list.name,
        bookmark_ids=bookmark_list.bookmark_ids,
    )


class SqlStore(Store):
    """
    Store backed by a relational database.

    Every operation runs in its own session and transaction: commit on success,
    rollback on any error. Deleting a bookmark removes its list references in
    the same transaction, so either both happen or neither does.
    """

    def __init__(self, engine: AsyncEngine, *, create_schema: bool = True) -> None:
        self._engine = engine
        self._session_factory = create_session_factory(engine)
        self._create_schema = create_schema

    async def startup(self) -> None:
        """Create tables if they don't exist yet."""
        if not self._create_schema:
            return
        try:
            async with self._engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except SQLAlchemyError as e:
            logger.exception("Failed to create database schema")
            raise StoreError("Failed to create database schema") from e

    async def shutdown(self) -> None:
        await self._engine.dispose()

    async def ping(self) -> bool:
        try:
            async with self._engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except SQLAlchemyError:
            logger.exception("Database health check failed")
            return False
        return True

    @asynccontextmanager
    async def _transaction(self) -> AsyncGenerator[AsyncSession]:
        """
        Yield a session wrapped in a transaction.

        Database errors are logged and re-raised as StoreError; anything else
        (e.g. ValidationError) rolls back and propagates unchanged.
        """
        async with self._session_factory() as session:
            try:
                yield session
                await session.commit()
            except SQLAlchemyError as e:
                await session.rollback()
                logger.exception("Database operation failed")
                raise StoreError from e
            except Exception:
                await session.rollback()
                raise

    async def _existing_bookmark_ids(
        self,
        session: AsyncSession,
        bookmark_ids: list[int],
    ) -> set[int]:
        candidates = [bid for bid in bookmark_ids if _storable_id(bid)]
        if not candidates:
            return set()
        result = await session.execute(
            select(Bookmark.id).where(Bookmark.id.in_(candidates)),
        )
        return set(result.scalars().all())

    # --- Bookmarks ---

    async def list_bookmarks(self) -> list[BookmarkResponse]:
        async with self._transaction() as session:
            result = await session.execute(select(Bookmark).order_by(Bookmark.id))
            return [BookmarkResponse.model_validate(b) for b in result.scalars().all()]

    async def get_bookmark(self, bookmark_id: int) -> BookmarkResponse | None:
        if not _storable_id(bookmark_id):
            return None
        async with self._transaction() as session:
            bookmark = await session.get(Bookmark, bookmark_id)
            if bookmark is None:
                return None
            return BookmarkResponse.model_validate(bookmark)

    async def create_bookmark(self, data: BookmarkCreate) -> BookmarkResponse:
        async with self._transaction() as session:
            bookmark = Bookmark(**data.model_dump())
            session.add(bookmark)
            await session.flush()
            return BookmarkResponse.model_validate(bookmark)

    async def update_bookmark(
        self,
        bookmark_id: int,
        data: BookmarkUpdate,
    ) -> BookmarkResponse | None:
        if not _storable_id(bookmark_id):
            return None
        async with self._transaction() as session:
            bookmark = await session.get(Bookmark, bookmark_id)
            if bookmark is None:
                return None

            update_data = data.model_dump(exclude_unset=True)
            for field, value in update_data.items():
                setattr(bookmark, field, value)

            await session.flush()
            return BookmarkResponse.model_validate(bookmark)

    async def delete_bookmark(self, bookmark_id: int) -> bool:
        if not _storable_id(bookmark_id):
            return False
        async with self._transaction() as session:
            bookmark = await session.get(Bookmark, bookmark_id)
            if bookmark is None:
                return False

            # List references go first so the bookmark row is never referenced
            # when it is removed, with or without ON DELETE CASCADE.
            result = await session.execute(
                delete(BookmarkListItem).where(BookmarkListItem.bookmark_id == bookmark_id),
            )
            await session.execute(delete(Bookmark).where(Bookmark.id == bookmark_id))
            logger.debug(
                "Removed bookmark %s from %s list(s)", bookmark_id, result.rowcount,
            )
            return True

    # --- Lists ---

    async def list_lists(self) -> list[BookmarkListResponse]:
        async with self._transaction() as session:
            result = await session.execute(select(BookmarkList).order_by(BookmarkList.id))
            return [_to_list_response(lst) for lst in result.scalars().all()]

    async def get_list(self, list_id: int) -> BookmarkListResponse | None:
        if not _storable_id(list_id):
            return None
        async with self._transaction() as session:
            bookmark_list = await session.get(BookmarkList, list_id)
            if bookmark_list is None:
                return None
            return _to_list_response(bookmark_list)

    async def create_list(self, data: BookmarkListCreate) -> BookmarkListResponse:
        async with self._transaction() as session:
            existing = await self._existing_bookmark_ids(session, data.bookmark_ids)
            check_bookmark_ids_exist(data.bookmark_ids, existing)

            bookmark_list = BookmarkList(
                name=data.name,
                items=[
                    BookmarkListItem(bookmark_id=bookmark_id, position=position)
                    for position, bookmark_id in enumerate(data.bookmark_ids)
                ],
            )
            session.add(bookmark_list)
            await session.flush()
            return _to_list_response(bookmark_list)

    async def update_list(
        self,
        list_id: int,
        data: BookmarkListUpdate,
    ) -> BookmarkListResponse | None:
        if not _storable_id(list_id):
            return None
        async with self._transaction() as session:
            bookmark_list = await session.get(BookmarkList, list_id)
            if bookmark_list is None:
                return None

            update_data = data.model_dump(exclude_unset=True)
            if update_data.get("name") is not None:
                bookmark_list.name = update_data["name"]

            bookmark_ids = update_data.get("bookmark_ids")
            if bookmark_ids is not None:
                existing = await self._existing_bookmark_ids(session, bookmark_ids)
                check_bookmark_ids_exist(bookmark_ids, existing)
                # Reuse rows for ids that stay so the (list_id, bookmark_id)
                # primary key is never inserted twice in one flush.
                current = {item.bookmark_id: item for item in bookmark_list.items}
                items = []
                for position, bookmark_id in enumerate(bookmark_ids):
                    item = current.get(bookmark_id) or BookmarkListItem(bookmark_id=bookmark_id)
                    item.position = position
                    items.append(item)
                bookmark_list.items = items

            await session.flush()
            return _to_list_response(bookmark_list)

    async def delete_list(self, list_id: int) -> bool:
        if not _storable_id(list_id):
            return False
        async with self._transaction() as session:
            bookmark_list = await session.get(BookmarkList, list_id)
            if bookmark_list is None:
                return False
            await session.delete(bookmark_list)
            await session.flush()
            return True
