"""Bookmark list CRUD endpoints."""
import logging

from fastapi import APIRouter, Depends, Response

from api.dependencies import get_list_store, verify_api_token
from schemas.bookmark_list import (
    BookmarkListCreate,
    BookmarkListResponse,
    BookmarkListUpdate,
)
from schemas.errors import ErrorResponse
from schemas.validators import MISSING_LIST_FIELDS_MESSAGE
from services.exceptions import NotFoundError, ValidationError
from services.sanitizer import sanitize_bookmark_list
from services.store import ListStore

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "List Not Found"

router = APIRouter(
    prefix="/lists",
    tags=["lists"],
    dependencies=[Depends(verify_api_token)],
    responses={401: {"model": ErrorResponse}},
)


def _not_found(list_id: int) -> NotFoundError:
    logger.error("List with id %s not found.", list_id)
    return NotFoundError(NOT_FOUND_MESSAGE)


@router.get("", response_model=list[BookmarkListResponse])
async def get_lists(
    store: ListStore = Depends(get_list_store),
) -> list[BookmarkListResponse]:
    """Get all bookmark lists."""
    return [sanitize_bookmark_list(lst) for lst in await store.list_lists()]


@router.post(
    "",
    response_model=BookmarkListResponse,
    status_code=201,
    responses={400: {"model": ErrorResponse}},
)
async def create_list(
    data: BookmarkListCreate,
    response: Response,
    store: ListStore = Depends(get_list_store),
) -> BookmarkListResponse:
    """
    Create a new bookmark list.

    Every id in bookmarkIds must refer to an existing bookmark. Duplicate ids
    are dropped, keeping the first occurrence.
    """
    bookmark_list = await store.create_list(data)
    logger.info("List with id %s created", bookmark_list.id)
    response.headers["Location"] = f"{router.prefix}/{bookmark_list.id}"
    return sanitize_bookmark_list(bookmark_list)


@router.get(
    "/{list_id}",
    response_model=BookmarkListResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_list(
    list_id: int,
    store: ListStore = Depends(get_list_store),
) -> BookmarkListResponse:
    """Get a specific bookmark list by ID."""
    bookmark_list = await store.get_list(list_id)
    if bookmark_list is None:
        raise _not_found(list_id)
    return sanitize_bookmark_list(bookmark_list)


@router.patch(
    "/{list_id}",
    status_code=204,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def update_list(
    list_id: int,
    data: BookmarkListUpdate | None = None,
    store: ListStore = Depends(get_list_store),
) -> None:
    """Rename a list and/or replace its bookmark ids."""
    if data is None:
        if await store.get_list(list_id) is None:
            raise _not_found(list_id)
        raise ValidationError(MISSING_LIST_FIELDS_MESSAGE)

    updated = await store.update_list(list_id, data)
    if updated is None:
        raise _not_found(list_id)
    logger.info("List with id %s updated", list_id)


@router.delete(
    "/{list_id}",
    status_code=204,
    responses={404: {"model": ErrorResponse}},
)
async def delete_list(
    list_id: int,
    store: ListStore = Depends(get_list_store),
) -> None:
    """Delete a bookmark list. The bookmarks it references are left alone."""
    deleted = await store.delete_list(list_id)
    if not deleted:
        raise _not_found(list_id)
    logger.info("List with id %s deleted.", list_id)
