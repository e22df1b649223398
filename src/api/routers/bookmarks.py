"""Bookmark CRUD endpoints."""
import logging

from fastapi import APIRouter, Depends, Response

from api.dependencies import get_bookmark_store, verify_api_token
from schemas.bookmark import BookmarkCreate, BookmarkResponse, BookmarkUpdate
from schemas.errors import ErrorResponse
from schemas.validators import MISSING_BOOKMARK_FIELDS_MESSAGE
from services.exceptions import NotFoundError, ValidationError
from services.sanitizer import sanitize_bookmark
from services.store import BookmarkStore

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "Bookmark Not Found"

router = APIRouter(
    prefix="/bookmarks",
    tags=["bookmarks"],
    dependencies=[Depends(verify_api_token)],
    responses={401: {"model": ErrorResponse}},
)


def _not_found(bookmark_id: int) -> NotFoundError:
    logger.error("Bookmark with id %s not found.", bookmark_id)
    return NotFoundError(NOT_FOUND_MESSAGE)


@router.get("", response_model=list[BookmarkResponse])
async def list_bookmarks(
    store: BookmarkStore = Depends(get_bookmark_store),
) -> list[BookmarkResponse]:
    """List all bookmarks in insertion order."""
    bookmarks = await store.list_bookmarks()
    return [sanitize_bookmark(bookmark) for bookmark in bookmarks]


@router.post(
    "",
    response_model=BookmarkResponse,
    status_code=201,
    responses={400: {"model": ErrorResponse}},
)
async def create_bookmark(
    data: BookmarkCreate,
    response: Response,
    store: BookmarkStore = Depends(get_bookmark_store),
) -> BookmarkResponse:
    """
    Create a new bookmark.

    - **title**: required, non-empty
    - **url**: required, absolute http(s) URL
    - **description**: optional, defaults to ""
    - **rating**: required, integer between 0 and 5

    Responds with the created bookmark and a Location header pointing at it.
    """
    bookmark = await store.create_bookmark(data)
    logger.info("Bookmark with id %s created", bookmark.id)
    response.headers["Location"] = f"{router.prefix}/{bookmark.id}"
    return sanitize_bookmark(bookmark)


@router.get(
    "/{bookmark_id}",
    response_model=BookmarkResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_bookmark(
    bookmark_id: int,
    store: BookmarkStore = Depends(get_bookmark_store),
) -> BookmarkResponse:
    """Get a single bookmark by ID."""
    bookmark = await store.get_bookmark(bookmark_id)
    if bookmark is None:
        raise _not_found(bookmark_id)
    return sanitize_bookmark(bookmark)


@router.patch(
    "/{bookmark_id}",
    status_code=204,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def update_bookmark(
    bookmark_id: int,
    data: BookmarkUpdate | None = None,
    store: BookmarkStore = Depends(get_bookmark_store),
) -> None:
    """
    Partially update a bookmark.

    Only the supplied fields change; unrecognized fields are ignored. The body
    must contain at least one of title, url, description or rating.
    """
    if data is None:
        if await store.get_bookmark(bookmark_id) is None:
            raise _not_found(bookmark_id)
        raise ValidationError(MISSING_BOOKMARK_FIELDS_MESSAGE)

    updated = await store.update_bookmark(bookmark_id, data)
    if updated is None:
        raise _not_found(bookmark_id)
    logger.info("Bookmark with id %s updated", bookmark_id)


@router.delete(
    "/{bookmark_id}",
    status_code=204,
    responses={404: {"model": ErrorResponse}},
)
async def delete_bookmark(
    bookmark_id: int,
    store: BookmarkStore = Depends(get_bookmark_store),
) -> None:
    """Delete a bookmark and remove it from every list that references it."""
    deleted = await store.delete_bookmark(bookmark_id)
    if not deleted:
        raise _not_found(bookmark_id)
    logger.info("Bookmark with id %s deleted.", bookmark_id)
