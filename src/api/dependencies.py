"""FastAPI dependencies for injection."""
from fastapi import Depends, Request

from core.auth import verify_api_token
from core.config import Settings, get_settings
from db.session import create_engine
from services.memory_store import InMemoryStore
from services.sql_store import SqlStore
from services.store import BookmarkStore, ListStore, Store


def create_store(settings: Settings) -> Store:
    """Build the store selected by STORE_BACKEND."""
    if settings.store_backend == "database":
        return SqlStore(create_engine(settings))
    return InMemoryStore()


def get_store(request: Request) -> Store:
    """Return the process-wide store created by the application lifespan."""
    return request.app.state.store


def get_bookmark_store(store: Store = Depends(get_store)) -> BookmarkStore:
    """Store used by bookmark endpoints."""
    return store


def get_list_store(store: Store = Depends(get_store)) -> ListStore:
    """Store used by list endpoints."""
    return store


__all__ = [
    "create_store",
    "get_bookmark_store",
    "get_list_store",
    "get_settings",
    "get_store",
    "verify_api_token",
]
