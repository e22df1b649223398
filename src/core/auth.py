"""Authentication module for bearer API token validation."""
import logging
import secrets

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from core.config import Settings, get_settings

logger = logging.getLogger(__name__)


# HTTP Bearer token scheme
security = HTTPBearer(auto_error=False)

UNAUTHORIZED_MESSAGE = "Unauthorized request"


def _unauthorized() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=UNAUTHORIZED_MESSAGE,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def verify_api_token(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    settings: Settings = Depends(get_settings),
) -> None:
    """
    Require ``Authorization: Bearer <API_TOKEN>`` on the request.

    In DEV_MODE the check is skipped. If no API token is configured every
    request is refused rather than silently allowed.

    Raises:
        HTTPException: 401 if the token is missing or does not match.
    """
    if settings.dev_mode:
        return

    if not settings.api_token:
        logger.error("API_TOKEN is not configured; refusing request to %s", request.url.path)
        raise _unauthorized()

    if credentials is None or not secrets.compare_digest(
        credentials.credentials.encode(),
        settings.api_token.encode(),
    ):
        logger.warning("Unauthorized request to path: %s", request.url.path)
        raise _unauthorized()
