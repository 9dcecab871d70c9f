"""FastAPI dependency utilities."""

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer

from forum_notifications.application.use_cases.notifications import (
    FAILURE_HANDLERS,
    FailureHandler,
)
from forum_notifications.config import get_settings
from forum_notifications.infrastructure.security import decode_access_token

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/token")


def _credentials_exception() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user_id(token: str = Depends(oauth2_scheme)) -> str:
    """Return the forum user id carried in the bearer token ``sub`` claim."""

    try:
        payload = decode_access_token(token)
    except ValueError as exc:
        raise _credentials_exception() from exc

    user_id = payload.get("sub")
    if not isinstance(user_id, str) or not user_id:
        raise _credentials_exception()
    return user_id


def get_batch_failure_handler() -> FailureHandler:
    """Return the batch read-marking policy selected in the settings."""

    return FAILURE_HANDLERS[get_settings().batch_failure_policy]
