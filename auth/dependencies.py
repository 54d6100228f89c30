"""
FastAPI dependencies for authentication.

Provides ``db_session`` and ``get_current_user_id`` dependencies that
are used across all protected routes.
"""

from __future__ import annotations

from typing import AsyncGenerator, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from auth.jwt import verify_token
from database.session import get_db_session
from utils.errors import InvalidTokenError, MissingTokenError

# auto_error is off so missing and malformed headers map to our own 401s.
_bearer_scheme = HTTPBearer(auto_error=False)


async def db_session(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[AsyncSession, None]:
    """Yield a DB session for route handlers."""
    yield session


async def get_current_user_id(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer_scheme),
) -> str:
    """
    Extract and verify the Bearer token, returning the authenticated
    ``user_id`` (UUID string).

    The id is also bound to ``request.state.user_id`` for the rest of the
    request.  The user row itself is not looked up.
    """
    if credentials is None:
        # A header with another scheme or no credential is a bad token, not a missing one.
        if request.headers.get("Authorization"):
            raise InvalidTokenError()
        raise MissingTokenError()

    user_id = verify_token(credentials.credentials)
    request.state.user_id = user_id
    return user_id
