"""
Auth service: signup, login and profile maintenance over the ``users``
table.

Every function takes the request's ``AsyncSession`` and raises errors from
``utils.errors``; the HTTP layer never sees SQLAlchemy or bcrypt failures.
Where email and username are both validated, email is checked first.
"""

from __future__ import annotations

import logging
import uuid
from typing import Optional, Tuple

from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from auth.jwt import create_token
from auth.password import hash_password, verify_password
from database.models import User
from utils.errors import (
    DuplicateKeyError,
    EmailExistsError,
    EmailTakenError,
    InvalidCredentialsError,
    InvalidCurrentPasswordError,
    UserNotFoundError,
    UsernameExistsError,
    UsernameTakenError,
)
from utils.schemas import (
    LoginRequest,
    SignupRequest,
    UpdatePasswordRequest,
    UpdatePictureRequest,
    UpdateProfileRequest,
)

logger = logging.getLogger(__name__)

_DUMMY_HASH: Optional[str] = None


def _dummy_hash() -> str:
    global _DUMMY_HASH
    if _DUMMY_HASH is None:
        _DUMMY_HASH = hash_password(uuid.uuid4().hex)
    return _DUMMY_HASH


def _to_uuid(value: str | uuid.UUID) -> uuid.UUID:
    return uuid.UUID(value) if isinstance(value, str) else value


async def _find_by(
    session: AsyncSession,
    column,
    value: str,
    exclude_user_id: Optional[uuid.UUID] = None,
) -> Optional[User]:
    stmt = select(User).where(column == value)
    if exclude_user_id is not None:
        stmt = stmt.where(User.user_id != exclude_user_id)
    result = await session.execute(stmt)
    return result.scalar_one_or_none()


async def _flush_unique(session: AsyncSession) -> None:
    """Flush, translating a unique-constraint race into ``DuplicateKeyError``."""
    try:
        await session.flush()
    except IntegrityError as exc:
        await session.rollback()
        logger.info("Unique constraint violated at write time: %s", exc.orig)
        raise DuplicateKeyError() from exc


async def get_user(session: AsyncSession, user_id: str) -> User:
    """Load a user by id or raise ``UserNotFoundError``."""
    try:
        uid = _to_uuid(user_id)
    except ValueError as exc:
        raise UserNotFoundError() from exc
    user = await session.get(User, uid)
    if user is None:
        raise UserNotFoundError()
    return user


async def signup(session: AsyncSession, req: SignupRequest) -> Tuple[User, str]:
    """Create a user and issue its first token."""
    if await _find_by(session, User.email, req.email) is not None:
        raise EmailExistsError()
    if await _find_by(session, User.username, req.username) is not None:
        raise UsernameExistsError()

    user = User(
        user_id=uuid.uuid4(),
        username=req.username,
        name=req.name,
        email=req.email,
        password_hash=hash_password(req.password),
    )
    session.add(user)
    await _flush_unique(session)

    token = create_token(str(user.user_id))
    logger.info("Registered user %s (%s)", user.username, user.user_id)
    return user, token


async def login(session: AsyncSession, req: LoginRequest) -> Tuple[User, str]:
    """Login with username or email + password."""
    identifier = req.email_or_username
    result = await session.execute(
        select(User).where(or_(User.username == identifier, User.email == identifier))
    )
    # A username may equal some other user's email; prefer the username match.
    candidates = result.scalars().all()
    user = next((u for u in candidates if u.username == identifier), None)
    if user is None and candidates:
        user = candidates[0]

    # Unknown identifiers still pay for a bcrypt check so timing matches.
    digest = user.password_hash if user is not None else _dummy_hash()
    if not verify_password(req.password, digest) or user is None:
        logger.info("Failed login attempt")
        raise InvalidCredentialsError()

    token = create_token(str(user.user_id))
    logger.info("Login: %s (%s)", user.username, user.user_id)
    return user, token


async def get_profile(session: AsyncSession, user_id: str) -> User:
    return await get_user(session, user_id)


async def update_profile(
    session: AsyncSession,
    user_id: str,
    req: UpdateProfileRequest,
) -> User:
    """
    Apply a partial update of ``username`` / ``name`` / ``email``.

    Uniqueness is checked against other users only, and nothing is written
    unless every check passes.
    """
    user = await get_user(session, user_id)

    if req.email is not None and req.email != user.email:
        if await _find_by(session, User.email, req.email, user.user_id) is not None:
            raise EmailTakenError()
    if req.username is not None and req.username != user.username:
        if await _find_by(session, User.username, req.username, user.user_id) is not None:
            raise UsernameTakenError()

    if req.email is not None:
        user.email = req.email
    if req.username is not None:
        user.username = req.username
    if req.name is not None:
        user.name = req.name
    await _flush_unique(session)

    logger.info("Updated profile for %s", user.user_id)
    return user


async def update_password(
    session: AsyncSession,
    user_id: str,
    req: UpdatePasswordRequest,
) -> None:
    # No strength policy is enforced here; clients validate length.
    user = await get_user(session, user_id)
    if not verify_password(req.current_password, user.password_hash):
        raise InvalidCurrentPasswordError()

    user.password_hash = hash_password(req.new_password)
    await session.flush()
    logger.info("Password changed for %s", user.user_id)


async def update_profile_picture(
    session: AsyncSession,
    user_id: str,
    req: UpdatePictureRequest,
) -> User:
    """Store the picture string verbatim, or clear it when ``None``."""
    user = await get_user(session, user_id)
    user.profile_picture = req.profile_picture
    await session.flush()
    logger.info(
        "Profile picture %s for %s",
        "cleared" if req.profile_picture is None else "updated",
        user.user_id,
    )
    return user
