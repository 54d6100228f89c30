"""
Password hashing and verification.

Uses bcrypt for password hashing with automatic
salting and configurable work factor.  Passwords are first reduced to a
fixed-length SHA-256 digest so bcrypt's 72-byte input limit never applies.
"""

from __future__ import annotations

import base64
import hashlib

import bcrypt

from config.settings import config
from utils.errors import PasswordHashingError


def _prehash(password: str) -> bytes:
    """Base64 of the SHA-256 digest: always 44 ASCII bytes."""
    return base64.b64encode(hashlib.sha256(password.encode()).digest())


def hash_password(password: str) -> str:
    """Hash a password with bcrypt (auto-salted, ``config.bcrypt_rounds``)."""
    try:
        return bcrypt.hashpw(
            _prehash(password), bcrypt.gensalt(rounds=config.bcrypt_rounds)
        ).decode()
    except (ValueError, TypeError) as exc:
        raise PasswordHashingError() from exc


def verify_password(password: str, password_hash: str) -> bool:
    """Constant-time comparison against a bcrypt hash."""
    try:
        return bcrypt.checkpw(_prehash(password), password_hash.encode())
    except (ValueError, TypeError):
        return False
