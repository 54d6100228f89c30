"""
Domain error taxonomy.

Every error raised by the auth and ledger layers derives from ``AppError``
and carries the HTTP status and client-facing message it maps to.  The
handlers in ``api.middleware`` render them as ``{"message": ...}``.
"""

from __future__ import annotations


class AppError(Exception):
    status_code: int = 400
    message: str = "Bad Request"

    def __init__(self, message: str | None = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)


# ── 400: client-fixable input problems ───────────────────────────────────


class ValidationError(AppError):
    status_code = 400
    message = "Invalid request"


class MissingFieldsError(ValidationError):
    message = "All fields are required!"


class InvalidAmountError(ValidationError):
    message = "Amount must be a positive number!"


class InvalidDateError(ValidationError):
    message = "Invalid date format!"


# ── 400: uniqueness conflicts ────────────────────────────────────────────


class ConflictError(AppError):
    status_code = 400
    message = "Conflict"


class EmailExistsError(ConflictError):
    message = "User already exists with this email"


class UsernameExistsError(ConflictError):
    message = "Username already exists"


class EmailTakenError(ConflictError):
    message = "Email is already taken"


class UsernameTakenError(ConflictError):
    message = "Username is already taken"


class DuplicateKeyError(ConflictError):
    """A unique constraint fired at write time despite the pre-check."""

    message = "Duplicate key: username or email already in use"


# ── 400 / 401: credentials and tokens ────────────────────────────────────


class AuthenticationError(AppError):
    status_code = 401
    message = "Authentication failed"


class InvalidCredentialsError(AuthenticationError):
    status_code = 400
    message = "Invalid credentials"


class InvalidCurrentPasswordError(AuthenticationError):
    status_code = 400
    message = "Current password is incorrect"


class MissingTokenError(AuthenticationError):
    message = "Access denied. No token provided."


class InvalidTokenError(AuthenticationError):
    message = "Invalid token"


# ── 404 ──────────────────────────────────────────────────────────────────


class NotFoundError(AppError):
    status_code = 404
    message = "Not found"


class UserNotFoundError(NotFoundError):
    message = "User not found"


class RecordNotFoundError(NotFoundError):
    message = "Record not found"


# ── 500 ──────────────────────────────────────────────────────────────────


class ServerError(AppError):
    status_code = 500
    message = "Server Error"


class PasswordHashingError(ServerError):
    pass
