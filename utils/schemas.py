"""
Pydantic schemas for the finance tracker API.

JSON field names are camelCase on the wire; Python code uses snake_case
(``populate_by_name`` lets both in).
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt, StrictStr
from pydantic.alias_generators import to_camel


class _Schema(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ═══════════════════════════════════════════════════════════════════════════════
# Auth: requests
# ═══════════════════════════════════════════════════════════════════════════════


class SignupRequest(_Schema):
    username: str = Field(..., min_length=1, max_length=64)
    name: str = Field(..., max_length=128)
    email: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1)


class LoginRequest(_Schema):
    email_or_username: str = Field(..., min_length=1)
    password: str


class UpdateProfileRequest(_Schema):
    username: Optional[str] = Field(None, min_length=1, max_length=64)
    name: Optional[str] = Field(None, max_length=128)
    email: Optional[str] = Field(None, min_length=1, max_length=255)


class UpdatePasswordRequest(_Schema):
    current_password: str
    new_password: str = Field(..., min_length=1)


class UpdatePictureRequest(_Schema):
    """``profile_picture`` is a URL or data-URI string; ``None`` clears it."""

    profile_picture: Optional[str] = Field(...)


# ═══════════════════════════════════════════════════════════════════════════════
# Auth: responses
# ═══════════════════════════════════════════════════════════════════════════════


class UserOut(_Schema):
    """Public view of a user.  Never carries the password hash."""

    id: str
    username: str
    name: Optional[str] = None
    email: str
    profile_picture: Optional[str] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_user(cls, user) -> "UserOut":
        return cls(
            id=str(user.user_id),
            username=user.username,
            name=user.name,
            email=user.email,
            profile_picture=user.profile_picture,
            created_at=user.created_at,
        )


class MessageResponse(_Schema):
    message: str


class AuthResponse(_Schema):
    message: str
    user: UserOut
    token: str


class UserResponse(_Schema):
    message: Optional[str] = None
    user: UserOut


# ═══════════════════════════════════════════════════════════════════════════════
# Ledger
# ═══════════════════════════════════════════════════════════════════════════════


class TransactionCreate(_Schema):
    """
    Raw add-income / add-expense body.

    Fields are optional here so that missing values, non-positive amounts
    and bad dates surface as the ledger's own errors rather than generic
    schema failures.
    """

    title: Optional[str] = None
    amount: Union[StrictFloat, StrictInt, StrictStr, None] = None  # no bool coercion
    category: Optional[str] = None
    description: Optional[str] = None
    date: Optional[str] = None


class TransactionOut(_Schema):
    id: str
    type: str
    title: str
    amount: float
    category: str
    description: Optional[str] = None
    date: datetime
    created_at: Optional[datetime] = None


class MonthSummary(_Schema):
    month: str  # "YYYY-MM"
    income: float = 0.0
    expenses: float = 0.0
    balance: float = 0.0


class SummaryOut(_Schema):
    total_income: float
    total_expenses: float
    total_balance: float
    current_month: MonthSummary
    months: List[MonthSummary] = Field(default_factory=list)
    recent_transactions: List[TransactionOut] = Field(default_factory=list)
