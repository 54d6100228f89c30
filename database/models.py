"""
SQLAlchemy ORM models for users and their income / expense ledgers.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Float, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import DeclarativeBase, declared_attr


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class User(Base):
    __tablename__ = "users"

    user_id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    username = Column(String(64), unique=True, nullable=False)
    name = Column(String(128))
    email = Column(String(255), unique=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    profile_picture = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), default=_utcnow)


class TransactionMixin:
    """Columns shared by the ``incomes`` and ``expenses`` tables."""

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    title = Column(String(255), nullable=False)
    amount = Column(Float, nullable=False)
    category = Column(String(64), nullable=False)
    description = Column(Text, nullable=True)
    date = Column(DateTime(timezone=True), nullable=False)
    created_at = Column(DateTime(timezone=True), default=_utcnow, index=True)

    # No ON DELETE behaviour: users are never deleted.
    @declared_attr
    def user_id(cls):
        return Column(
            Uuid(as_uuid=True),
            ForeignKey("users.user_id"),
            nullable=False,
            index=True,
        )


class Income(TransactionMixin, Base):
    __tablename__ = "incomes"
    kind = "income"


class Expense(TransactionMixin, Base):
    __tablename__ = "expenses"
    kind = "expense"
