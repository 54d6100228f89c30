"""
Owner-scoped storage for income and expense transactions.

Both kinds share one contract; ``LedgerStore`` is parameterised by the ORM
model.  Every query filters on the owning ``user_id``, so a record that
belongs to someone else is indistinguishable from one that does not exist.
"""

from __future__ import annotations

import logging
import uuid
from typing import List, Type

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import config
from database.models import Expense, Income, TransactionMixin
from utils.errors import RecordNotFoundError
from utils.schemas import TransactionCreate, TransactionOut
from utils.validators import parse_amount, parse_date, require_fields

logger = logging.getLogger(__name__)


def _to_uuid(value: str | uuid.UUID) -> uuid.UUID:
    return uuid.UUID(value) if isinstance(value, str) else value


class LedgerStore:
    def __init__(self, model: Type[TransactionMixin], label: str) -> None:
        self.model = model
        self.kind = model.kind
        self.label = label  # "Income" / "Expense", used in client messages

    async def add(
        self,
        session: AsyncSession,
        owner_id: str,
        req: TransactionCreate,
    ) -> TransactionMixin:
        """Validate and persist a new record for ``owner_id``."""
        require_fields(title=req.title, category=req.category, date=req.date)
        amount = parse_amount(req.amount)
        when = parse_date(req.date)

        record = self.model(
            id=uuid.uuid4(),
            title=req.title,
            amount=amount,
            category=req.category,
            description=req.description,
            date=when,
            user_id=_to_uuid(owner_id),
        )
        session.add(record)
        await session.flush()
        logger.info("%s %s added for %s", self.label, record.id, owner_id)
        return record

    async def list(self, session: AsyncSession, owner_id: str) -> List[TransactionMixin]:
        """All of ``owner_id``'s records, most recently created first."""
        result = await session.execute(
            select(self.model)
            .where(self.model.user_id == _to_uuid(owner_id))
            .order_by(self.model.created_at.desc())
        )
        return list(result.scalars().all())

    async def delete(self, session: AsyncSession, owner_id: str, record_id: str) -> None:
        try:
            rid = _to_uuid(record_id)
        except ValueError as exc:
            raise RecordNotFoundError(f"{self.label} not found") from exc

        result = await session.execute(
            delete(self.model).where(
                self.model.id == rid,
                self.model.user_id == _to_uuid(owner_id),
            )
        )
        if result.rowcount == 0:
            raise RecordNotFoundError(f"{self.label} not found")
        logger.info("%s %s deleted by %s", self.label, rid, owner_id)

    def to_out(self, record: TransactionMixin) -> TransactionOut:
        category = record.category
        if not category and self.kind == "expense":
            category = config.default_expense_category
        return TransactionOut(
            id=str(record.id),
            type=self.kind,
            title=record.title,
            amount=record.amount,
            category=category or "",
            description=record.description,
            date=record.date,
            created_at=record.created_at,
        )


income_ledger = LedgerStore(Income, "Income")
expense_ledger = LedgerStore(Expense, "Expense")
