"""
Ledger API routes: income / expense CRUD and the dashboard summary.

All routes require a Bearer token and only ever touch the caller's rows.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from auth.dependencies import db_session, get_current_user_id
from config.settings import config
from ledger.store import LedgerStore, expense_ledger, income_ledger
from ledger.summary import summarize
from utils.schemas import MessageResponse, SummaryOut, TransactionCreate, TransactionOut

logger = logging.getLogger(__name__)

router = APIRouter(tags=["transactions"])


def _register_ledger(ledger: LedgerStore, singular: str, plural: str) -> None:
    """Attach add / list / delete routes for one ledger kind."""

    @router.post(f"/add-{singular}", response_model=MessageResponse, name=f"add_{singular}")
    async def add(
        req: TransactionCreate,
        session: AsyncSession = Depends(db_session),
        user_id: str = Depends(get_current_user_id),
    ) -> Dict[str, Any]:
        await ledger.add(session, user_id, req)
        return {"message": f"{ledger.label} Added"}

    @router.get(f"/get-{plural}", response_model=List[TransactionOut], name=f"get_{plural}")
    async def list_records(
        session: AsyncSession = Depends(db_session),
        user_id: str = Depends(get_current_user_id),
    ) -> List[TransactionOut]:
        records = await ledger.list(session, user_id)
        return [ledger.to_out(r) for r in records]

    @router.delete(
        f"/delete-{singular}/{{record_id}}",
        response_model=MessageResponse,
        name=f"delete_{singular}",
    )
    async def delete(
        record_id: str,
        session: AsyncSession = Depends(db_session),
        user_id: str = Depends(get_current_user_id),
    ) -> Dict[str, Any]:
        await ledger.delete(session, user_id, record_id)
        return {"message": f"{ledger.label} Deleted"}


_register_ledger(income_ledger, "income", "incomes")
_register_ledger(expense_ledger, "expense", "expenses")


@router.get("/summary", response_model=SummaryOut)
async def get_summary(
    session: AsyncSession = Depends(db_session),
    user_id: str = Depends(get_current_user_id),
) -> SummaryOut:
    """Totals, monthly breakdown and latest transactions for the caller."""
    incomes = [income_ledger.to_out(r) for r in await income_ledger.list(session, user_id)]
    expenses = [expense_ledger.to_out(r) for r in await expense_ledger.list(session, user_id)]
    return summarize(incomes, expenses, recent=config.recent_transactions)
