"""
Input validators used by the ledger before anything is persisted.
"""

from __future__ import annotations

import math
from datetime import date, datetime, time, timezone
from typing import Any

from utils.errors import InvalidAmountError, InvalidDateError, MissingFieldsError


def require_fields(**fields: Any) -> None:
    """Raise ``MissingFieldsError`` if any value is ``None`` or blank."""
    for value in fields.values():
        if value is None or (isinstance(value, str) and not value.strip()):
            raise MissingFieldsError()


def parse_amount(value: Any) -> float:
    """
    Coerce *value* (number or numeric string) to a strictly positive float.

    Booleans, blanks, NaN and infinities are rejected along with anything
    ``<= 0``.
    """
    if value is None or isinstance(value, bool):
        raise InvalidAmountError()
    try:
        amount = float(value.strip() if isinstance(value, str) else value)
    except (TypeError, ValueError) as exc:
        raise InvalidAmountError() from exc
    if not math.isfinite(amount) or amount <= 0:
        raise InvalidAmountError()
    return amount


def parse_date(value: Any) -> datetime:
    """
    Parse an ISO-8601 date or datetime into an aware ``datetime``.

    Plain dates become midnight UTC, naive datetimes are taken as UTC and
    a trailing ``Z`` is accepted.  Offset-aware values are converted to UTC
    since the SQLite store keeps the wall-clock time only.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime.combine(value, time.min)
    elif isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError as exc:
            raise InvalidDateError() from exc
    else:
        raise InvalidDateError()

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)
