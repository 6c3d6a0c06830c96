"""Utility functions for the payoff calculator.

This module provides helpers for turning user input into ``Decimal`` and
``date`` values and for month arithmetic on dates. It uses Python's
``datetime`` and ``calendar`` modules to calculate month offsets.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal, InvalidOperation, getcontext
import calendar
from typing import Any

from .errors import CalculationError

getcontext().prec = 28  # increase decimal precision to avoid rounding errors


def parse_date(value: str) -> date:
    """Parse a YYYY-MM-DD string into a ``date``.

    Raises
    ------
    ValueError
        If the string is not a valid calendar date.
    """
    try:
        return datetime.strptime(value.strip(), "%Y-%m-%d").date()
    except (AttributeError, ValueError) as exc:
        raise ValueError(f"Invalid date (expected YYYY-MM-DD): {value}") from exc


def add_months(dt: date, months: int) -> date:
    """Return a new date a number of months after ``dt``.

    The day of the month is clamped to the last valid day if needed (e.g.,
    adding one month to Jan 31 yields Feb 28 or 29).
    """
    year = dt.year + (dt.month - 1 + months) // 12
    month = (dt.month - 1 + months) % 12 + 1
    day = min(dt.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def decimal_from_str(value: str) -> Decimal:
    """Convert a numeric string into a ``Decimal``.

    The function strips any commas and dollar signs and handles both integer
    and float-like strings. It raises ``ValueError`` if conversion fails.
    """
    try:
        cleaned = value.replace(",", "").replace("$", "").strip()
        result = Decimal(cleaned)
    except (AttributeError, InvalidOperation) as exc:
        raise ValueError(f"Invalid numeric value: {value}") from exc
    if not result.is_finite():
        raise ValueError(f"Invalid numeric value: {value}")
    return result


def to_decimal(value: Any) -> Decimal:
    """Coerce an int, float, string or ``Decimal`` to a finite ``Decimal``.

    Floats go through ``str`` so that ``4.2`` becomes ``Decimal("4.2")`` rather
    than its binary expansion. Booleans and ``None`` are rejected.
    """
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, bool) or value is None:
        raise CalculationError()
    elif isinstance(value, (int, float)):
        try:
            result = Decimal(str(value))
        except InvalidOperation as exc:
            raise CalculationError() from exc
    elif isinstance(value, str):
        try:
            result = decimal_from_str(value)
        except ValueError as exc:
            raise CalculationError() from exc
    else:
        raise CalculationError()
    if not result.is_finite():
        raise CalculationError()
    return result
