"""
GS1 date normalization.

GS1 carries dates as YYMMDD. The decoder reports them as ISO YYYY-MM-DD
when the value is a real calendar date and keeps the raw digits otherwise.
"""

from __future__ import annotations

from calendar import monthrange
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional, Union

DEFAULT_CENTURY = 2000


@dataclass
class ValidationResult:
    """Result of a validation operation."""
    valid: bool
    errors: List[str] = field(default_factory=list)
    meta: Dict[str, Any] = field(default_factory=dict)


def validate_gs1_date(value: str, century: int = DEFAULT_CENTURY) -> ValidationResult:
    """
    Validate a YYMMDD date.

    Year is ``century + YY``. A day of 00 means "no specific day": the
    value is valid but has no ISO form, so ``iso_date`` is left out of meta.

    Returns:
        ValidationResult with year/month/day and iso_date in meta
    """
    result = ValidationResult(valid=True)

    if not value or len(value) != 6 or not (value.isdigit() and value.isascii()):
        result.valid = False
        result.errors.append(f"Date must be 6 digits, got {value!r}")
        return result

    year = century + int(value[0:2])
    mm = int(value[2:4])
    dd = int(value[4:6])

    if mm < 1 or mm > 12:
        result.valid = False
        result.errors.append(f"Invalid month: {mm}")
        return result

    result.meta['year'] = year
    result.meta['month'] = mm

    if dd == 0:
        result.meta['day_unspecified'] = True
        return result
    if dd > monthrange(year, mm)[1]:
        result.valid = False
        result.errors.append(f"Day {dd} invalid for month {mm} in year {year}")
        return result

    result.meta['day'] = dd
    result.meta['iso_date'] = f"{year:04d}-{mm:02d}-{dd:02d}"
    return result


def normalize_gs1_date(value: str, century: int = DEFAULT_CENTURY) -> Optional[str]:
    """
    Convert a YYMMDD value to YYYY-MM-DD.

    Returns None for anything that is not six digits forming a calendar
    date, and for a day of 00; callers keep the raw value in that case.

    Examples:
        >>> normalize_gs1_date("251231")
        '2025-12-31'
        >>> normalize_gs1_date("25123") is None
        True
    """
    result = validate_gs1_date(value, century)
    if not result.valid:
        return None
    return result.meta.get('iso_date')


def to_gs1_date(value: Union[str, date]) -> str:
    """Format an ISO date string or date object as YYMMDD."""
    if isinstance(value, str):
        value = date.fromisoformat(value)
    return value.strftime('%y%m%d')
