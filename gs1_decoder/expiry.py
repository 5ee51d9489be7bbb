"""
Expiry helpers for decoded records.
"""

from __future__ import annotations

import re
from datetime import date
from enum import Enum
from typing import Optional

from dateutil.parser import isoparse
from dateutil.relativedelta import relativedelta


class ExpiryStatus(str, Enum):
    VALID = "Valid"
    NEAR_EXPIRY = "Near Expiry"
    EXPIRED = "Expired"
    UNKNOWN = "Unknown"


_ISO_DATE = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)


def parse_iso_date(value: Optional[str]) -> Optional[date]:
    # YYYY-MM-DD only; isoparse also reads YYMMDD digits and week dates
    if not value or not _ISO_DATE.fullmatch(value):
        return None
    try:
        return isoparse(value).date()
    except ValueError:
        return None


def expiry_status(
    expiry_date: Optional[str],
    near_days: int = 30,
    today: Optional[date] = None,
) -> ExpiryStatus:
    """
    Classify an expiry date.

    Raw YYMMDD values the decoder could not normalize are UNKNOWN.
    """
    expiry = parse_iso_date(expiry_date)
    if expiry is None:
        return ExpiryStatus.UNKNOWN
    today = today or date.today()
    if expiry < today:
        return ExpiryStatus.EXPIRED
    if expiry <= today + relativedelta(days=near_days):
        return ExpiryStatus.NEAR_EXPIRY
    return ExpiryStatus.VALID


def expires_within(
    expiry_date: Optional[str],
    months: int,
    today: Optional[date] = None,
) -> bool:
    """True if the date falls between today and ``months`` calendar months ahead."""
    expiry = parse_iso_date(expiry_date)
    if expiry is None:
        return False
    today = today or date.today()
    return today <= expiry <= today + relativedelta(months=months)
