"""
GS1 element string builders for labels and printed protocols.

The inverse of the decoder: fields go in, a GS1 string comes out, using the
same AI table. Fixed-length AIs are written first so that at most the
variable-length fields need a separator.
"""

from __future__ import annotations

from datetime import date
from typing import List, Optional, Tuple, Union

from .core.ai_registry import AIRegistry, DEFAULT_REGISTRY
from .core.decoder import DecodedRecord
from .core.normalizer import SEPARATOR
from .validators.dates import to_gs1_date

DateValue = Union[str, date]

# Output order: fixed-length AIs, then variable-length ones
AI_ORDER = ("00", "01", "11", "17", "10", "21")


def _gs1_date(value: DateValue) -> str:
    # Raw YYMMDD digits are passed through
    if isinstance(value, str) and len(value) == 6 and value.isdigit():
        return value
    return to_gs1_date(value)


def _collect(
    gtin: Optional[str],
    expiry_date: Optional[DateValue],
    batch_number: Optional[str],
    serial_number: Optional[str],
    production_date: Optional[DateValue],
    sscc: Optional[str],
) -> List[Tuple[str, str]]:
    values = {
        "00": sscc,
        "01": gtin,
        "11": _gs1_date(production_date) if production_date else None,
        "17": _gs1_date(expiry_date) if expiry_date else None,
        "10": batch_number,
        "21": serial_number,
    }
    return [(ai, values[ai]) for ai in AI_ORDER if values[ai]]


def build_udi(
    gtin: Optional[str] = None,
    expiry_date: Optional[DateValue] = None,
    batch_number: Optional[str] = None,
    serial_number: Optional[str] = None,
    production_date: Optional[DateValue] = None,
    sscc: Optional[str] = None,
) -> str:
    """
    Build the human-readable bracket form, e.g. ``(01)...(17)YYMMDD(10)LOT``.

    Unset fields are skipped. Dates may be ISO strings, date objects or
    YYMMDD digits.
    """
    pairs = _collect(gtin, expiry_date, batch_number, serial_number,
                     production_date, sscc)
    return "".join(f"({ai}){value}" for ai, value in pairs)


def build_element_string(
    gtin: Optional[str] = None,
    expiry_date: Optional[DateValue] = None,
    batch_number: Optional[str] = None,
    serial_number: Optional[str] = None,
    production_date: Optional[DateValue] = None,
    sscc: Optional[str] = None,
    registry: AIRegistry = DEFAULT_REGISTRY,
) -> str:
    """
    Build the raw concatenated form.

    A separator follows every variable-length value except the last one.
    """
    pairs = _collect(gtin, expiry_date, batch_number, serial_number,
                     production_date, sscc)
    parts = []
    for index, (ai, value) in enumerate(pairs):
        parts.append(ai + value)
        descriptor = registry.lookup(ai)
        is_last = index == len(pairs) - 1
        if descriptor is not None and not descriptor.is_fixed and not is_last:
            parts.append(SEPARATOR)
    return "".join(parts)


def record_to_udi(record: DecodedRecord) -> str:
    """Bracket form of a decoded record."""
    return build_udi(
        gtin=record.gtin,
        expiry_date=record.expiry_date,
        batch_number=record.batch_number,
        serial_number=record.serial_number,
        production_date=record.production_date,
        sscc=record.sscc,
    )
