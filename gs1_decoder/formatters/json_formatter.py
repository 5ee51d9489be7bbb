"""
JSON Formatter for decoded GS1 records

Two output shapes:
- camelCase keys (``DecodedRecord.to_dict``), consumed by the inventory
  entry forms
- human-readable field names with dd/mm/yyyy dates, for display and the CLI
"""

from __future__ import annotations

import json
from typing import Any, Dict

from ..core.decoder import DecodedRecord


# Record attribute -> human-readable name
FIELD_NAMES = {
    "gtin": "GTIN Code",
    "batch_number": "Batch/Lot Number",
    "expiry_date": "Expiry Date",
    "serial_number": "Serial Number",
    "sscc": "SSCC",
    "production_date": "Production Date",
}

DATE_FIELDS = ("expiry_date", "production_date")


def format_date_ddmmyyyy(value: str) -> str:
    """
    Format an ISO date as dd/mm/yyyy.

    Values that are not ISO dates (raw digits kept by the decoder) are
    returned unchanged.
    """
    if len(value) == 10 and value[4] == "-" and value[7] == "-":
        return f"{value[8:10]}/{value[5:7]}/{value[0:4]}"
    return value


def record_to_display_dict(record: DecodedRecord) -> Dict[str, Any]:
    """Decoded fields under human-readable names."""
    output: Dict[str, Any] = {}
    for name, value in record.fields().items():
        if name in DATE_FIELDS:
            value = format_date_ddmmyyyy(value)
        output[FIELD_NAMES[name]] = value
    return output


def record_to_json(
    record: DecodedRecord,
    human: bool = False,
    include_issues: bool = False,
) -> str:
    """
    Format a decoded record as JSON.

    Args:
        record: Result of parse()
        human: Use display names and dd/mm/yyyy dates instead of camelCase
        include_issues: Add an ``issues`` list with soft failures

    Returns:
        JSON string
    """
    output = record_to_display_dict(record) if human else record.to_dict()

    if include_issues:
        output["issues"] = [
            {
                "code": issue.code.value,
                "message": issue.message,
                "position": issue.position,
            }
            for issue in record.issues
        ]

    return json.dumps(output, indent=2, ensure_ascii=False)
