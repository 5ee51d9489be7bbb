"""
Output formatters for the GS1 decoder.
"""

from .json_formatter import (
    format_date_ddmmyyyy,
    record_to_display_dict,
    record_to_json,
)

__all__ = [
    "format_date_ddmmyyyy",
    "record_to_display_dict",
    "record_to_json",
]
