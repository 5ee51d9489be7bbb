"""
Tabular export of decoded scans (CSV).
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Union

import pandas as pd

from .core.decoder import DecodedRecord, JSON_KEYS

COLUMNS = ["raw", *JSON_KEYS.values(), "format", "complete", "issues"]


def to_dataframe(records: Iterable[DecodedRecord]) -> pd.DataFrame:
    """One row per record; unset fields are empty."""
    rows = []
    for record in records:
        row = {key: getattr(record, name) for name, key in JSON_KEYS.items()}
        row["raw"] = record.raw
        row["format"] = record.format.value
        row["complete"] = record.complete
        row["issues"] = "; ".join(issue.code.value for issue in record.issues)
        rows.append(row)
    return pd.DataFrame(rows, columns=COLUMNS)


def export_csv(records: Iterable[DecodedRecord], path: Union[str, Path]) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    to_dataframe(records).to_csv(path, index=False)
    return path
