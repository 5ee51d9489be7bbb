"""
Catalog lookup for decoded GTINs.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from .core.decoder import DecodedRecord

logger = logging.getLogger(__name__)

_DEFAULT_DB_PATH = Path(__file__).parent / "data" / "catalog.json"
_DB_CACHE: Optional[Dict[str, Any]] = None
_DB_CACHE_PATH: Optional[Path] = None


def _load_database(db_path: Optional[Path] = None) -> Dict[str, Any]:
    """Load catalog JSON with a small in-process cache."""
    global _DB_CACHE, _DB_CACHE_PATH
    path = db_path or _DEFAULT_DB_PATH
    if _DB_CACHE is not None and _DB_CACHE_PATH == path:
        return _DB_CACHE

    logger.debug("Loading catalog from %s", path)
    data = json.loads(path.read_text(encoding="utf-8"))
    _DB_CACHE = data
    _DB_CACHE_PATH = path
    return data


def _field(record: Dict[str, Any], key: str) -> str:
    return str(record.get(key) or "").strip()


def lookup_gtin(
    gtin: str,
    *,
    db_path: Optional[Path] = None
) -> Optional[Dict[str, Any]]:
    """
    Lookup a GTIN in the catalog and return the first matching record.

    Args:
        gtin: GTIN string to search for (exact match).
        db_path: Optional path to a catalog JSON file.

    Returns:
        The matching record dict, or None if not found.
    """
    if not gtin:
        return None

    records = _load_database(db_path).get("data", [])
    for record in records:
        if _field(record, "gtin") == gtin:
            return record

    return None


def find_instances(
    decoded: DecodedRecord,
    *,
    db_path: Optional[Path] = None
) -> List[Dict[str, Any]]:
    """
    Catalog records matching a decoded scan.

    Matches on GTIN, and additionally on batch number when the scan carries
    one.
    """
    if not decoded.gtin:
        return []

    records = _load_database(db_path).get("data", [])
    matches = []
    for record in records:
        if _field(record, "gtin") != decoded.gtin:
            continue
        if decoded.batch_number and _field(record, "batch_number") != decoded.batch_number:
            continue
        matches.append(record)
    return matches
