"""
Shared pytest fixtures.
"""

import pytest

from gs1_decoder import SEPARATOR

GTIN = "04012345678901"
BRACKETED = "(01)04012345678901(17)251231(10)ABC123"


@pytest.fixture
def gtin():
    return GTIN


@pytest.fixture
def bracketed():
    """GTIN + expiry + lot in human-readable bracket form."""
    return BRACKETED


@pytest.fixture
def raw_with_separator():
    """Same data as ``bracketed`` as a raw stream with a canonical separator."""
    return "010401234567890117251231" + SEPARATOR + "10ABC123"


@pytest.fixture
def catalog_file(tmp_path):
    path = tmp_path / "catalog.json"
    path.write_text(
        '{"data": ['
        '{"gtin": "04012345678901", "name": "Guidewire", "batch_number": "ABC123"},'
        '{"gtin": "04012345678901", "name": "Guidewire", "batch_number": "XYZ999"},'
        '{"gtin": "08714729158608", "name": "Balloon", "batch_number": "37152429"}'
        ']}',
        encoding="utf-8",
    )
    return path
