"""
GS1 Application Identifier Decoder

Decodes GS1 element strings scanned from medical device packaging
(GS1-128, GS1 DataBar, GS1 DataMatrix) into GTIN, batch/lot, expiry date,
serial number, SSCC and production date.

Handles bracketed human-readable input, raw concatenated AI streams and the
separator stand-ins emitted by common scanner firmware.
"""

from .core.ai_registry import (
    AIDescriptor,
    AIRegistry,
    DEFAULT_REGISTRY,
    RegistryError,
)
from .core.normalizer import SEPARATOR, normalize_input
from .core.tokenizer import DecodeIssue, Element, InputFormat, IssueCode
from .core.decoder import (
    DecodedRecord,
    DecoderOptions,
    GS1Decoder,
    is_valid,
    parse,
    parse_many,
)
from .validators.dates import normalize_gs1_date, to_gs1_date
from .formatters.json_formatter import record_to_display_dict, record_to_json
from .encoder import build_element_string, build_udi, record_to_udi
from .expiry import ExpiryStatus, expires_within, expiry_status
from .lookup import find_instances, lookup_gtin

__version__ = "1.0.0"
__all__ = [
    "AIDescriptor",
    "AIRegistry",
    "DEFAULT_REGISTRY",
    "RegistryError",
    "SEPARATOR",
    "normalize_input",
    "DecodeIssue",
    "Element",
    "InputFormat",
    "IssueCode",
    "DecodedRecord",
    "DecoderOptions",
    "GS1Decoder",
    "is_valid",
    "parse",
    "parse_many",
    "normalize_gs1_date",
    "to_gs1_date",
    "record_to_display_dict",
    "record_to_json",
    "build_element_string",
    "build_udi",
    "record_to_udi",
    "ExpiryStatus",
    "expires_within",
    "expiry_status",
    "find_instances",
    "lookup_gtin",
]
