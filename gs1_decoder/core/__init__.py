"""
Core decoding modules for the GS1 decoder.
"""

from .ai_registry import (
    AIDescriptor,
    AIRegistry,
    DEFAULT_REGISTRY,
    RegistryError,
)
from .normalizer import SEPARATOR, normalize_input, normalize_scan, strip_symbology
from .tokenizer import (
    DecodeIssue,
    Element,
    InputFormat,
    IssueCode,
    detect_format,
    tokenize,
    tokenize_bracketed,
    tokenize_raw,
)
from .decoder import (
    DecodedRecord,
    DecoderOptions,
    FieldMapper,
    GS1Decoder,
    is_valid,
    parse,
    parse_many,
)

__all__ = [
    "AIDescriptor",
    "AIRegistry",
    "DEFAULT_REGISTRY",
    "RegistryError",
    "SEPARATOR",
    "normalize_input",
    "normalize_scan",
    "strip_symbology",
    "DecodeIssue",
    "Element",
    "InputFormat",
    "IssueCode",
    "detect_format",
    "tokenize",
    "tokenize_bracketed",
    "tokenize_raw",
    "DecodedRecord",
    "DecoderOptions",
    "FieldMapper",
    "GS1Decoder",
    "is_valid",
    "parse",
    "parse_many",
]
