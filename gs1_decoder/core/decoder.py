"""
GS1 Barcode Decoder

Turns a raw scanned string into a DecodedRecord:

    raw -> normalize_input -> detect_format -> tokenize -> FieldMapper

Decoding never raises on data. Unknown AIs, truncated fields and dates that
cannot be normalized become DecodeIssue entries on the record, and whatever
could be decoded up to that point is still returned.

Key rules:
- Each field holds the value of the last occurrence of its AI
- Dates are ISO YYYY-MM-DD when possible, raw digits otherwise
- The original input is always kept in ``raw``
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .ai_registry import AIRegistry, DEFAULT_REGISTRY
from .normalizer import (
    DEFAULT_STAND_INS,
    SEPARATOR,
    normalize_input,
    normalize_scan,
    symbology_name as describe_symbology,
)
from .tokenizer import (
    DecodeIssue,
    Element,
    InputFormat,
    IssueCode,
    detect_format,
    tokenize_bracketed,
    tokenize_raw,
)
from ..expiry import ExpiryStatus, expiry_status
from ..validators.dates import DEFAULT_CENTURY, validate_gs1_date

logger = logging.getLogger(__name__)


# AI code -> DecodedRecord attribute
FIELD_MAP: Dict[str, str] = {
    "00": "sscc",
    "01": "gtin",
    "10": "batch_number",
    "11": "production_date",
    "17": "expiry_date",
    "21": "serial_number",
}

DATE_AIS = frozenset({"11", "17"})

# DecodedRecord attribute -> JSON key used by the inventory forms
JSON_KEYS: Dict[str, str] = {
    "gtin": "gtin",
    "batch_number": "batchNumber",
    "expiry_date": "expiryDate",
    "serial_number": "serialNumber",
    "sscc": "sscc",
    "production_date": "productionDate",
}


@dataclass
class DecoderOptions:
    """
    Configuration options for decoding.

    Attributes:
        registry: AI table used by both tokenizers
        stand_ins: Strings rewritten to the canonical separator
        century: Added to the two-digit year of GS1 dates
        near_expiry_days: Days before expiry that count as near expiry
    """
    registry: AIRegistry = DEFAULT_REGISTRY
    stand_ins: Tuple[str, ...] = DEFAULT_STAND_INS
    century: int = DEFAULT_CENTURY
    near_expiry_days: int = 30


@dataclass(frozen=True)
class DecodedRecord:
    """
    Structured result of decoding one scanned string.

    Attributes:
        raw: Original input, unmodified
        gtin: AI(01)
        batch_number: AI(10)
        expiry_date: AI(17), ISO date or raw digits
        serial_number: AI(21)
        sscc: AI(00)
        production_date: AI(11), ISO date or raw digits
        normalized: Input after separator/whitespace/symbology normalization
        format: Detected input format
        symbology: AIM identifier stripped from the front, e.g. "]C1"
        elements: Every (AI, value) pair in input order
        remainder: Normalized text left unconsumed
        issues: Soft failures found while decoding
    """
    raw: str
    gtin: Optional[str] = None
    batch_number: Optional[str] = None
    expiry_date: Optional[str] = None
    serial_number: Optional[str] = None
    sscc: Optional[str] = None
    production_date: Optional[str] = None
    normalized: str = ""
    format: InputFormat = InputFormat.RAW
    symbology: Optional[str] = None
    elements: Tuple[Element, ...] = ()
    remainder: str = ""
    issues: Tuple[DecodeIssue, ...] = ()

    @property
    def is_empty(self) -> bool:
        """True when no field was decoded."""
        return all(getattr(self, name) is None for name in JSON_KEYS)

    @property
    def symbology_name(self) -> Optional[str]:
        """Readable name of the symbology, e.g. "GS1-128"."""
        return describe_symbology(self.symbology)

    @property
    def complete(self) -> bool:
        """True when the whole input was consumed without soft failures."""
        return not self.remainder and not self.issues

    def fields(self) -> Dict[str, str]:
        """Decoded fields by attribute name, unset fields omitted."""
        return {
            name: getattr(self, name)
            for name in JSON_KEYS
            if getattr(self, name) is not None
        }

    def to_dict(self) -> Dict[str, Any]:
        """camelCase representation consumed by the inventory forms."""
        data: Dict[str, Any] = {
            JSON_KEYS[name]: value for name, value in self.fields().items()
        }
        data["raw"] = self.raw
        return data


class FieldMapper:
    """
    Assigns (AI, value) pairs to record fields.

    Mapping is overwrite-on-insert: a recurring AI replaces the earlier
    value, it never accumulates.
    """

    def __init__(self, century: int = DEFAULT_CENTURY):
        self.century = century
        self._values: Dict[str, str] = {}
        self.issues: List[DecodeIssue] = []

    def add(self, element: Element) -> None:
        name = FIELD_MAP.get(element.ai)
        if name is None:
            return

        value = element.value
        if element.ai in DATE_AIS:
            checked = validate_gs1_date(value, self.century)
            if not checked.valid:
                self.issues.append(DecodeIssue(
                    code=IssueCode.INVALID_DATE,
                    message=f"AI({element.ai}) value {value!r} is not a YYMMDD date",
                    position=element.start,
                    ai=element.ai,
                ))
            elif "iso_date" in checked.meta:
                value = checked.meta["iso_date"]

        self._values[name] = value

    def values(self) -> Dict[str, str]:
        return dict(self._values)


class GS1Decoder:
    """
    Main decoder class.

    Instances hold only read-only configuration and can be shared between
    threads.
    """

    def __init__(self, options: Optional[DecoderOptions] = None):
        self.options = options or DecoderOptions()

    @property
    def registry(self) -> AIRegistry:
        return self.options.registry

    def normalize(self, barcode: str) -> str:
        return normalize_input(barcode, self.options.stand_ins)

    def parse(self, barcode: Any) -> DecodedRecord:
        """
        Decode a scanned string.

        Args:
            barcode: Raw scanner output

        Returns:
            DecodedRecord; for input that is not GS1 only ``raw`` is set

        Examples:
            >>> record = GS1Decoder().parse("(01)04012345678901(17)251231(10)ABC123")
            >>> record.gtin, record.expiry_date, record.batch_number
            ('04012345678901', '2025-12-31', 'ABC123')
        """
        raw = _coerce(barcode)
        normalized, symbology = normalize_scan(raw, self.options.stand_ins)

        if not normalized.strip(SEPARATOR):
            return DecodedRecord(
                raw=raw,
                normalized=normalized,
                symbology=symbology,
                issues=(DecodeIssue(
                    code=IssueCode.EMPTY_INPUT,
                    message="Empty input after normalization",
                ),),
            )

        input_format = detect_format(normalized)
        if input_format is InputFormat.BRACKETED:
            tokens = tokenize_bracketed(normalized, self.registry)
        else:
            tokens = tokenize_raw(normalized, self.registry)

        mapper = FieldMapper(self.options.century)
        for element in tokens.elements:
            mapper.add(element)

        issues = tuple(tokens.issues + mapper.issues)
        if issues:
            logger.debug(
                "Decoded %r with %d issue(s): %s",
                raw, len(issues), ", ".join(i.code.value for i in issues),
            )

        return DecodedRecord(
            raw=raw,
            normalized=normalized,
            format=input_format,
            symbology=symbology,
            elements=tuple(tokens.elements),
            remainder=tokens.remainder,
            issues=issues,
            **mapper.values(),
        )

    def is_valid(self, barcode: Any) -> bool:
        """
        Cheap check whether a scan looks like GS1 data.

        True if, after normalization, the input starts with an ``(AI)``
        marker or with a registered AI. Advisory only: parse() is safe to
        call either way.
        """
        normalized = self.normalize(_coerce(barcode)).lstrip(SEPARATOR)
        if not normalized:
            return False
        if detect_format(normalized) is InputFormat.BRACKETED:
            return True
        return self.registry.match(normalized) is not None

    def parse_many(self, barcodes: Iterable[Any]) -> List[DecodedRecord]:
        """Decode several scans; records are independent of each other."""
        return [self.parse(barcode) for barcode in barcodes]

    def expiry_status(
        self,
        record: DecodedRecord,
        today: Optional[date] = None,
    ) -> ExpiryStatus:
        """Classify the record's expiry date using ``near_expiry_days``."""
        return expiry_status(
            record.expiry_date,
            near_days=self.options.near_expiry_days,
            today=today,
        )


def _coerce(barcode: Any) -> str:
    if barcode is None:
        return ""
    if isinstance(barcode, (bytes, bytearray)):
        return bytes(barcode).decode("latin-1")
    return barcode if isinstance(barcode, str) else str(barcode)


_default_decoder = GS1Decoder()


def parse(barcode: Any, *, options: Optional[DecoderOptions] = None) -> DecodedRecord:
    """
    Decode a GS1 barcode string.

    Main entry point for the decoder.

    Examples:
        >>> parse("0104012345678901").gtin
        '04012345678901'
    """
    decoder = GS1Decoder(options) if options else _default_decoder
    return decoder.parse(barcode)


def is_valid(barcode: Any, *, options: Optional[DecoderOptions] = None) -> bool:
    """Advisory check whether ``barcode`` looks like a GS1 element string."""
    decoder = GS1Decoder(options) if options else _default_decoder
    return decoder.is_valid(barcode)


def parse_many(
    barcodes: Iterable[Any],
    *,
    options: Optional[DecoderOptions] = None,
) -> List[DecodedRecord]:
    decoder = GS1Decoder(options) if options else _default_decoder
    return decoder.parse_many(barcodes)
