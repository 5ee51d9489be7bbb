"""
GS1 element string tokenizers.

Two input shapes are handled:

- Bracketed: ``(01)04012345678901(17)251231(10)ABC123``. Every field
  boundary is explicit.
- Raw: ``010401234567890117251231<GS>10ABC123``. Boundaries come from the
  AI table: fixed-length AIs consume exactly N characters, variable-length
  AIs run until a separator, the end of input, or the next position where
  an admissible AI begins.

Raw-mode boundary detection without a separator is a finite-lookahead
heuristic. It is correct for the common layouts (a single trailing batch or
serial field) but cannot disambiguate two variable-length fields placed
back to back without a separator.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from .ai_registry import AIRegistry, DEFAULT_REGISTRY
from .normalizer import SEPARATOR

logger = logging.getLogger(__name__)


class InputFormat(str, Enum):
    """Shape of a normalized element string."""
    BRACKETED = "bracketed"
    RAW = "raw"


class IssueCode(str, Enum):
    """Soft failure codes. None of them stop the caller."""
    EMPTY_INPUT = "EMPTY_INPUT"
    UNKNOWN_AI = "UNKNOWN_AI"
    TRUNCATED_DATA = "TRUNCATED_DATA"
    INVALID_DATE = "INVALID_DATE"


@dataclass(frozen=True)
class DecodeIssue:
    """A soft failure found while decoding."""
    code: IssueCode
    message: str
    position: Optional[int] = None
    ai: Optional[str] = None


@dataclass(frozen=True)
class Element:
    """
    One (AI, value) pair.

    Attributes:
        ai: Application Identifier code
        value: Data exactly as it appeared after the AI
        start: Index of the AI code in the normalized string
        end: Index just past the value (separator excluded)
        known: False for AIs missing from the registry (bracket mode only)
    """
    ai: str
    value: str
    start: int = 0
    end: int = 0
    known: bool = True


@dataclass
class TokenizeResult:
    """Elements in input order plus whatever could not be consumed."""
    elements: List[Element] = field(default_factory=list)
    remainder: str = ""
    issues: List[DecodeIssue] = field(default_factory=list)


_BRACKET_MARKER = re.compile(r'\((\d{2,4})\)', re.ASCII)


def detect_format(normalized: str, pos: int = 0) -> InputFormat:
    """BRACKETED iff ``(`` + 2-4 digits + ``)`` starts at ``pos``."""
    if _BRACKET_MARKER.match(normalized, pos):
        return InputFormat.BRACKETED
    return InputFormat.RAW


def tokenize_bracketed(
    text: str,
    registry: AIRegistry = DEFAULT_REGISTRY,
) -> TokenizeResult:
    """
    Split ``(AI)value(AI)value...`` into elements.

    Markers are trusted even for AIs missing from the registry; those are
    kept as elements with ``known=False``. A value runs to the next ``(``
    or the end of input. Stray separators inside a value are dropped.
    """
    result = TokenizeResult()
    pos = 0

    while pos < len(text):
        match = _BRACKET_MARKER.match(text, pos)
        if not match:
            logger.debug("No AI marker at position %d, stopping", pos)
            result.remainder = text[pos:]
            result.issues.append(DecodeIssue(
                code=IssueCode.UNKNOWN_AI,
                message=f"Expected (AI) marker at position {pos}",
                position=pos,
            ))
            break

        ai = match.group(1)
        value_start = match.end()
        next_paren = text.find('(', value_start)
        value_end = len(text) if next_paren == -1 else next_paren
        value = text[value_start:value_end].replace(SEPARATOR, '')

        result.elements.append(Element(
            ai=ai,
            value=value,
            start=pos,
            end=value_end,
            known=ai in registry,
        ))
        pos = value_end

    return result


def _scan_variable(text: str, pos: int, registry: AIRegistry) -> int:
    """End index of a variable-length value starting at ``pos``."""
    end = pos
    while end < len(text):
        if text[end] == SEPARATOR:
            break
        # An admissible AI ends the value even at its first character
        if registry.boundary_at(text, end) is not None:
            break
        end += 1
    return end


def tokenize_raw(
    text: str,
    registry: AIRegistry = DEFAULT_REGISTRY,
) -> TokenizeResult:
    """
    Tokenize an unbracketed element string.

    Parsing stops at the first position where no registered AI matches;
    everything from there on is returned untouched as the remainder.
    """
    result = TokenizeResult()
    pos = 0

    while pos < len(text):
        # Leading FNC1 and superfluous separators carry no data
        if text[pos] == SEPARATOR:
            pos += 1
            continue

        descriptor = registry.match(text, pos)
        if descriptor is None:
            logger.debug("Unknown AI at position %d: %r", pos, text[pos:pos + 4])
            result.remainder = text[pos:]
            result.issues.append(DecodeIssue(
                code=IssueCode.UNKNOWN_AI,
                message=f"Unknown AI at position {pos}: {text[pos:pos + 4]!r}",
                position=pos,
            ))
            break

        ai_start = pos
        value_start = pos + len(descriptor.code)

        if descriptor.is_fixed:
            value_end = min(value_start + descriptor.length, len(text))
            # Deliberately not "exactly N characters": a separator ends the
            # fixed field early and is never taken as data (TRUNCATED_DATA)
            separator_at = text.find(SEPARATOR, value_start, value_end)
            if separator_at != -1:
                value_end = separator_at
            if value_end - value_start < descriptor.length:
                result.issues.append(DecodeIssue(
                    code=IssueCode.TRUNCATED_DATA,
                    message=(
                        f"AI({descriptor.code}) expects {descriptor.length} "
                        f"characters, got {value_end - value_start}"
                    ),
                    position=value_start,
                    ai=descriptor.code,
                ))
            pos = value_end
        else:
            value_end = _scan_variable(text, value_start, registry)
            pos = value_end
            if pos < len(text) and text[pos] == SEPARATOR:
                pos += 1

        result.elements.append(Element(
            ai=descriptor.code,
            value=text[value_start:value_end],
            start=ai_start,
            end=value_end,
        ))

    return result


def tokenize(
    normalized: str,
    registry: AIRegistry = DEFAULT_REGISTRY,
) -> TokenizeResult:
    """Detect the input format once and dispatch to the matching tokenizer."""
    if detect_format(normalized) is InputFormat.BRACKETED:
        return tokenize_bracketed(normalized, registry)
    return tokenize_raw(normalized, registry)
