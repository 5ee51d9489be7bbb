"""
Input normalization for scanned GS1 strings.

Scanner firmware disagrees on how to transmit FNC1. Some emit the real
<GS> byte, others its name ("x1d", "\\x1d"), a tilde, or the visible
control picture. Everything is rewritten to a single canonical separator
before tokenization.
"""

from __future__ import annotations

import re
from typing import Iterable, Optional, Tuple

# ASCII 29, the transmitted form of FNC1
SEPARATOR = '\x1d'

# Textual stand-ins for the separator, matched case-insensitively
DEFAULT_STAND_INS: Tuple[str, ...] = (
    '\\x1d',     # escaped name, must win over the bare name
    'x1d',       # bare name
    '~',         # common keyboard-wedge replacement
    '\u241d',    # SYMBOL FOR GROUP SEPARATOR
)

# Symbology identifier names (ISO/IEC 15424)
SYMBOLOGY_NAMES = {
    ']C1': 'GS1-128',
    ']e0': 'GS1 DataBar',
    ']d2': 'GS1 DataMatrix',
    ']Q3': 'GS1 QR Code',
}

# str.isspace() is true for <GS>, so whitespace is spelled out
_WHITESPACE = re.compile(r'[ \t\r\n\f\v]+')
_AIM_PREFIX = re.compile(r'\].{2}', re.DOTALL)


def _build_stand_in_pattern(stand_ins: Iterable[str]) -> re.Pattern:
    # Longest first so "\x1d" is not split into "\" + "x1d"
    ordered = sorted(set(stand_ins), key=len, reverse=True)
    return re.compile('|'.join(re.escape(s) for s in ordered), re.IGNORECASE)


_DEFAULT_STAND_IN_PATTERN = _build_stand_in_pattern(DEFAULT_STAND_INS)


def strip_symbology(text: str) -> Tuple[str, Optional[str]]:
    """
    Strip leading AIM symbology identifiers (``]`` plus two characters).

    Identifiers are removed repeatedly so the result never starts with one.

    Returns:
        (stripped_text, identifier) where identifier is the first stripped
        prefix, or None
    """
    identifier = None
    match = _AIM_PREFIX.match(text)
    while match:
        if identifier is None:
            identifier = match.group(0)
        text = text[match.end():]
        match = _AIM_PREFIX.match(text)
    return text, identifier


def symbology_name(identifier: Optional[str]) -> Optional[str]:
    if identifier is None:
        return None
    return SYMBOLOGY_NAMES.get(identifier, identifier)


def normalize_scan(
    raw: str,
    stand_ins: Optional[Iterable[str]] = None,
) -> Tuple[str, Optional[str]]:
    """
    Canonicalize a scanned string.

    - Removes whitespace anywhere in the string
    - Rewrites every separator stand-in to SEPARATOR
    - Strips leading AIM symbology identifiers

    Returns:
        (normalized_text, identifier) where identifier is the first AIM
        prefix stripped, or None. The text is a fixed point: normalizing it
        again returns it unchanged.
    """
    if not raw:
        return '', None
    text = _WHITESPACE.sub('', raw)
    if stand_ins is None or stand_ins is DEFAULT_STAND_INS:
        pattern = _DEFAULT_STAND_IN_PATTERN
    else:
        pattern = _build_stand_in_pattern(stand_ins)
    text = pattern.sub(SEPARATOR, text)
    return strip_symbology(text)


def normalize_input(
    raw: str,
    stand_ins: Optional[Iterable[str]] = None,
) -> str:
    """normalize_scan() without the symbology identifier."""
    return normalize_scan(raw, stand_ins)[0]
