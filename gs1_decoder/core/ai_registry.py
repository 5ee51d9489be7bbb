"""
AI Registry for the GS1 decoder

Static table of the GS1 Application Identifiers the decoder understands,
with trie-backed longest-prefix lookup.

Reference: https://ref.gs1.org/ai/
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, Optional


class RegistryError(ValueError):
    """Raised when a registry is built from malformed descriptors."""


@dataclass(frozen=True)
class AIDescriptor:
    """
    Represents a single GS1 Application Identifier.

    Attributes:
        code: The Application Identifier code (2-4 digits)
        name: Human-readable name (diagnostics only)
        length: Fixed data length, or None for variable-length AIs
    """
    code: str
    name: str
    length: Optional[int] = None

    @property
    def is_fixed(self) -> bool:
        return self.length is not None

    @property
    def min_remaining(self) -> int:
        """Characters that must follow the code for this AI to start a field."""
        return self.length if self.length is not None else 1


class TrieNode:
    """Trie node for AI prefix matching."""
    __slots__ = ['children', 'descriptor']

    def __init__(self):
        self.children: Dict[str, TrieNode] = {}
        self.descriptor: Optional[AIDescriptor] = None


MIN_CODE_LENGTH = 2
MAX_CODE_LENGTH = 4


class AIRegistry:
    """
    Immutable AI lookup table.

    Lookups at a cursor position always prefer the longest registered code
    (4 -> 3 -> 2 digits), so a 4-digit AI is never mis-resolved through a
    registered 2-digit prefix.
    """

    def __init__(self, descriptors: Iterable[AIDescriptor]):
        self._root = TrieNode()
        self._entries: Dict[str, AIDescriptor] = {}
        for descriptor in descriptors:
            self._insert(descriptor)

    def _insert(self, descriptor: AIDescriptor) -> None:
        code = descriptor.code
        if not (code.isdigit() and code.isascii()):
            raise RegistryError(f"AI code must be numeric: {code!r}")
        if not MIN_CODE_LENGTH <= len(code) <= MAX_CODE_LENGTH:
            raise RegistryError(f"AI code must have 2-4 digits: {code!r}")
        if code in self._entries:
            raise RegistryError(f"Duplicate AI code: {code}")
        if descriptor.length is not None and descriptor.length <= 0:
            raise RegistryError(f"AI({code}) fixed length must be positive")

        node = self._root
        for char in code:
            node = node.children.setdefault(char, TrieNode())
        node.descriptor = descriptor
        self._entries[code] = descriptor

    def lookup(self, code: str) -> Optional[AIDescriptor]:
        """Get a descriptor by exact AI code."""
        return self._entries.get(code)

    def candidates(self, text: str, pos: int = 0) -> Iterator[AIDescriptor]:
        """Registered AIs starting at ``pos``, longest first."""
        node = self._root
        found = []
        for char in text[pos:pos + MAX_CODE_LENGTH]:
            node = node.children.get(char)
            if node is None:
                break
            if node.descriptor is not None:
                found.append(node.descriptor)
        return reversed(found)

    def match(self, text: str, pos: int = 0) -> Optional[AIDescriptor]:
        """Longest registered AI starting at ``pos``, or None."""
        return next(self.candidates(text, pos), None)

    def boundary_at(self, text: str, pos: int) -> Optional[AIDescriptor]:
        """
        First admissible AI starting at ``pos``.

        A candidate is admissible only if the text after its code is long
        enough for its data: N characters for fixed-length AIs, one for
        variable-length AIs.
        """
        for descriptor in self.candidates(text, pos):
            remaining = len(text) - pos - len(descriptor.code)
            if remaining >= descriptor.min_remaining:
                return descriptor
        return None

    def __contains__(self, code: object) -> bool:
        return code in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[AIDescriptor]:
        return iter(self._entries.values())


# Application Identifiers used on medical device packaging
DEFAULT_DESCRIPTORS = (
    AIDescriptor("00", "SSCC", 18),
    AIDescriptor("01", "GTIN", 14),
    AIDescriptor("10", "Batch/Lot Number"),
    AIDescriptor("11", "Production Date", 6),
    AIDescriptor("17", "Expiry Date", 6),
    AIDescriptor("21", "Serial Number"),
)

DEFAULT_REGISTRY = AIRegistry(DEFAULT_DESCRIPTORS)
