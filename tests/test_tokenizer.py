"""
Tests for format detection and both tokenizers.
"""

import pytest

from gs1_decoder import SEPARATOR, AIDescriptor, AIRegistry, Element, InputFormat, IssueCode
from gs1_decoder.core.tokenizer import (
    detect_format,
    tokenize,
    tokenize_bracketed,
    tokenize_raw,
)


def pairs(result):
    return [(e.ai, e.value) for e in result.elements]


class TestDetectFormat:

    @pytest.mark.parametrize("text", ["(01)0401", "(10)A", "(8020)X", "(99)"])
    def test_bracketed(self, text):
        assert detect_format(text) is InputFormat.BRACKETED

    @pytest.mark.parametrize("text", ["0104012345678901", "", "(1)x", "(12345)x", "(AB)x", "01(10)A"])
    def test_raw(self, text):
        assert detect_format(text) is InputFormat.RAW

    def test_at_position(self):
        assert detect_format("01(10)A", 2) is InputFormat.BRACKETED


class TestBracketTokenizer:

    def test_basic(self, bracketed):
        result = tokenize_bracketed(bracketed)
        assert pairs(result) == [("01", "04012345678901"), ("17", "251231"), ("10", "ABC123")]
        assert result.remainder == ""
        assert result.issues == []

    def test_positions(self):
        result = tokenize_bracketed("(01)04012345678901(10)A")
        assert result.elements[0] == Element("01", "04012345678901", 0, 18)
        assert result.elements[1] == Element("10", "A", 18, 23)

    def test_unregistered_ai_kept_as_opaque(self):
        result = tokenize_bracketed("(240)REF-77(10)ABC")
        assert pairs(result) == [("240", "REF-77"), ("10", "ABC")]
        assert result.elements[0].known is False
        assert result.elements[1].known is True

    def test_fixed_length_not_enforced(self):
        """Explicit markers are trusted; the value is whatever they enclose."""
        result = tokenize_bracketed("(01)123(17)2512")
        assert pairs(result) == [("01", "123"), ("17", "2512")]

    def test_separator_dropped_from_value(self):
        result = tokenize_bracketed("(10)ABC" + SEPARATOR + "(17)251231")
        assert pairs(result) == [("10", "ABC"), ("17", "251231")]

    def test_empty_value(self):
        assert pairs(tokenize_bracketed("(10)(21)X")) == [("10", ""), ("21", "X")]

    def test_malformed_marker_stops(self):
        result = tokenize_bracketed("(01)04012345678901(XY)foo")
        assert pairs(result) == [("01", "04012345678901")]
        assert result.remainder == "(XY)foo"
        assert result.issues[0].code is IssueCode.UNKNOWN_AI
        assert result.issues[0].position == 18


class TestRawTokenizer:

    def test_fixed_then_variable(self, raw_with_separator):
        result = tokenize_raw(raw_with_separator)
        assert pairs(result) == [("01", "04012345678901"), ("17", "251231"), ("10", "ABC123")]
        assert result.remainder == ""

    def test_fixed_never_over_consumes(self):
        result = tokenize_raw("0104012345678901")
        assert pairs(result) == [("01", "04012345678901")]
        assert result.elements[0].start == 0
        assert result.elements[0].end == 16

    def test_separator_not_part_of_value(self):
        result = tokenize_raw("10ABC" + SEPARATOR + "21XYZ")
        assert pairs(result) == [("10", "ABC"), ("21", "XYZ")]

    def test_variable_ends_at_admissible_ai(self):
        result = tokenize_raw("10ABC17251231")
        assert pairs(result) == [("10", "ABC"), ("17", "251231")]

    def test_variable_ends_at_gtin(self):
        result = tokenize_raw("10LOT0104012345678901")
        assert pairs(result) == [("10", "LOT"), ("01", "04012345678901")]

    def test_short_code_lookalike_not_split(self):
        """'17' near the end lacks the 6 characters an expiry date needs."""
        assert pairs(tokenize_raw("1017A9")) == [("10", "17A9")]
        assert pairs(tokenize_raw("10AB17123")) == [("10", "AB17123")]

    def test_serial_with_zero_run(self):
        """'00' and '01' inside a serial are too short to be SSCC or GTIN."""
        assert pairs(tokenize_raw("21SN0001")) == [("21", "SN0001")]

    def test_empty_variable_value_before_admissible_ai(self):
        assert pairs(tokenize_raw("1017251231")) == [("10", ""), ("17", "251231")]

    def test_empty_lot_does_not_swallow_gtin(self):
        result = tokenize_raw("10" + "0104012345678901")
        assert pairs(result) == [("10", ""), ("01", "04012345678901")]
        assert result.remainder == ""
        assert result.issues == []

    def test_leading_and_superfluous_separators(self):
        text = SEPARATOR + "0104012345678901" + SEPARATOR + "17251231"
        assert pairs(tokenize_raw(text)) == [("01", "04012345678901"), ("17", "251231")]

    def test_truncated_fixed(self):
        result = tokenize_raw("01040123")
        assert pairs(result) == [("01", "040123")]
        assert result.issues[0].code is IssueCode.TRUNCATED_DATA
        assert result.issues[0].ai == "01"

    def test_separator_inside_fixed_field(self):
        result = tokenize_raw("01040123" + SEPARATOR + "10ABC")
        assert pairs(result) == [("01", "040123"), ("10", "ABC")]
        assert result.issues[0].code is IssueCode.TRUNCATED_DATA

    def test_unknown_ai_keeps_remainder(self):
        result = tokenize_raw("010401234567890199XYZ")
        assert pairs(result) == [("01", "04012345678901")]
        assert result.remainder == "99XYZ"
        assert result.issues[0].code is IssueCode.UNKNOWN_AI
        assert result.issues[0].position == 16

    def test_nothing_recognized(self):
        result = tokenize_raw("hello")
        assert result.elements == []
        assert result.remainder == "hello"

    def test_custom_registry_four_digit_code(self):
        registry = AIRegistry([
            AIDescriptor("10", "Lot"),
            AIDescriptor("7003", "Expiry date and time", 10),
        ])
        result = tokenize_raw("70032512311200" + "10A", registry)
        assert pairs(result) == [("7003", "2512311200"), ("10", "A")]


class TestTokenizeDispatch:

    def test_bracketed(self, bracketed):
        assert len(tokenize(bracketed).elements) == 3

    def test_raw(self, raw_with_separator):
        assert len(tokenize(raw_with_separator).elements) == 3
