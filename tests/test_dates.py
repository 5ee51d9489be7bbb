"""
Tests for GS1 date normalization.
"""

from datetime import date, datetime

import pytest

from gs1_decoder import normalize_gs1_date, to_gs1_date
from gs1_decoder.validators import validate_gs1_date


class TestNormalizeDate:

    def test_basic(self):
        assert normalize_gs1_date("251231") == "2025-12-31"

    def test_five_digits(self):
        assert normalize_gs1_date("25123") is None

    @pytest.mark.parametrize("value", ["", "2512311", "25AB31", "25-1-3", "２５１２３１", None])
    def test_not_six_ascii_digits(self, value):
        assert normalize_gs1_date(value) is None

    def test_year_is_2000_based(self):
        assert normalize_gs1_date("991231") == "2099-12-31"
        assert normalize_gs1_date("000101") == "2000-01-01"

    def test_custom_century(self):
        assert normalize_gs1_date("991231", century=1900) == "1999-12-31"

    @pytest.mark.parametrize("value", ["250001", "251301", "250431", "250229", "251232"])
    def test_calendar_invalid(self, value):
        assert normalize_gs1_date(value) is None

    def test_leap_year(self):
        assert normalize_gs1_date("240229") == "2024-02-29"

    @pytest.mark.parametrize("value", ["250100", "240200", "250400"])
    def test_day_zero_has_no_iso_form(self, value):
        assert normalize_gs1_date(value) is None


class TestValidateDate:

    def test_meta(self):
        result = validate_gs1_date("280806")
        assert result.valid
        assert result.meta["year"] == 2028
        assert result.meta["month"] == 8
        assert result.meta["day"] == 6
        assert result.meta["iso_date"] == "2028-08-06"

    def test_day_unspecified_flag(self):
        result = validate_gs1_date("280800")
        assert result.valid
        assert result.meta["day_unspecified"] is True
        assert result.meta["month"] == 8
        assert "day" not in result.meta
        assert "iso_date" not in result.meta

    def test_day_zero_in_invalid_month(self):
        assert not validate_gs1_date("281300").valid

    def test_invalid_month_error(self):
        result = validate_gs1_date("281301")
        assert not result.valid
        assert "month" in result.errors[0].lower()


class TestToGS1Date:

    def test_iso_string(self):
        assert to_gs1_date("2025-12-31") == "251231"

    def test_date_object(self):
        assert to_gs1_date(date(2028, 8, 6)) == "280806"

    def test_datetime_object(self):
        assert to_gs1_date(datetime(2028, 8, 6, 14, 30)) == "280806"

    def test_round_trip(self):
        assert normalize_gs1_date(to_gs1_date("2031-01-15")) == "2031-01-15"

    def test_invalid_iso(self):
        with pytest.raises(ValueError):
            to_gs1_date("31.12.2025")
