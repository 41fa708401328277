"""Tests for dimension parsing."""

import pytest

from boardmatch.dimensions import (
    normalize_dimensions,
    parse_dimension_string,
    parse_fractional_inches,
    parse_volume_string,
    strip_dimensions,
)


# ---------------------------------------------------------------------------
# normalize_dimensions
# ---------------------------------------------------------------------------


class TestNormalizeDimensions:
    @pytest.mark.parametrize("text, expected", [
        ("5'8", 68),
        ("5'8\"", 68),
        ("6'0", 72),
        ("5'", 60),
        ("5ft 8in", 68),
        ("5 ft 8 in", 68),
        ("6ft", 72),
        ("5-8", 68),
        ("6-0", 72),
        ("5-10", 70),
        ("5'8 x 19.5 x 2.5", 68),
        ("5'8\" x 20 1/4 x 2 1/2", 68),
        ("6'0 x 19 x 2.25", 72),
        ("5'8 1/2", 68.5),
        ("5'10 1/4", 70.25),
        ("6'2 3/4\"", 74.75),
        ("5'10 x 20 3/4 x 2 5/8", 70),
        ("5'6 x 20 x 2.35", 66),
        ("5'11 x 18 7/8 x 2 3/8", 71),
        ("5'6\" x 20.5 x 2.65", 66),
    ])
    def test_lengths(self, text, expected):
        result = normalize_dimensions(text)
        assert result is not None
        assert result.length_inches == expected
        assert result.original == text

    @pytest.mark.parametrize("text", ["", "   ", "abc", "123"])
    def test_unparseable_returns_none(self, text):
        assert normalize_dimensions(text) is None

    def test_zero_length_returns_none(self):
        assert normalize_dimensions("0'0") is None

    def test_length_inside_title(self):
        result = normalize_dimensions("Firewire Seaside 5'8 x 20 1/4 x 2 1/2 - Helium")
        assert result.length_inches == 68

    def test_curly_quotes(self):
        assert normalize_dimensions("5’8”").length_inches == 68

    def test_original_is_trimmed(self):
        assert normalize_dimensions("  5'8  ").original == "5'8"

    def test_decade_in_title(self):
        assert normalize_dimensions("Retro 70's Fish 5'8").length_inches == 68
        assert normalize_dimensions("Retro 70's Fish") is None

    def test_implausible_dash_ignored(self):
        assert normalize_dimensions("DT-2") is None
        assert normalize_dimensions("2-1") is None

    def test_dash_skips_implausible_first_hit(self):
        assert normalize_dimensions("Model 2-1 5-6").length_inches == 66


# ---------------------------------------------------------------------------
# parse_dimension_string / parse_fractional_inches
# ---------------------------------------------------------------------------


class TestParseDimensionString:
    def test_full_block(self):
        dims = parse_dimension_string("5'8 x 20 13/16 x 2 1/4")
        assert dims.length_feet == 5
        assert dims.length_inches == 8
        assert dims.width_inches == pytest.approx(20.8125)
        assert dims.thickness_inches == 2.25
        assert dims.total_length_inches == 68

    def test_two_part_block(self):
        dims = parse_dimension_string("5'8 x 20 13/16")
        assert dims.width_inches == pytest.approx(20.8125)
        assert dims.thickness_inches is None

    def test_length_only(self):
        dims = parse_dimension_string("6'2\"")
        assert (dims.length_feet, dims.length_inches) == (6, 2)
        assert dims.width_inches is None

    def test_uppercase_separator(self):
        dims = parse_dimension_string("5'10 X 19 1/8 X 2 3/8\"")
        assert dims.total_length_inches == 70
        assert dims.width_inches == pytest.approx(19.125)
        assert dims.thickness_inches == pytest.approx(2.375)

    def test_thickness_not_merged_with_trailing_number(self):
        dims = parse_dimension_string("5'11 x 18 7/8 x 2 3/8 2020")
        assert dims.total_length_inches == 71
        assert dims.width_inches == pytest.approx(18.875)
        assert dims.thickness_inches == pytest.approx(2.375)

    def test_inch_marks_on_width(self):
        dims = parse_dimension_string("5'6\" x 20.5\" x 2.65\"")
        assert dims.width_inches == 20.5
        assert dims.thickness_inches == 2.65

    def test_decade_is_not_a_length(self):
        dims = parse_dimension_string("Retro 70's Fish 5'8")
        assert dims.total_length_inches == 68

    def test_none_for_blank(self):
        assert parse_dimension_string("") is None
        assert parse_dimension_string(None) is None


class TestParseFractionalInches:
    def test_mixed_number(self):
        assert parse_fractional_inches("20 13/16") == pytest.approx(20.8125)

    def test_bare_fraction(self):
        assert parse_fractional_inches("13/16") == pytest.approx(0.8125)

    def test_decimal(self):
        assert parse_fractional_inches("19.5") == 19.5

    def test_zero_denominator(self):
        assert parse_fractional_inches("1/0") is None

    def test_invalid(self):
        assert parse_fractional_inches("") is None
        assert parse_fractional_inches("abc") is None


# ---------------------------------------------------------------------------
# strip_dimensions
# ---------------------------------------------------------------------------


class TestStripDimensions:
    def test_removes_full_block(self):
        assert strip_dimensions("Seaside 5'8 x 20 1/4 x 2 1/2 - Helium").split() == ["Seaside", "-", "Helium"]

    def test_removes_every_occurrence(self):
        assert strip_dimensions("Seaside 5'8\" or 5'10\"").split() == ["Seaside", "or"]

    def test_removes_dash_length(self):
        assert strip_dimensions("Fishbeard 5-10").split() == ["Fishbeard"]

    def test_keeps_model_numbers(self):
        assert strip_dimensions("DT-2").strip() == "DT-2"


# ---------------------------------------------------------------------------
# parse_volume_string
# ---------------------------------------------------------------------------


class TestParseVolumeString:
    @pytest.mark.parametrize("text, expected", [
        ("28.8", 28.8),
        ("28.8L", 28.8),
        ("28.8 liters", 28.8),
        ("V28.8", 28.8),
        ("volume: 28.8", 28.8),
    ])
    def test_formats(self, text, expected):
        assert parse_volume_string(text) == expected

    def test_unparseable(self):
        assert parse_volume_string("") is None
        assert parse_volume_string("n/a") is None
