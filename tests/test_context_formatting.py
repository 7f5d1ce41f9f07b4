"""Tests for precision contexts, angle modes and regional number formats."""

import decimal
from decimal import Decimal

import pytest

from bigcalc_pkg.context import AngleMode, PrecisionContext
from bigcalc_pkg.formatting import (
    FRENCH,
    GERMAN,
    SWISS,
    US,
    FormatProfile,
    detect_profile,
    parse_decimal,
    render,
)
from bigcalc_pkg.number import PrecisionNumber
from bigcalc_pkg.types import ValidationError


class TestPrecisionContext:
    def test_default(self):
        """Test the value used when nothing is given."""
        ctx = PrecisionContext.default()
        assert ctx.precision == 50
        assert ctx.rounding == decimal.ROUND_HALF_UP

    def test_coerce(self):
        """Test that None, an int and a context all coerce."""
        assert PrecisionContext.coerce(None) == PrecisionContext.default()
        assert PrecisionContext.coerce(12).precision == 12
        ctx = PrecisionContext(7, decimal.ROUND_DOWN)
        assert PrecisionContext.coerce(ctx) is ctx

    @pytest.mark.parametrize("precision", [0, -5, 2.5, "10", True])
    def test_invalid_precision(self, precision):
        """Test that non-positive or non-int precision returns INVALID_CONTEXT."""
        with pytest.raises(ValidationError) as exc:
            PrecisionContext(precision)
        assert exc.value.code == "INVALID_CONTEXT"

    def test_invalid_rounding(self):
        """Test that an unknown rounding mode is rejected."""
        with pytest.raises(ValidationError):
            PrecisionContext(10, "ROUND_SIDEWAYS")

    def test_rounding_mode_is_applied(self):
        """Test that the rounding mode reaches the decimal context."""
        down = PrecisionContext(3, decimal.ROUND_DOWN).decimal_context()
        up = PrecisionContext(3, decimal.ROUND_UP).decimal_context()
        assert down.divide(2, 3) == Decimal("0.666")
        assert up.divide(2, 3) == Decimal("0.667")

    def test_extra_digits_and_epsilon(self):
        """Test with_extra_digits() and epsilon()."""
        ctx = PrecisionContext(10).with_extra_digits(5)
        assert ctx.precision == 15
        assert ctx.epsilon() == Decimal("1e-15")
        assert ctx.epsilon(2) == Decimal("1e-17")

    def test_contexts_are_hashable_values(self):
        """Test that equal contexts hash alike."""
        assert PrecisionContext(10) == PrecisionContext(10)
        assert len({PrecisionContext(10), PrecisionContext(10)}) == 1


class TestAngleMode:
    @pytest.mark.parametrize("text", ["DEG", "deg", "DEGREES", AngleMode.DEGREES])
    def test_degrees(self, text):
        """Test the spellings accepted for degrees."""
        assert AngleMode.coerce(text) is AngleMode.DEGREES

    def test_radians(self):
        """Test the lowercase radians spelling."""
        assert AngleMode.coerce("rad") is AngleMode.RADIANS

    def test_default(self):
        """Test the value used when nothing is given."""
        assert AngleMode.coerce(None) is AngleMode.DEGREES

    def test_unknown(self):
        """Test that an unknown mode returns INVALID_ANGLE_MODE."""
        with pytest.raises(ValidationError) as exc:
            AngleMode.coerce("GRAD")
        assert exc.value.code == "INVALID_ANGLE_MODE"


class TestFormatProfiles:
    @pytest.mark.parametrize(
        "text,profile,expected",
        [
            ("1,234.5", US, "1234.5"),
            ("1.234,5", GERMAN, "1234.5"),
            ("1 234,5", FRENCH, "1234.5"),
            ("1'234.5", SWISS, "1234.5"),
            ("-0,25", GERMAN, "-0.25"),
            ("42", US, "42"),
            ("5.", US, "5.0"),
        ],
    )
    def test_parse_with_profile(self, text, profile, expected):
        """Test parsing in an explicit profile."""
        assert parse_decimal(text, profile) == Decimal(expected)

    def test_detection(self):
        """Test that the profile is detected from the separators."""
        assert detect_profile("1,234.5") is US
        assert detect_profile("1.234,5") is GERMAN
        assert detect_profile("1 234,5") is FRENCH
        assert detect_profile("1'234.5") is SWISS

    @pytest.mark.parametrize("separator", [" ", "\u00a0", "\u202f"])
    def test_french_accepts_each_space(self, separator):
        """French grouping may be a plain, no-break or narrow no-break space."""
        text = f"1{separator}234{separator}567,25"
        assert detect_profile(text) is FRENCH
        assert parse_decimal(text, FRENCH) == Decimal("1234567.25")

    def test_french_renders_narrow_space(self):
        """Rendering uses the narrow no-break space."""
        rendered = render(Decimal("1234567.5"), FRENCH, grouping=True)
        assert rendered == "1\u202f234\u202f567,5"

    def test_scientific_text(self):
        """Test that exponent notation bypasses profiles."""
        assert parse_decimal("1.5e-3") == Decimal("0.0015")
        assert parse_decimal("-2E+2") == Decimal("-200")

    @pytest.mark.parametrize("text", ["", "abc", "1,2,3", "1..2", "--1"])
    def test_invalid_text(self, text):
        """Test that malformed text returns INVALID_NUMBER."""
        with pytest.raises(ValidationError) as exc:
            parse_decimal(text)
        assert exc.value.code == "INVALID_NUMBER"

    def test_wrong_profile(self):
        """Test that text in another profile is rejected."""
        with pytest.raises(ValidationError):
            parse_decimal("1.234,5", US)

    def test_separators_must_differ(self):
        """Test that equal separators are rejected."""
        with pytest.raises(ValidationError):
            FormatProfile("Broken", ".", ".")


class TestRender:
    def test_never_scientific(self):
        """Test that rendering never uses exponent notation."""
        assert render(Decimal("1E+5")) == "100000"
        assert render(Decimal("1E-7")) == "0.0000001"

    def test_grouping(self):
        """Test grouped rendering per profile."""
        assert render(Decimal("1234567.891"), US, grouping=True) == "1,234,567.891"
        assert render(Decimal("-1234567.5"), GERMAN, grouping=True) == "-1.234.567,5"
        assert render(Decimal("123"), SWISS, grouping=True) == "123"

    def test_number_keeps_profile(self):
        """Test that arithmetic results keep the operand profile."""
        number = PrecisionNumber("1.234,5", profile=GERMAN)
        assert str(number) == "1234,5"
        assert number.format(grouping=True) == "1.234,5"
        assert number.to_plain_string() == "1234.5"
        assert str(number + 1) == "1235,5"

    def test_profile_does_not_affect_equality(self):
        """Test that equality ignores the profile."""
        assert PrecisionNumber("1,5", profile=GERMAN) == PrecisionNumber("1.5")
