"""Tests for trigonometric, hyperbolic and radical functions, checked against SymPy."""

import logging
from decimal import Decimal

import pytest
import sympy as sp

from bigcalc_pkg import hyperbolic, radical, trigonometry
from bigcalc_pkg.basic import power
from bigcalc_pkg.context import AngleMode, PrecisionContext
from bigcalc_pkg.types import DomainError, ValidationError

CTX = PrecisionContext(40)


def close_to(value, reference, digits=35):
    """True if a PrecisionNumber agrees with a SymPy expression to `digits` places."""
    expected = Decimal(str(sp.N(reference, digits + 10)))
    return abs(value.value - expected) < Decimal(10) ** -digits


class TestTrigonometry:
    """Forward trigonometric functions in both angle modes."""

    @pytest.mark.parametrize(
        "angle,expected",
        [("0", "0"), ("30", "0.5"), ("90", "1"), ("180", "0"), ("-90", "-1"), ("390", "0.5")],
    )
    def test_exact_degree_sines(self, angle, expected):
        """Test that special degree angles give exact sines."""
        assert str(trigonometry.sin(angle, CTX, AngleMode.DEGREES)) == expected

    def test_exact_degree_cosines(self):
        """Test that special degree angles give exact cosines."""
        assert str(trigonometry.cos(60, CTX, "DEG")) == "0.5"
        assert str(trigonometry.cos(90, CTX, "DEG")) == "0"

    def test_radian_values(self):
        """Test sin, cos and tan in radians against SymPy."""
        assert close_to(trigonometry.sin(1, CTX, "RAD"), sp.sin(1))
        assert close_to(trigonometry.cos(2, CTX, "RAD"), sp.cos(2))
        assert close_to(trigonometry.tan("0.5", CTX, "RAD"), sp.tan(sp.Rational(1, 2)))

    def test_tan_and_cot_in_degrees(self):
        """Test tan and cot at special degree angles."""
        assert str(trigonometry.tan(45, CTX, "DEG")) == "1"
        assert str(trigonometry.cot(45, CTX, "DEG")) == "1"

    def test_poles(self):
        """Test that tan(90) and cot(180) return POLE."""
        with pytest.raises(DomainError) as exc:
            trigonometry.tan(90, CTX, "DEG")
        assert exc.value.code == "POLE"
        with pytest.raises(DomainError):
            trigonometry.cot(180, CTX, "DEG")


class TestInverseTrigonometry:
    @pytest.mark.parametrize("x,expected", [("0", "0"), ("1", "90"), ("-1", "-90"), ("0.5", "30")])
    def test_asin_degrees(self, x, expected):
        """Test asin in degrees."""
        assert str(trigonometry.asin(x, CTX, "DEG")) == expected

    def test_acos_degrees(self):
        """Test acos in degrees."""
        assert str(trigonometry.acos(1, CTX, "DEG")) == "0"
        assert str(trigonometry.acos(-1, CTX, "DEG")) == "180"

    def test_asin_acos_domain(self):
        """Test that arguments outside [-1, 1] return ARGUMENT_OUT_OF_RANGE."""
        with pytest.raises(DomainError):
            trigonometry.asin(2, CTX)
        with pytest.raises(DomainError):
            trigonometry.acos("1.5", CTX)

    @pytest.mark.parametrize("x", ["0.2", "1", "-1", "2", "-2", "1000", "0.999"])
    def test_atan_series_matches_reference(self, x):
        """Test the atan series against SymPy."""
        result = trigonometry.atan(x, CTX, "RAD")
        assert close_to(result, sp.atan(sp.Rational(x)))

    def test_atan_degrees(self):
        """Test atan in degrees, including a large argument."""
        assert str(trigonometry.atan(1, CTX, "DEG")) == "45"
        assert str(trigonometry.atan(-1, CTX, "DEG")) == "-45"
        assert str(trigonometry.atan(1000, CTX, "DEG").round_after_decimals(3)) == "89.943"

    def test_acot(self):
        """Test acot and its pole at zero."""
        assert str(trigonometry.acot(1, CTX, "DEG")) == "45"
        assert str(trigonometry.acot(2, CTX, "DEG").round_after_decimals(6)) == "26.565051"
        with pytest.raises(DomainError):
            trigonometry.acot(0, CTX)

    def test_atan_term_cap_stops_the_series(self, monkeypatch, caplog):
        """A lowered ATAN_MAX_TERMS truncates the series and logs a warning."""
        monkeypatch.setattr(trigonometry, "ATAN_MAX_TERMS", 3)
        with caplog.at_level(logging.WARNING, logger="bigcalc.trigonometry"):
            result = trigonometry.atan("0.4", CTX, "RAD")
        assert any("3 term cap" in message for message in caplog.messages)
        # x - x^3/3 + x^5/5 only
        assert abs(result.value - Decimal("0.380714666666666666666666666666666666667")) < Decimal("1e-30")
        assert not close_to(result, sp.atan(sp.Rational("0.4")), digits=5)

    def test_atan2(self):
        """Test atan2 quadrants and the undefined origin."""
        assert str(trigonometry.atan2(1, 1, CTX, "DEG")) == "45"
        assert str(trigonometry.atan2(1, -1, CTX, "DEG")) == "135"
        with pytest.raises(DomainError):
            trigonometry.atan2(0, 0, CTX)

    def test_angle_conversion(self):
        """Test conversion between degrees and radians."""
        assert close_to(trigonometry.to_radians(180, CTX), sp.pi)
        assert str(trigonometry.to_degrees(trigonometry.to_radians(45, CTX), PrecisionContext(30))) == "45"


class TestHyperbolic:
    @pytest.mark.parametrize("x", ["0", "1", "-1", "1.2541"])
    def test_forward_functions(self, x):
        """Test sinh, cosh and tanh against SymPy."""
        value = sp.Rational(x)
        assert close_to(hyperbolic.sinh(x, CTX), sp.sinh(value))
        assert close_to(hyperbolic.cosh(x, CTX), sp.cosh(value))
        assert close_to(hyperbolic.tanh(x, CTX), sp.tanh(value))

    def test_coth(self):
        """Test coth and its pole at zero."""
        assert str(hyperbolic.coth(1, CTX).round_after_decimals(10)) == "1.3130352855"
        assert str(hyperbolic.coth(-1, CTX).round_after_decimals(10)) == "-1.3130352855"
        with pytest.raises(DomainError):
            hyperbolic.coth(0, CTX)

    @pytest.mark.parametrize("x", ["0", "1", "-1", "2.5"])
    def test_asinh(self, x):
        """Test asinh against SymPy."""
        assert close_to(hyperbolic.asinh(x, CTX), sp.asinh(sp.Rational(x)))

    def test_acosh(self):
        """Test acosh and its domain."""
        assert str(hyperbolic.acosh(1, CTX)) == "0"
        assert close_to(hyperbolic.acosh(10, CTX), sp.acosh(10))
        with pytest.raises(DomainError):
            hyperbolic.acosh("0.5", CTX)

    def test_atanh(self):
        """Test atanh and its domain."""
        assert close_to(hyperbolic.atanh("0.5", CTX), sp.atanh(sp.Rational(1, 2)))
        for x in ("1", "-1", "1.01"):
            with pytest.raises(DomainError):
                hyperbolic.atanh(x, CTX)

    def test_acoth(self):
        """Test acoth and its domain."""
        assert close_to(hyperbolic.acoth(2, CTX), sp.acoth(2))
        assert close_to(hyperbolic.acoth(-2, CTX), sp.acoth(-2))
        for x in ("0.5", "1", "-1"):
            with pytest.raises(DomainError):
                hyperbolic.acoth(x, CTX)


class TestRadicals:
    def test_square_root(self):
        """Test exact and rounded square roots."""
        assert str(radical.square_root(4, CTX)) == "2"
        assert str(radical.square_root(0, CTX)) == "0"
        assert str(radical.square_root(2, CTX).round_after_decimals(5)) == "1.41421"

    @pytest.mark.parametrize("x,expected", [("27", "3"), ("0", "0"), ("8", "2"), ("-27", "-3")])
    def test_cubic_root(self, x, expected):
        """Test cube roots, including negative radicands."""
        assert str(radical.cubic_root(x, CTX)) == expected

    @pytest.mark.parametrize(
        "x,n,expected", [("81", "4", "3"), ("32", "5", "2"), ("1", "100", "1"), ("8", "-12", "0.8409")]
    )
    def test_nth_root(self, x, n, expected):
        """Test nth roots, including a negative index."""
        assert str(radical.nth_root(x, n, CTX).round_after_decimals(4).trim()) == expected

    def test_nth_root_errors(self):
        """Test the domain errors of nth_root."""
        with pytest.raises(DomainError) as exc:
            radical.nth_root(-16, 4, CTX)
        assert exc.value.code == "NO_REAL_ROOT"
        with pytest.raises(DomainError):
            radical.nth_root(5, 0, CTX)
        with pytest.raises(ValidationError):
            radical.nth_root(5, "2.5", CTX)

    @pytest.mark.parametrize("x,n", [("2", 3), ("17.5", 2), ("0.001", 7), ("123456", 5)])
    def test_root_inverts_power(self, x, n):
        """Test that nth_root(power(x, n), n) returns x."""
        ctx = PrecisionContext(30)
        root = radical.nth_root(power(x, n, ctx), n, ctx)
        assert abs(root.value - Decimal(x)) < Decimal("1e-25")
