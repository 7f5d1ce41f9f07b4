"""Tests for bisection and root search over intervals."""

import logging
from decimal import Decimal

import pytest
import sympy as sp

from bigcalc_pkg import analysis
from bigcalc_pkg.analysis import (
    Sampler,
    bisection,
    intersections_in_range,
    is_near_zero,
    roots_in_range,
)
from bigcalc_pkg.number import PrecisionNumber
from bigcalc_pkg.types import ParseError, ValidationError

SQRT2 = Decimal(str(sp.N(sp.sqrt(2), 40)))
PI = Decimal(str(sp.N(sp.pi, 40)))


class TestSampler:
    def test_values(self):
        """Test that the sampler evaluates the body at a point."""
        sampler = Sampler("x^2 + 1")
        assert str(sampler(2)) == "5"

    def test_failures_become_none(self):
        """Test that a failing sample yields None."""
        sampler = Sampler("1/x")
        assert sampler(0) is None
        assert str(sampler(4)) == "0.25"

    def test_malformed_body_fails_up_front(self):
        """Test that a malformed body raises when the sampler is built."""
        with pytest.raises(ParseError):
            Sampler("x +")

    def test_reserved_variable(self):
        """Test that binding x externally returns RESERVED_NAME."""
        with pytest.raises(ValidationError) as exc:
            Sampler("x", variables={"x": 1})
        assert exc.value.code == "RESERVED_NAME"

    def test_near_zero(self):
        """Test the ZERO_TOLERANCE threshold."""
        assert is_near_zero(PrecisionNumber("1e-13"))
        assert not is_near_zero(PrecisionNumber("-1e-6"))


class TestBisection:
    def test_square_root_of_two(self):
        """Test that bisection converges to sqrt(2)."""
        root = bisection("x^2 - 2", 0, 2)
        assert abs(root.value - SQRT2) < Decimal("1e-10")

    def test_reversed_bounds(self):
        """Test that swapped bounds are accepted."""
        root = bisection("x^2 - 2", 2, 0)
        assert abs(root.value - SQRT2) < Decimal("1e-10")

    def test_root_at_endpoint(self):
        """Test that a zero endpoint is returned as is."""
        assert bisection("x - 1", 1, 5) == 1
        assert bisection("x - 5", 1, 5) == 5

    def test_same_sign_returns_none(self):
        """Test that an interval without a sign change yields None."""
        assert bisection("x^2 + 1", -1, 1) is None

    def test_undefined_endpoint_returns_none(self):
        """Test that an undefined endpoint yields None."""
        assert bisection("1/x", 0, 1) is None

    def test_undefined_midpoint_returns_none(self):
        """Test that an undefined midpoint yields None."""
        # Sign change of 1/x across its pole, the midpoint is 0
        assert bisection("1/x", -1, 1) is None

    def test_iteration_cap_returns_last_midpoint(self, monkeypatch, caplog):
        """A lowered BISECTION_MAX_ITERATIONS returns the bracket midpoint and warns."""
        monkeypatch.setattr(analysis, "BISECTION_MAX_ITERATIONS", 3)
        with caplog.at_level(logging.WARNING, logger="bigcalc.analysis"):
            root = bisection("x^2 - 2", 0, 2)
        # Brackets: [1, 2], [1, 1.5], [1.25, 1.5]
        assert root.value == Decimal("1.375")
        assert any("stopped after 3 iterations" in message for message in caplog.messages)


class TestRoots:
    def test_quadratic(self):
        """Test that both roots of x^2 - 4 are found."""
        roots = roots_in_range("x^2 - 4", -5, 5)
        assert [str(r) for r in roots] == ["-2", "2"]

    def test_refined_roots(self):
        """Test that sign changes are refined by bisection."""
        roots = roots_in_range("x^2 - 2", -3, 3, steps=7)
        assert len(roots) == 2
        assert abs(roots[0].value + SQRT2) < Decimal("1e-10")
        assert abs(roots[1].value - SQRT2) < Decimal("1e-10")

    def test_sine_in_radians(self):
        """Test the roots of sin(x) in radians."""
        roots = roots_in_range("sin(x)", -1, 4, angle_mode="RAD")
        assert len(roots) == 2
        assert roots[0] == 0
        assert abs(roots[1].value - PI) < Decimal("1e-10")

    def test_no_roots(self):
        """Test that a positive function has no roots."""
        assert roots_in_range("x^2 + 1", -10, 10) == []

    def test_poles_are_skipped(self):
        """Test that a sign change across a pole is not a root."""
        assert roots_in_range("1/x", -1, 1) == []

    def test_external_variables(self):
        """Test that outer variables reach the body."""
        roots = roots_in_range("x - a", 0, 10, variables={"a": "3"})
        assert [str(r) for r in roots] == ["3"]

    def test_invalid_range(self):
        """Test that x_min > x_max returns INVALID_RANGE."""
        with pytest.raises(ValidationError) as exc:
            roots_in_range("x", 1, -1)
        assert exc.value.code == "INVALID_RANGE"

    def test_intersections(self):
        """Test where two lines meet."""
        points = intersections_in_range("x", "4 - x", 0, 4)
        assert [str(p) for p in points] == ["2"]

    def test_intersection_of_curves(self):
        """Test where a parabola meets a line."""
        points = intersections_in_range("x^2", "x + 2", -3, 3, steps=12)
        assert [str(p) for p in points] == ["-1", "2"]
