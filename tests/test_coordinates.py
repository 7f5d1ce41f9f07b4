"""Tests for polar/Cartesian coordinate conversion."""

import pytest

from bigcalc_pkg.coordinates import (
    CoordinateKind,
    cartesian_to_polar,
    polar_to_cartesian,
)
from bigcalc_pkg.types import DomainError


class TestPolarToCartesian:
    def test_reference_point(self):
        """Test a conversion against known digits."""
        point = polar_to_cartesian("12.874", "7.000032", 30, "DEG")
        assert point.kind is CoordinateKind.CARTESIAN
        assert str(point.first.round_after_decimals(5)) == "12.77804"
        assert str(point.second.round_after_decimals(5)) == "1.56895"

    def test_right_angle_in_degrees(self):
        """Test that 90 degrees lands exactly on the y axis."""
        point = polar_to_cartesian(2, 90, 20, "DEG")
        assert str(point.first) == "0"
        assert str(point.second) == "2"

    def test_radians(self):
        """Test a conversion in radians."""
        point = polar_to_cartesian(1, 0, 20, "RAD")
        assert str(point) == "x=1; y=0"

    def test_negative_radius(self):
        """Test that a negative radius returns NEGATIVE_RADIUS."""
        with pytest.raises(DomainError) as exc:
            polar_to_cartesian(-1, 30)
        assert exc.value.code == "NEGATIVE_RADIUS"


class TestCartesianToPolar:
    def test_unit_diagonal(self):
        """Test that (1, 1) is sqrt(2) at 45 degrees."""
        point = cartesian_to_polar(1, 1, 30)
        assert point.kind is CoordinateKind.POLAR
        assert str(point.first.round_after_decimals(6)) == "1.414214"
        assert str(point.second) == "45"

    def test_second_quadrant(self):
        """Test the angle of a point in the second quadrant."""
        point = cartesian_to_polar(-3, 4, 20)
        assert str(point.first) == "5"
        assert str(point.second.round_after_decimals(4)) == "126.8699"
        assert str(point).startswith("r=5; θ=126.86")

    @pytest.mark.parametrize("x,y", [(0, 1), (1, 0), (0, 0)])
    def test_points_on_axes(self, x, y):
        """Test that points on an axis return AMBIGUOUS_ORIGIN."""
        with pytest.raises(DomainError) as exc:
            cartesian_to_polar(x, y)
        assert exc.value.code == "AMBIGUOUS_ORIGIN"
