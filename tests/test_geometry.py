"""Tests for vectors, grid points and circular distance."""

from __future__ import annotations

import math

import pytest

from snapshot_homing.core.errors import HomingError, ZeroVectorError
from snapshot_homing.core.geometry import (
    GridPoint,
    Vec2,
    normalize_angle,
    signed_angular_distance,
)


# =============================================================================
# Circular distance
# =============================================================================

class TestSignedAngularDistance:
    """Tests for the wraparound metric."""

    def test_counter_clockwise_is_positive(self):
        assert signed_angular_distance(0.3, 0.5) == pytest.approx(0.2)

    def test_clockwise_is_negative(self):
        assert signed_angular_distance(0.5, 0.3) == pytest.approx(-0.2)

    def test_wraps_across_zero(self):
        """Going from just below 2π to just above 0 is a short positive step."""
        assert signed_angular_distance(2 * math.pi - 0.1, 0.1) == pytest.approx(0.2)
        assert signed_angular_distance(0.1, 2 * math.pi - 0.1) == pytest.approx(-0.2)

    def test_opposite_angles(self):
        assert abs(signed_angular_distance(0.0, math.pi)) == pytest.approx(math.pi)

    def test_same_angle(self):
        assert signed_angular_distance(1.234, 1.234) == 0.0

    def test_range(self):
        for i in range(64):
            a = i * 0.37
            b = i * 1.91
            d = signed_angular_distance(a, b)
            assert -math.pi <= d <= math.pi


class TestNormalizeAngle:
    """Tests for mapping angles into [0, 2π)."""

    def test_negative(self):
        assert normalize_angle(-math.pi / 2) == pytest.approx(3 * math.pi / 2)

    def test_large(self):
        assert normalize_angle(5 * math.pi) == pytest.approx(math.pi)

    def test_tiny_negative_does_not_round_to_tau(self):
        result = normalize_angle(-1e-17)
        assert 0.0 <= result < 2 * math.pi

    def test_tau_maps_to_zero(self):
        assert normalize_angle(2 * math.pi) == 0.0


# =============================================================================
# Vec2
# =============================================================================

class TestVec2:
    """Tests for the immutable 2-D vector."""

    def test_arithmetic(self):
        a = Vec2(1.0, 2.0)
        b = Vec2(3.0, -1.0)
        assert a + b == Vec2(4.0, 1.0)
        assert a - b == Vec2(-2.0, 3.0)
        assert a * 2.0 == Vec2(2.0, 4.0)
        assert 2.0 * a == Vec2(2.0, 4.0)
        assert -a == Vec2(-1.0, -2.0)

    def test_length_and_dot(self):
        assert Vec2(3.0, 4.0).length() == pytest.approx(5.0)
        assert Vec2(1.0, 2.0).dot(Vec2(3.0, 4.0)) == pytest.approx(11.0)

    def test_normalized(self):
        v = Vec2(3.0, 4.0).normalized()
        assert v.x == pytest.approx(0.6)
        assert v.y == pytest.approx(0.8)
        assert v.length() == pytest.approx(1.0)

    def test_normalize_zero_raises(self):
        with pytest.raises(ZeroVectorError):
            Vec2.zero().normalized()

    def test_zero_vector_error_is_homing_error(self):
        with pytest.raises(HomingError):
            Vec2(0.0, 0.0).normalized()

    def test_is_zero(self):
        assert Vec2.zero().is_zero()
        assert not Vec2(1e-3, 0.0).is_zero()

    def test_from_angle(self):
        v = Vec2.from_angle(math.pi / 2)
        assert v.x == pytest.approx(0.0, abs=1e-12)
        assert v.y == pytest.approx(1.0)

    def test_angle(self):
        assert Vec2(-1.0, 0.0).angle() == pytest.approx(math.pi)
        assert Vec2(0.0, -1.0).angle() == pytest.approx(3 * math.pi / 2)

    def test_angle_to(self):
        assert Vec2(1.0, 0.0).angle_to(Vec2(0.0, 2.0)) == pytest.approx(math.pi / 2)
        assert Vec2(1.0, 0.0).angle_to(Vec2(-5.0, 0.0)) == pytest.approx(math.pi)

    def test_angle_to_zero_raises(self):
        with pytest.raises(ZeroVectorError):
            Vec2(1.0, 0.0).angle_to(Vec2.zero())

    def test_is_finite(self):
        assert Vec2(1.0, 2.0).is_finite()
        assert not Vec2(float("nan"), 0.0).is_finite()

    def test_immutable(self):
        v = Vec2(1.0, 2.0)
        with pytest.raises(AttributeError):
            v.x = 3.0  # type: ignore[misc]


class TestGridPoint:
    """Tests for integer viewpoints."""

    def test_subtraction(self):
        assert GridPoint(5, -5) - GridPoint(1, 2) == GridPoint(4, -7)

    def test_to_vec2(self):
        assert GridPoint(2, -3).to_vec2() == Vec2(2.0, -3.0)

    def test_hashable(self):
        points = {GridPoint(1, 1), GridPoint(1, 1), GridPoint(0, 1)}
        assert len(points) == 2

    def test_tuple_roundtrip(self):
        assert GridPoint.from_tuple((4, 7)).to_tuple() == (4, 7)
