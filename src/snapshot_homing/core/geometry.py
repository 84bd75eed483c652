"""2-D vectors, integer grid points and circular-distance arithmetic.

Angles are radians.  Two angles are only ever compared through
``signed_angular_distance``, which maps their difference into (-π, π]:

    d(a, b) = atan2(sin(b - a), cos(b - a))
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from snapshot_homing.core.errors import ZeroVectorError
from snapshot_homing.utils.config import TAU, ZERO_LENGTH_TOLERANCE


# =====================================================================
# Angle helpers
# =====================================================================

def signed_angular_distance(a: float, b: float) -> float:
    """Signed minimal angle from ``a`` to ``b`` in (-π, π].

    Positive when ``b`` lies counter-clockwise of ``a``.
    """
    delta = b - a
    return math.atan2(math.sin(delta), math.cos(delta))


def normalize_angle(angle: float) -> float:
    """Map any angle into [0, 2π)."""
    wrapped = angle % TAU
    # a tiny negative input wraps to exactly TAU in floating point
    if wrapped >= TAU:
        return 0.0
    return wrapped


# =====================================================================
# Vec2: immutable real-valued vector
# =====================================================================

@dataclass(frozen=True, slots=True)
class Vec2:
    """Real-valued 2-D vector."""

    x: float
    y: float

    @classmethod
    def zero(cls) -> "Vec2":
        """The zero sentinel returned when no direction is defined."""
        return cls(0.0, 0.0)

    @classmethod
    def from_angle(cls, theta: float, length: float = 1.0) -> "Vec2":
        return cls(math.cos(theta) * length, math.sin(theta) * length)

    # -- vector operations --

    def __add__(self, other: "Vec2") -> "Vec2":
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vec2") -> "Vec2":
        return Vec2(self.x - other.x, self.y - other.y)

    def __mul__(self, k: float) -> "Vec2":
        return Vec2(self.x * k, self.y * k)

    __rmul__ = __mul__

    def __neg__(self) -> "Vec2":
        return Vec2(-self.x, -self.y)

    def dot(self, other: "Vec2") -> float:
        return self.x * other.x + self.y * other.y

    # -- magnitude --

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def is_zero(self, tolerance: float = ZERO_LENGTH_TOLERANCE) -> bool:
        return self.length() <= tolerance

    def is_finite(self) -> bool:
        return math.isfinite(self.x) and math.isfinite(self.y)

    def normalized(self) -> "Vec2":
        """Unit vector in the same direction.

        Raises:
            ZeroVectorError: If the vector has zero length.
        """
        length = self.length()
        if length == 0.0 or not math.isfinite(length):
            raise ZeroVectorError(f"Cannot normalize {self!r}")
        return Vec2(self.x / length, self.y / length)

    def angle(self) -> float:
        """Direction of the vector in [0, 2π)."""
        return normalize_angle(math.atan2(self.y, self.x))

    def angle_to(self, other: "Vec2") -> float:
        """Unsigned angle between two non-zero vectors, in [0, π]."""
        denom = self.length() * other.length()
        if denom == 0.0:
            raise ZeroVectorError("Angle undefined for a zero vector")
        cosine = max(-1.0, min(1.0, self.dot(other) / denom))
        return math.acos(cosine)

    # -- conversion helpers --

    def to_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)

    @classmethod
    def from_tuple(cls, t: tuple[float, float]) -> "Vec2":
        return cls(float(t[0]), float(t[1]))


# =====================================================================
# GridPoint: immutable integer viewpoint
# =====================================================================

@dataclass(frozen=True, slots=True)
class GridPoint:
    """Integer grid coordinate the bee can stand on."""

    x: int
    y: int

    def __add__(self, other: "GridPoint") -> "GridPoint":
        return GridPoint(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "GridPoint") -> "GridPoint":
        return GridPoint(self.x - other.x, self.y - other.y)

    def to_vec2(self) -> Vec2:
        return Vec2(float(self.x), float(self.y))

    def to_tuple(self) -> tuple[int, int]:
        return (self.x, self.y)

    @classmethod
    def from_tuple(cls, t: tuple[int, int]) -> "GridPoint":
        return cls(int(t[0]), int(t[1]))

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"
