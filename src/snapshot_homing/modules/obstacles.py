"""Concrete obstacle shapes."""

from __future__ import annotations

import math
from dataclasses import dataclass

from snapshot_homing.core.geometry import GridPoint, Vec2, normalize_angle
from snapshot_homing.core.interfaces import Obstacle
from snapshot_homing.schemas.image import Segment, SegmentColor


@dataclass(frozen=True)
class CircleObstacle(Obstacle):
    """A circular obstacle (seen from above, a disc).

    Seen from a point at distance ``d`` from the center, the disc blocks
    the tangent cone of half-angle ``asin(r / d)`` around the direction of
    the center.
    """

    center: Vec2
    radius: float

    def __post_init__(self) -> None:
        if not self.radius > 0.0:
            raise ValueError(f"Circle radius must be positive, got {self.radius}")

    @classmethod
    def at(cls, x: float, y: float, radius: float) -> "CircleObstacle":
        return cls(center=Vec2(float(x), float(y)), radius=float(radius))

    def contains(self, viewpoint: GridPoint) -> bool:
        # the boundary counts as inside: asin(1) would give a degenerate π cone
        return (self.center - viewpoint.to_vec2()).length() <= self.radius

    def project(self, viewpoint: GridPoint) -> Segment | None:
        offset = self.center - viewpoint.to_vec2()
        distance = offset.length()
        if distance <= self.radius:
            return None

        bisector = normalize_angle(math.atan2(offset.y, offset.x))
        width = 2.0 * math.asin(self.radius / distance)
        return Segment(bisector=bisector, width=width, color=SegmentColor.OCCLUDED)

    def __str__(self) -> str:
        return f"Circle(center=({self.center.x}, {self.center.y}), r={self.radius})"
