"""Core geometry, errors and interfaces."""

from snapshot_homing.core.errors import (
    DegenerateViewpointError,
    HomingError,
    NoMatchingSegmentError,
    ZeroVectorError,
)
from snapshot_homing.core.geometry import GridPoint, Vec2, normalize_angle, signed_angular_distance
from snapshot_homing.core.interfaces import Obstacle

__all__ = [
    "DegenerateViewpointError",
    "GridPoint",
    "HomingError",
    "NoMatchingSegmentError",
    "Obstacle",
    "Vec2",
    "ZeroVectorError",
    "normalize_angle",
    "signed_angular_distance",
]
