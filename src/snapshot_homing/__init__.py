"""Snapshot homing: insect-style visual navigation.

A bee stores a panoramic image of obstacle silhouettes at home and later
steers back by comparing a fresh image against it.
"""

from snapshot_homing.core.geometry import GridPoint, Vec2, normalize_angle, signed_angular_distance
from snapshot_homing.modules.bee import Bee
from snapshot_homing.modules.homing import HomingEngine, compute_homing_vector
from snapshot_homing.modules.image_builder import build_image
from snapshot_homing.modules.obstacles import CircleObstacle
from snapshot_homing.schemas.image import Image, Segment, SegmentColor
from snapshot_homing.schemas.world import Grid, World

__version__ = "0.1.0"

__all__ = [
    "Bee",
    "CircleObstacle",
    "Grid",
    "GridPoint",
    "HomingEngine",
    "Image",
    "Segment",
    "SegmentColor",
    "Vec2",
    "World",
    "build_image",
    "compute_homing_vector",
    "normalize_angle",
    "signed_angular_distance",
]
