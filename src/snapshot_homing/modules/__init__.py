"""Obstacles, image building, homing and the bee."""

from snapshot_homing.modules.bee import Bee
from snapshot_homing.modules.homing import HomingEngine, compute_homing_vector, match_segments
from snapshot_homing.modules.image_builder import ImageBuilder, build_image, merge_segments
from snapshot_homing.modules.obstacles import CircleObstacle

__all__ = [
    "Bee",
    "CircleObstacle",
    "HomingEngine",
    "ImageBuilder",
    "build_image",
    "compute_homing_vector",
    "match_segments",
    "merge_segments",
]
