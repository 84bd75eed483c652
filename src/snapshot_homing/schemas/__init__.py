"""Data contracts for the snapshot homing model."""

from snapshot_homing.schemas.image import Image, Segment, SegmentColor
from snapshot_homing.schemas.results import HomingResult, HomingStatus, MatchedPair
from snapshot_homing.schemas.world import Grid, World

__all__ = [
    "Grid",
    "HomingResult",
    "HomingStatus",
    "Image",
    "MatchedPair",
    "Segment",
    "SegmentColor",
    "World",
]
