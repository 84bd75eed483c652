"""Segment and Image data contracts.

An Image is a 1-D panoramic view: an ordered list of angular Segments that
tile the full circle, alternating between OCCLUDED arcs (obstacle
silhouettes) and BACKGROUND arcs (open sky).

ARCHITECTURAL INVARIANT: the widths of a well-formed Image sum to 2π and
no two of its segments overlap.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

from snapshot_homing.core.geometry import normalize_angle, signed_angular_distance
from snapshot_homing.utils.config import COLLISION_TOLERANCE, PARTITION_TOLERANCE, TAU


class SegmentColor(str, Enum):
    """What a segment shows."""

    OCCLUDED = "occluded"      # Obstacle silhouette ("black")
    BACKGROUND = "background"  # Open sky between silhouettes ("white")


class Segment(BaseModel):
    """A single arc on the unit circle.

    The arc spans ``[bisector - width/2, bisector + width/2]``.
    """

    bisector: float = Field(
        ...,
        ge=0.0,
        lt=TAU,
        description="Angular center of the arc in radians, [0, 2π)",
    )
    width: float = Field(
        ...,
        gt=0.0,
        le=TAU,
        description="Full angular extent of the arc in radians, (0, 2π]",
    )
    color: SegmentColor = Field(
        default=SegmentColor.OCCLUDED,
        description="Occluded (obstacle) or background (sky)",
    )

    model_config = {"frozen": True}

    @classmethod
    def from_edges(
        cls,
        start: float,
        end: float,
        color: SegmentColor = SegmentColor.OCCLUDED,
    ) -> "Segment":
        """Build a segment from unwrapped edges with ``end > start``."""
        width = min(end - start, TAU)
        return cls(bisector=normalize_angle((start + end) / 2.0), width=width, color=color)

    @property
    def start(self) -> float:
        """Counter-clockwise start edge (not normalized)."""
        return self.bisector - self.width / 2.0

    @property
    def end(self) -> float:
        """Counter-clockwise end edge (not normalized)."""
        return self.bisector + self.width / 2.0

    @property
    def is_occluded(self) -> bool:
        return self.color == SegmentColor.OCCLUDED

    @property
    def is_full_circle(self) -> bool:
        return self.width >= TAU

    def distance_to(self, other: "Segment") -> float:
        """Signed circular distance from this bisector to ``other``'s."""
        return signed_angular_distance(self.bisector, other.bisector)

    def collides(self, other: "Segment", tolerance: float = COLLISION_TOLERANCE) -> bool:
        """Whether two arcs overlap or touch.

        Non-strict: tangentially touching arcs collide.
        """
        reach = (self.width + other.width) / 2.0
        return abs(self.distance_to(other)) <= reach + tolerance

    def overlaps(self, other: "Segment", tolerance: float = PARTITION_TOLERANCE) -> bool:
        """Whether two arcs share more than ``tolerance`` radians."""
        reach = (self.width + other.width) / 2.0
        return abs(self.distance_to(other)) < reach - tolerance


class Image(BaseModel):
    """A panoramic view partitioned into segments.

    Segments are kept sorted by bisector for deterministic iteration; the
    circle itself has no first element.
    """

    segments: tuple[Segment, ...] = Field(
        default_factory=tuple,
        description="Segments sorted by bisector",
    )

    model_config = {"frozen": True}

    def __len__(self) -> int:
        return len(self.segments)

    @property
    def total_width(self) -> float:
        return sum(s.width for s in self.segments)

    @property
    def occluded(self) -> list[Segment]:
        return [s for s in self.segments if s.color == SegmentColor.OCCLUDED]

    @property
    def background(self) -> list[Segment]:
        return [s for s in self.segments if s.color == SegmentColor.BACKGROUND]

    def of_color(self, color: SegmentColor) -> list[Segment]:
        """Segments of one color, in stored order."""
        return [s for s in self.segments if s.color == color]

    def is_partition(self, tolerance: float = PARTITION_TOLERANCE) -> bool:
        """Check that the segments tile the circle without overlap."""
        if not self.segments:
            return False
        if abs(self.total_width - TAU) > tolerance:
            return False
        for i, a in enumerate(self.segments):
            for b in self.segments[i + 1:]:
                if a.overlaps(b, tolerance):
                    return False
        return True

    def approx_equals(self, other: "Image", tolerance: float = 1e-9) -> bool:
        """Segment-for-segment comparison within ``tolerance``."""
        if len(self.segments) != len(other.segments):
            return False
        for a, b in zip(self.segments, other.segments):
            if a.color != b.color:
                return False
            if abs(a.distance_to(b)) > tolerance or abs(a.width - b.width) > tolerance:
                return False
        return True

    def describe(self) -> list[dict[str, float | str]]:
        """Plain rows for tables and JSON output."""
        return [
            {"bisector": s.bisector, "width": s.width, "color": s.color.value}
            for s in self.segments
        ]
