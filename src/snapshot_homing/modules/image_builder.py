"""Circular image builder.

Projects every obstacle onto the circle around a viewpoint, merges
overlapping silhouettes and fills the gaps between them with background
segments, so the result tiles the full circle.

Merging works on unwrapped intervals ``[start, start + width)`` with
``start`` in [0, 2π):

1. sort by start and sweep, joining an interval into the running one when
   it starts at or before the running end;
2. fold the seam: the last interval may run past 2π and swallow the first
   ones (shifted by 2π).

Only the last interval of a sorted sweep can extend past 2π, so a single
fold pass is enough regardless of the order the obstacles were given in.
"""

from __future__ import annotations

import logging
from typing import Iterable, Sequence

from snapshot_homing.core.errors import DegenerateViewpointError
from snapshot_homing.core.geometry import GridPoint, normalize_angle
from snapshot_homing.core.interfaces import Obstacle
from snapshot_homing.schemas.image import Image, Segment, SegmentColor
from snapshot_homing.utils.config import COLLISION_TOLERANCE, PARTITION_TOLERANCE, TAU

logger = logging.getLogger(__name__)


# =====================================================================
# Projection
# =====================================================================

def validate_viewpoint(viewpoint: GridPoint, obstacles: Iterable[Obstacle]) -> None:
    """Reject viewpoints that lie inside an obstacle.

    Raises:
        DegenerateViewpointError: For the first obstacle containing it.
    """
    for obstacle in obstacles:
        if obstacle.contains(viewpoint):
            raise DegenerateViewpointError(viewpoint, obstacle)


def project_obstacles(viewpoint: GridPoint, obstacles: Iterable[Obstacle]) -> list[Segment]:
    """Collect the silhouettes of every obstacle visible from ``viewpoint``."""
    segments: list[Segment] = []
    for obstacle in obstacles:
        segment = obstacle.project(viewpoint)
        if segment is not None:
            segments.append(segment)
    return segments


# =====================================================================
# Merge
# =====================================================================

def _full_circle(color: SegmentColor) -> Segment:
    return Segment(bisector=0.0, width=TAU, color=color)


def merge_segments(
    segments: Sequence[Segment],
    tolerance: float = COLLISION_TOLERANCE,
) -> list[Segment]:
    """Merge colliding occluded segments into disjoint ones.

    Touching segments (gap ``<= tolerance``) are merged.  The result is
    sorted by bisector.  A union covering the whole circle comes back as a
    single full-circle segment with bisector 0.

    Args:
        segments: Occluded segments in any order.
        tolerance: Slack on the non-strict touching test.

    Returns:
        Non-overlapping occluded segments.
    """
    if not segments:
        return []
    if any(s.is_full_circle for s in segments):
        return [_full_circle(SegmentColor.OCCLUDED)]

    intervals = sorted(
        (normalize_angle(s.start), normalize_angle(s.start) + s.width) for s in segments
    )

    merged: list[list[float]] = []
    for start, end in intervals:
        if merged and start <= merged[-1][1] + tolerance:
            merged[-1][1] = max(merged[-1][1], end)
        else:
            merged.append([start, end])

    # fold the 0/2π seam
    while len(merged) > 1 and merged[0][0] + TAU <= merged[-1][1] + tolerance:
        first = merged.pop(0)
        merged[-1][1] = max(merged[-1][1], first[1] + TAU)

    if merged[-1][1] - merged[-1][0] >= TAU - tolerance:
        return [_full_circle(SegmentColor.OCCLUDED)]

    result = [Segment.from_edges(start, end, SegmentColor.OCCLUDED) for start, end in merged]
    result.sort(key=lambda s: s.bisector)
    return result


# =====================================================================
# Background fill
# =====================================================================

def fill_background(occluded: Sequence[Segment]) -> list[Segment]:
    """Synthesize the background segments between disjoint occlusions.

    One background segment spans from the end edge of each occlusion to
    the start edge of the next one counter-clockwise, including the pair
    that wraps from the last back to the first.
    """
    if not occluded:
        return [_full_circle(SegmentColor.BACKGROUND)]
    if len(occluded) == 1 and occluded[0].is_full_circle:
        return []

    edges = sorted((normalize_angle(s.start), normalize_angle(s.start) + s.width) for s in occluded)

    background: list[Segment] = []
    for i, (_, end) in enumerate(edges):
        next_start = edges[(i + 1) % len(edges)][0]
        if i == len(edges) - 1:
            next_start += TAU
        background.append(Segment.from_edges(end, next_start, SegmentColor.BACKGROUND))
    return background


# =====================================================================
# Builder
# =====================================================================

def assemble_image(occluded: Sequence[Segment]) -> Image:
    """Merge occlusions, fill the gaps and sort everything by bisector."""
    merged = merge_segments(occluded)
    segments = merged + fill_background(merged)
    segments.sort(key=lambda s: s.bisector)
    return Image(segments=tuple(segments))


def build_image(viewpoint: GridPoint, obstacles: Sequence[Obstacle]) -> Image:
    """Build the panoramic image seen from ``viewpoint``.

    Args:
        viewpoint: Integer position of the observer.
        obstacles: Obstacles of the world.

    Returns:
        An Image tiling the full circle.  With nothing visible this is a
        single full-circle background segment.

    Raises:
        DegenerateViewpointError: If the viewpoint is inside an obstacle.
    """
    validate_viewpoint(viewpoint, obstacles)

    projected = project_obstacles(viewpoint, obstacles)
    image = assemble_image(projected)

    logger.debug(
        "Image at %s: %d silhouettes -> %d segments",
        viewpoint, len(projected), len(image),
    )

    if not image.is_partition(PARTITION_TOLERANCE):
        logger.warning(
            "Image at %s does not tile the circle: total width %.6f",
            viewpoint, image.total_width,
        )
    return image


class ImageBuilder:
    """Builds images against a fixed set of obstacles."""

    def __init__(self, obstacles: Sequence[Obstacle]) -> None:
        self._obstacles = tuple(obstacles)

    @property
    def obstacles(self) -> tuple[Obstacle, ...]:
        return self._obstacles

    def build(self, viewpoint: GridPoint) -> Image:
        return build_image(viewpoint, self._obstacles)

    def is_valid_viewpoint(self, viewpoint: GridPoint) -> bool:
        return not any(o.contains(viewpoint) for o in self._obstacles)
