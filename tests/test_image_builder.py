"""Tests for obstacle projection, segment merging and image building."""

from __future__ import annotations

import io
import itertools
import logging
import math

import pytest
from pydantic import ValidationError

from snapshot_homing.core.errors import DegenerateViewpointError
from snapshot_homing.core.geometry import GridPoint
from snapshot_homing.core.interfaces import Obstacle
from snapshot_homing.modules.image_builder import (
    ImageBuilder,
    build_image,
    fill_background,
    merge_segments,
)
from snapshot_homing.modules.obstacles import CircleObstacle
from snapshot_homing.schemas.image import Image, Segment, SegmentColor
from snapshot_homing.utils.logging import LogLevel, StructuredLogger, set_logger

TAU = 2 * math.pi


def occ(bisector: float, width: float) -> Segment:
    return Segment(bisector=bisector, width=width, color=SegmentColor.OCCLUDED)


class InvisibleObstacle(Obstacle):
    """Obstacle that never casts a silhouette."""

    def project(self, viewpoint):
        return None

    def contains(self, viewpoint):
        return False


# =============================================================================
# Segment schema
# =============================================================================

class TestSegment:
    """Tests for the Segment contract."""

    def test_edges(self):
        s = occ(1.0, 0.5)
        assert s.start == pytest.approx(0.75)
        assert s.end == pytest.approx(1.25)

    def test_rejects_bisector_out_of_range(self):
        with pytest.raises(ValidationError):
            Segment(bisector=TAU + 0.1, width=0.5)
        with pytest.raises(ValidationError):
            Segment(bisector=-0.1, width=0.5)

    def test_rejects_zero_width(self):
        with pytest.raises(ValidationError):
            Segment(bisector=1.0, width=0.0)

    def test_frozen(self):
        s = occ(1.0, 0.5)
        with pytest.raises(ValidationError):
            s.width = 1.0  # type: ignore[misc]

    def test_from_edges_wraps_bisector(self):
        s = Segment.from_edges(TAU - 0.2, TAU + 0.1)
        assert s.bisector == pytest.approx(TAU - 0.05)
        assert s.width == pytest.approx(0.3)

    def test_no_collision_opposite(self):
        s1 = occ(math.pi / 4, math.pi / 2)
        s2 = occ(5 * math.pi / 4, math.pi / 2)
        assert not s1.collides(s2)
        assert not s2.collides(s1)

    def test_collision_across_seam(self):
        """Arcs at π/4 and 7π/4 touch at angle 0."""
        s1 = occ(math.pi / 4, math.pi / 2)
        s3 = occ(7 * math.pi / 4, math.pi / 2)
        assert s1.collides(s3)
        assert s3.collides(s1)

    def test_distance_to(self):
        assert occ(0.5, 0.1).distance_to(occ(0.3, 0.1)) == pytest.approx(-0.2)


# =============================================================================
# Projection
# =============================================================================

class TestCircleProjection:
    """Tests for projecting a circle onto the circle of view."""

    def test_bisector_points_at_center(self):
        circle = CircleObstacle.at(-1.0, 1.0, 0.5)
        segment = circle.project(GridPoint(0, 0))
        assert segment is not None
        assert abs(segment.bisector - 3 * math.pi / 4) < 0.01

    def test_width_is_tangent_cone(self):
        circle = CircleObstacle.at(-1.0, 1.0, 0.5)
        segment = circle.project(GridPoint(0, 0))
        assert segment.width == pytest.approx(2 * math.asin(0.5 / math.sqrt(2)))
        assert segment.color == SegmentColor.OCCLUDED

    def test_bisector_normalized_below_axis(self):
        segment = CircleObstacle.at(0.0, -4.0, 0.5).project(GridPoint(0, 0))
        assert segment.bisector == pytest.approx(3 * math.pi / 2)

    def test_inside_has_no_segment(self):
        circle = CircleObstacle.at(0.0, -4.0, 0.5)
        assert circle.project(GridPoint(0, -4)) is None
        assert circle.contains(GridPoint(0, -4))

    def test_boundary_counts_as_inside(self):
        circle = CircleObstacle.at(3.5, 2.0, 0.5)
        assert circle.contains(GridPoint(3, 2))
        assert circle.project(GridPoint(3, 2)) is None

    def test_outside_not_contained(self):
        assert not CircleObstacle.at(3.5, 2.0, 0.5).contains(GridPoint(3, 1))

    def test_rejects_non_positive_radius(self):
        with pytest.raises(ValueError):
            CircleObstacle.at(0.0, 0.0, 0.0)


# =============================================================================
# Merge
# =============================================================================

class TestMergeSegments:
    """Tests for the circular interval merge."""

    def test_empty(self):
        assert merge_segments([]) == []

    def test_overlapping_pair(self):
        merged = merge_segments([occ(1.0, 1.0), occ(1.8, 1.0)])
        assert len(merged) == 1
        assert merged[0].bisector == pytest.approx(1.4)
        assert merged[0].width == pytest.approx(1.8)

    def test_contained_segment_is_absorbed(self):
        merged = merge_segments([occ(2.0, 0.2), occ(2.0, 1.0)])
        assert len(merged) == 1
        assert merged[0].width == pytest.approx(1.0)

    def test_touching_segments_merge(self):
        merged = merge_segments([occ(1.0, 1.0), occ(2.0, 1.0)])
        assert len(merged) == 1
        assert merged[0].width == pytest.approx(2.0)

    def test_merge_across_seam(self):
        merged = merge_segments([occ(0.1, 0.4), occ(TAU - 0.2, 0.4)])
        assert len(merged) == 1
        assert merged[0].bisector == pytest.approx(TAU - 0.05)
        assert merged[0].width == pytest.approx(0.7)

    def test_multi_cluster_wraparound_is_order_independent(self):
        """Two clusters, one of them straddling angle 0."""
        segments = [occ(0.0, 0.4), occ(0.3, 0.4), occ(6.0, 0.2), occ(3.0, 0.5)]
        expected = None
        for perm in itertools.permutations(segments):
            merged = merge_segments(list(perm))
            assert len(merged) == 2
            got = [(s.bisector, s.width) for s in merged]
            if expected is None:
                expected = got
            for (b, w), (eb, ew) in zip(got, expected):
                assert b == pytest.approx(eb)
                assert w == pytest.approx(ew)

        by_width = sorted(merged, key=lambda s: s.width)
        assert by_width[0].bisector == pytest.approx(3.0)
        assert by_width[0].width == pytest.approx(0.5)
        assert by_width[1].width == pytest.approx(0.5 + TAU - 5.9)
        assert by_width[1].bisector == pytest.approx((5.9 + 0.5 + TAU) / 2 - TAU)

    def test_full_circle(self):
        segments = [occ(i * math.pi / 4, 1.0) for i in range(8)]
        merged = merge_segments(segments)
        assert len(merged) == 1
        assert merged[0].width == pytest.approx(TAU)

    def test_idempotent(self):
        disjoint = [occ(0.5, 0.4), occ(2.0, 0.6), occ(4.0, 1.0)]
        once = merge_segments(disjoint)
        twice = merge_segments(once)
        assert len(once) == len(disjoint) == len(twice)
        for a, b, c in zip(sorted(disjoint, key=lambda s: s.bisector), once, twice):
            assert b.bisector == pytest.approx(a.bisector)
            assert b.width == pytest.approx(a.width)
            assert c.bisector == pytest.approx(b.bisector)
            assert c.width == pytest.approx(b.width)

    def test_merged_segments_do_not_collide(self):
        segments = [occ(0.2 * i, 0.15) for i in range(0, 30, 4)]
        merged = merge_segments(segments)
        for a, b in itertools.combinations(merged, 2):
            assert not a.collides(b)


class TestFillBackground:
    """Tests for background synthesis."""

    def test_nothing_occluded(self):
        background = fill_background([])
        assert len(background) == 1
        assert background[0].color == SegmentColor.BACKGROUND
        assert background[0].width == pytest.approx(TAU)

    def test_single_occlusion(self):
        background = fill_background([occ(0.0, 1.0)])
        assert len(background) == 1
        assert background[0].bisector == pytest.approx(math.pi)
        assert background[0].width == pytest.approx(TAU - 1.0)

    def test_full_occlusion_leaves_no_background(self):
        assert fill_background([Segment(bisector=0.0, width=TAU)]) == []

    def test_one_background_per_gap(self):
        background = fill_background([occ(1.0, 0.5), occ(3.0, 0.5), occ(5.0, 0.5)])
        assert len(background) == 3
        assert sum(s.width for s in background) == pytest.approx(TAU - 1.5)
        bisectors = sorted(s.bisector for s in background)
        assert bisectors == pytest.approx([2.0, 4.0, (5.25 + 0.75 + TAU) / 2])


# =============================================================================
# Image building
# =============================================================================

class TestBuildImage:
    """Tests for full image construction."""

    def test_three_obstacle_partition(self, three_circles):
        image = build_image(GridPoint(0, 0), three_circles)
        assert abs(image.total_width - TAU) < 0.01
        assert len(image.occluded) == 3
        assert len(image.background) == 3

    def test_sorted_by_bisector(self, three_circles):
        image = build_image(GridPoint(0, 0), three_circles)
        bisectors = [s.bisector for s in image.segments]
        assert bisectors == sorted(bisectors)

    def test_colors_alternate(self, three_circles):
        image = build_image(GridPoint(0, 0), three_circles)
        n = len(image)
        for i in range(n):
            assert image.segments[i].color != image.segments[(i + 1) % n].color

    def test_partition_everywhere(self, world):
        for point in world.free_cells():
            image = build_image(point, world.obstacles)
            assert abs(image.total_width - TAU) < 1e-3
            assert image.is_partition()

    def test_empty_world(self):
        image = build_image(GridPoint(0, 0), [])
        assert len(image) == 1
        assert image.segments[0].color == SegmentColor.BACKGROUND
        assert image.segments[0].width == pytest.approx(TAU)

    def test_nothing_visible(self):
        image = build_image(GridPoint(2, 2), [InvisibleObstacle()])
        assert len(image) == 1
        assert image.background[0].width == pytest.approx(TAU)

    def test_surrounded_viewpoint_is_fully_occluded(self):
        ring = [
            CircleObstacle.at(1.2 * math.cos(i * math.pi / 4), 1.2 * math.sin(i * math.pi / 4), 1.0)
            for i in range(8)
        ]
        image = build_image(GridPoint(0, 0), ring)
        assert len(image) == 1
        assert image.segments[0].color == SegmentColor.OCCLUDED
        assert image.is_partition()

    def test_overlapping_obstacles_merge(self):
        obstacles = [CircleObstacle.at(3.0, 0.0, 1.0), CircleObstacle.at(3.0, 1.0, 1.0)]
        image = build_image(GridPoint(0, 0), obstacles)
        assert len(image.occluded) == 1
        assert len(image.background) == 1
        assert image.is_partition()

    def test_degenerate_viewpoint_raises(self, three_circles):
        with pytest.raises(DegenerateViewpointError) as excinfo:
            build_image(GridPoint(0, -4), three_circles)
        assert excinfo.value.viewpoint == GridPoint(0, -4)

    def test_degenerate_viewpoint_is_value_error(self, three_circles):
        with pytest.raises(ValueError):
            build_image(GridPoint(4, 2), three_circles)

    def test_logs_through_module_logger_only(self, three_circles, caplog):
        buffer = io.StringIO()
        set_logger(StructuredLogger(level=LogLevel.DEBUG, console_output=False, file_output=buffer))
        caplog.set_level(logging.DEBUG, logger="snapshot_homing.modules.image_builder")

        build_image(GridPoint(1, 1), three_circles)

        assert buffer.getvalue() == ""
        assert "3 silhouettes -> 6 segments" in caplog.text


class TestImageBuilder:
    """Tests for the obstacle-bound builder."""

    def test_build_matches_function(self, three_circles):
        builder = ImageBuilder(three_circles)
        assert builder.build(GridPoint(2, 3)) == build_image(GridPoint(2, 3), three_circles)

    def test_valid_viewpoint(self, three_circles):
        builder = ImageBuilder(three_circles)
        assert builder.is_valid_viewpoint(GridPoint(0, 0))
        assert not builder.is_valid_viewpoint(GridPoint(3, -2))


class TestImageSchema:
    """Tests for Image helpers."""

    def test_approx_equals(self, three_circles):
        a = build_image(GridPoint(1, 1), three_circles)
        b = build_image(GridPoint(1, 1), three_circles)
        c = build_image(GridPoint(-1, 1), three_circles)
        assert a.approx_equals(b)
        assert not a.approx_equals(c)

    def test_overlapping_image_is_not_partition(self):
        image = Image(segments=(occ(1.0, 4.0), occ(2.0, 2.28)))
        assert not image.is_partition()

    def test_describe(self, three_circles):
        rows = build_image(GridPoint(0, 0), three_circles).describe()
        assert {r["color"] for r in rows} == {"occluded", "background"}
