"""Homing engine: snapshot vs. retina matching and vector synthesis.

For every snapshot segment the nearest retina segment of the same color is
picked.  Each matched pair then contributes two unit vectors:

- turning: tangential, pointing clockwise or counter-clockwise depending
  on which side of the snapshot bisector the retina segment lies (flipped
  when the retina segment is wider than π);
- positioning: radial, pushing away from the bisector when the segment
  looks smaller than at home and toward it when it looks larger.

The homing vector is ``normalize(turning + w * positioning)``.
"""

from __future__ import annotations

import logging
import math

from snapshot_homing.core.errors import NoMatchingSegmentError
from snapshot_homing.core.geometry import Vec2
from snapshot_homing.schemas.image import Image, Segment
from snapshot_homing.schemas.results import HomingResult, HomingStatus, MatchedPair
from snapshot_homing.utils.config import HomingConfig

logger = logging.getLogger(__name__)


# =====================================================================
# Matching
# =====================================================================

def find_best_match(snapshot_segment: Segment, retina: Image) -> Segment:
    """Nearest retina segment of the same color.

    Ties keep the first candidate in retina order.

    Raises:
        NoMatchingSegmentError: If the retina has no segment of that color.
    """
    best: Segment | None = None
    best_distance = math.inf
    for candidate in retina.segments:
        if candidate.color != snapshot_segment.color:
            continue
        distance = abs(snapshot_segment.distance_to(candidate))
        if distance < best_distance:
            best = candidate
            best_distance = distance
    if best is None:
        raise NoMatchingSegmentError(snapshot_segment.color)
    return best


def match_segments(snapshot: Image, retina: Image) -> list[MatchedPair]:
    """Pair every snapshot segment with its best retina match.

    Not a bijection: a retina segment can be matched several times or not
    at all.
    """
    return [MatchedPair(s, find_best_match(s, retina)) for s in snapshot.segments]


# =====================================================================
# Vector synthesis
# =====================================================================

def turning_vector(matches: list[MatchedPair], turning_sign: int = 1) -> Vec2:
    """Sum of the tangential unit vectors of all matched pairs."""
    total = Vec2.zero()
    for pair in matches:
        sign = -1.0 if pair.distance < 0.0 else 1.0
        if pair.retina.width > math.pi:
            sign = -sign
        sign *= turning_sign
        direction = Vec2.from_angle(pair.retina.bisector - math.pi / 2.0) * sign
        total = total + direction.normalized()
    return total


def positioning_vector(matches: list[MatchedPair]) -> Vec2:
    """Sum of the radial unit vectors of all matched pairs."""
    total = Vec2.zero()
    for pair in matches:
        # smaller than at home: too far, push away from the bisector
        sign = 1.0 if pair.snapshot.width > pair.retina.width else -1.0
        direction = Vec2.from_angle(pair.retina.bisector) * sign
        total = total + direction.normalized()
    return total


def is_at_home(matches: list[MatchedPair], tolerance: float) -> bool:
    """Every pair has the same bearing and apparent size as at home."""
    return all(
        abs(pair.distance) <= tolerance and abs(pair.width_change) <= tolerance
        for pair in matches
    )


# =====================================================================
# Engine
# =====================================================================

class HomingEngine:
    """Derives homing vectors from a snapshot and a retina image."""

    def __init__(self, config: HomingConfig | None = None) -> None:
        self._config = config or HomingConfig()

    @property
    def config(self) -> HomingConfig:
        return self._config

    def compute(self, snapshot: Image, retina: Image) -> HomingResult:
        """Compute the full homing result.

        Args:
            snapshot: Image stored at home.
            retina: Image at the current position.

        Returns:
            HomingResult.  Its vector is a unit vector for CORRECTION and
            the zero sentinel for AT_HOME and CANCELLED.

        Raises:
            NoMatchingSegmentError: If a color is missing from the retina.
        """
        matches = match_segments(snapshot, retina)
        cfg = self._config

        if is_at_home(matches, cfg.match_tolerance):
            logger.debug("Retina matches snapshot over %d pairs", len(matches))
            return HomingResult(
                vector=Vec2.zero(),
                status=HomingStatus.AT_HOME,
                matches=tuple(matches),
            )

        turning = turning_vector(matches, cfg.turning_sign)
        positioning = positioning_vector(matches)
        combined = turning + positioning * cfg.positioning_weight

        if combined.is_zero(cfg.zero_tolerance):
            logger.debug("Turning and positioning cancel out over %d pairs", len(matches))
            return HomingResult(
                vector=Vec2.zero(),
                status=HomingStatus.CANCELLED,
                turning=turning,
                positioning=positioning,
                matches=tuple(matches),
            )

        return HomingResult(
            vector=combined.normalized(),
            status=HomingStatus.CORRECTION,
            turning=turning,
            positioning=positioning,
            matches=tuple(matches),
        )

    def homing_vector(self, snapshot: Image, retina: Image) -> Vec2:
        """Only the homing vector (zero sentinel when undefined)."""
        return self.compute(snapshot, retina).vector


def compute_homing_vector(
    snapshot: Image,
    retina: Image,
    config: HomingConfig | None = None,
) -> Vec2:
    """Homing vector for one snapshot/retina pair.

    Returns ``Vec2.zero()`` when no correction is needed or the
    contributions cancel; never NaN.
    """
    return HomingEngine(config).homing_vector(snapshot, retina)
