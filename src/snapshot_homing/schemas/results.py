"""Result contracts produced by the homing engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from snapshot_homing.core.geometry import Vec2
from snapshot_homing.schemas.image import Segment


class HomingStatus(str, Enum):
    """How a homing vector came about."""

    CORRECTION = "correction"  # Normal case: a unit vector toward home
    AT_HOME = "at_home"        # Retina matches snapshot, nothing to correct
    CANCELLED = "cancelled"    # Contributions summed to zero


@dataclass(frozen=True)
class MatchedPair:
    """A snapshot segment and the retina segment it was matched to."""

    snapshot: Segment
    retina: Segment

    @property
    def distance(self) -> float:
        """Signed circular distance from retina to snapshot bisector."""
        return self.retina.distance_to(self.snapshot)

    @property
    def width_change(self) -> float:
        """Positive when the segment appears larger now than at home."""
        return self.retina.width - self.snapshot.width


@dataclass(frozen=True)
class HomingResult:
    """Output of one homing query."""

    vector: Vec2
    status: HomingStatus
    turning: Vec2 = field(default_factory=Vec2.zero)
    positioning: Vec2 = field(default_factory=Vec2.zero)
    matches: tuple[MatchedPair, ...] = ()

    @property
    def needs_correction(self) -> bool:
        return self.status == HomingStatus.CORRECTION

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "vector": list(self.vector.to_tuple()),
            "status": self.status.value,
            "turning": list(self.turning.to_tuple()),
            "positioning": list(self.positioning.to_tuple()),
            "match_count": len(self.matches),
        }
