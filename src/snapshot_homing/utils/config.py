"""Configuration constants for the snapshot homing model."""

from __future__ import annotations

import math
from dataclasses import dataclass, replace

TAU: float = 2.0 * math.pi

# =============================================================================
# Homing Engine
# =============================================================================

# Weight of the positioning vector relative to the turning vector
POSITIONING_WEIGHT: float = 3.0

# +1 keeps the counter-clockwise turning convention, -1 mirrors it
TURNING_SIGN: int = 1

# Bisector/width difference below which a matched pair counts as identical
MATCH_TOLERANCE: float = 1e-6

# Vectors shorter than this are treated as zero
ZERO_LENGTH_TOLERANCE: float = 1e-9

# =============================================================================
# Image Builder
# =============================================================================

# Slack added to the non-strict collision threshold (absorbs float noise)
COLLISION_TOLERANCE: float = 1e-9

# Tolerance used when checking that an image tiles the circle
PARTITION_TOLERANCE: float = 1e-3

# =============================================================================
# World / Grid defaults
# =============================================================================

DEFAULT_OBSTACLE_RADIUS: float = 0.5

DEFAULT_OBSTACLE_CENTERS: tuple[tuple[float, float], ...] = (
    (3.5, 2.0),
    (3.5, -2.0),
    (0.0, -4.0),
)

# Half-open ranges, [start, stop)
DEFAULT_GRID_X: tuple[int, int] = (-7, 8)
DEFAULT_GRID_Y: tuple[int, int] = (-7, 8)

DEFAULT_HOME: tuple[int, int] = (0, 0)

# =============================================================================
# Rendering
# =============================================================================

RENDER_SIZE: tuple[int, int] = (640, 740)
RENDER_PLOT_BOX: tuple[int, int, int, int] = (20, 20, 620, 620)
RENDER_WORLD_WINDOW: tuple[float, float] = (-7.0, 7.0)
RENDER_BACKGROUND: tuple[int, int, int] = (240, 240, 240)
DEFAULT_OUTPUT_PATH: str = "homing.png"


@dataclass(frozen=True)
class HomingConfig:
    """Tunable parameters of the homing engine.

    The positioning weight and the turning sign are tuned constants with no
    derivation behind them, so both are overridable per engine.
    """

    positioning_weight: float = POSITIONING_WEIGHT
    turning_sign: int = TURNING_SIGN
    match_tolerance: float = MATCH_TOLERANCE
    zero_tolerance: float = ZERO_LENGTH_TOLERANCE

    def __post_init__(self) -> None:
        if self.turning_sign not in (-1, 1):
            raise ValueError(f"turning_sign must be +1 or -1, got {self.turning_sign}")
        if not math.isfinite(self.positioning_weight):
            raise ValueError("positioning_weight must be finite")
        if self.match_tolerance < 0 or self.zero_tolerance < 0:
            raise ValueError("tolerances must be non-negative")

    def with_overrides(self, **overrides: float) -> "HomingConfig":
        """Return a copy with the given fields replaced."""
        return replace(self, **overrides)
