"""Exceptions raised by the snapshot homing core.

All of them are recoverable at the call site: the field driver skips a
cell, the CLI turns them into an exit code.
"""

from __future__ import annotations


class HomingError(Exception):
    """Base class for all snapshot homing failures."""


class DegenerateViewpointError(HomingError, ValueError):
    """The viewpoint lies inside (or on the boundary of) an obstacle.

    The projection is undefined there, so no image can be built.
    """

    def __init__(self, viewpoint: object, obstacle: object) -> None:
        self.viewpoint = viewpoint
        self.obstacle = obstacle
        super().__init__(f"Viewpoint {viewpoint} lies inside obstacle {obstacle}")


class NoMatchingSegmentError(HomingError, LookupError):
    """The retina image holds no segment of the color being matched."""

    def __init__(self, color: object) -> None:
        self.color = color
        super().__init__(f"No retina segment with color {color}")


class ZeroVectorError(HomingError, ArithmeticError):
    """A zero-length vector was normalized."""
