"""Abstract base classes for pluggable world components.

The image builder depends only on these interfaces and the schemas,
never on a concrete obstacle shape.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from snapshot_homing.core.geometry import GridPoint
    from snapshot_homing.schemas.image import Segment


# =============================================================================
# Obstacle Interface
# =============================================================================


class Obstacle(ABC):
    """Anything that casts an angular silhouette onto the bee's retina.

    Implementations must be convex occluders whose blocked cone can be
    described by a single arc.
    """

    @abstractmethod
    def project(self, viewpoint: GridPoint) -> Segment | None:
        """Map the obstacle onto the circle seen from ``viewpoint``.

        Args:
            viewpoint: Integer grid position of the observer.

        Returns:
            One OCCLUDED segment describing the blocked cone, or None if the
            obstacle casts no silhouette from here.
        """
        ...

    @abstractmethod
    def contains(self, viewpoint: GridPoint) -> bool:
        """Check whether the viewpoint lies inside the obstacle.

        The projection is undefined for such viewpoints.

        Returns:
            True if ``viewpoint`` is inside or on the boundary.
        """
        ...
