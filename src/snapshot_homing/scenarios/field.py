"""Vector field driver.

Places the bee on every grid cell, asks it for a homing vector and
collects the results together with the angular error against the true
direction home.  Cells inside an obstacle cannot be imaged and are
skipped; the run continues.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

import numpy as np

from snapshot_homing.core.errors import DegenerateViewpointError, HomingError
from snapshot_homing.core.geometry import GridPoint, Vec2
from snapshot_homing.metrics.evaluation import FieldMetrics, angular_error, evaluate_field
from snapshot_homing.modules.bee import Bee
from snapshot_homing.modules.homing import HomingEngine
from snapshot_homing.schemas.results import HomingStatus
from snapshot_homing.schemas.world import Grid, World
from snapshot_homing.utils.logging import get_logger

logger = logging.getLogger(__name__)

# Allowed deviation of a corrected homing vector from unit length
UNIT_TOLERANCE = 1e-9


class CellStatus(str, Enum):
    """Outcome for one grid cell."""

    CORRECTION = "correction"
    AT_HOME = "at_home"
    CANCELLED = "cancelled"
    SKIPPED = "skipped"

    @classmethod
    def from_homing(cls, status: HomingStatus) -> "CellStatus":
        return cls(status.value)


@dataclass(frozen=True)
class CellResult:
    """Homing outcome at one grid cell."""

    point: GridPoint
    status: CellStatus
    vector: Vec2 | None = None
    angular_error: float | None = None
    reason: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        return {
            "x": self.point.x,
            "y": self.point.y,
            "status": self.status.value,
            "vector": list(self.vector.to_tuple()) if self.vector is not None else None,
            "angular_error": self.angular_error,
            "reason": self.reason,
        }


@dataclass
class VectorField:
    """Homing vectors over a grid.

    ``vectors`` has shape (rows, cols, 2) in raster order (see
    ``Grid.index``); skipped cells hold NaN.  ``angular_errors`` has shape
    (rows, cols) and holds NaN wherever the error is undefined.
    """

    grid: Grid
    home: GridPoint
    vectors: np.ndarray
    angular_errors: np.ndarray
    cells: list[CellResult] = field(default_factory=list)
    metrics: FieldMetrics = field(default_factory=FieldMetrics)

    @classmethod
    def empty(cls, grid: Grid, home: GridPoint) -> "VectorField":
        rows, cols = grid.shape
        return cls(
            grid=grid,
            home=home,
            vectors=np.full((rows, cols, 2), np.nan, dtype=np.float64),
            angular_errors=np.full((rows, cols), np.nan, dtype=np.float64),
        )

    @property
    def avg_angular_error(self) -> float:
        """Mean angular error in radians over the evaluated cells."""
        return self.metrics.mean_angular_error

    @property
    def skipped(self) -> list[GridPoint]:
        return [c.point for c in self.cells if c.status == CellStatus.SKIPPED]

    def record(self, cell: CellResult) -> None:
        """Store a cell result in its own slot."""
        row, col = self.grid.index(cell.point)
        if cell.vector is not None:
            self.vectors[row, col] = cell.vector.to_tuple()
        if cell.angular_error is not None:
            self.angular_errors[row, col] = cell.angular_error
        self.cells.append(cell)

    def vector_at(self, point: GridPoint) -> Vec2 | None:
        """Homing vector at a cell, None if the cell was skipped."""
        row, col = self.grid.index(point)
        x, y = self.vectors[row, col]
        if np.isnan(x) or np.isnan(y):
            return None
        return Vec2(float(x), float(y))

    def cell_at(self, point: GridPoint) -> CellResult | None:
        for cell in self.cells:
            if cell.point == point:
                return cell
        return None


class VectorFieldDriver:
    """Generates a vector field for one bee over its world's grid."""

    def __init__(self, bee: Bee, strict: bool = False) -> None:
        """Initialize the driver.

        Args:
            bee: Bee whose snapshot is used; its position is moved around.
            strict: Re-raise homing errors instead of skipping the cell.
        """
        self._bee = bee
        self._strict = strict

    @property
    def world(self) -> World:
        return self._bee.world

    def evaluate_cell(self, point: GridPoint) -> CellResult:
        """Homing outcome at a single cell."""
        self._bee.move_to(point)
        try:
            result = self._bee.home_result()
        except DegenerateViewpointError as exc:
            if self._strict:
                raise
            get_logger().field("Skipping cell inside obstacle", viewpoint=point.to_tuple())
            return CellResult(point=point, status=CellStatus.SKIPPED, reason=str(exc))
        except HomingError as exc:
            if self._strict:
                raise
            logger.warning("Homing failed at %s: %s", point, exc)
            get_logger().field(f"Skipping cell: {exc}", viewpoint=point.to_tuple())
            return CellResult(point=point, status=CellStatus.SKIPPED, reason=str(exc))

        vector = result.vector
        get_logger().check_invariant(
            vector.is_finite()
            and (result.status != HomingStatus.CORRECTION or abs(vector.length() - 1.0) <= UNIT_TOLERANCE),
            "homing_vector",
            f"{result.status.value}, length {vector.length():.6f}",
            viewpoint=point.to_tuple(),
        )

        return CellResult(
            point=point,
            status=CellStatus.from_homing(result.status),
            vector=result.vector,
            angular_error=angular_error(result.vector, point, self._bee.home_position),
        )

    def generate(self) -> VectorField:
        """Evaluate every grid cell and aggregate the metrics."""
        grid = self.world.grid
        vector_field = VectorField.empty(grid, self._bee.home_position)

        for point in grid.cells():
            vector_field.record(self.evaluate_cell(point))

        # leave the bee where it started
        self._bee.move_to(self._bee.home_position)

        vector_field.metrics = evaluate_field(vector_field)
        get_logger().field(
            f"Generated field: {vector_field.metrics.corrected_cells} corrected, "
            f"{vector_field.metrics.skipped_cells} skipped, "
            f"mean error {vector_field.metrics.mean_angular_error_deg:.2f} deg",
        )
        return vector_field


def generate_field(
    world: World,
    home: GridPoint,
    engine: HomingEngine | None = None,
) -> VectorField:
    """Convenience wrapper: snapshot at ``home`` and sweep the grid."""
    return VectorFieldDriver(Bee(world, home, engine)).generate()
