"""Metrics evaluation for homing vector fields.

Computes per-field metrics including:
- Angular error of each homing vector against the true direction home
- Mean / median / max angular error over the evaluated cells
- Cell counts per outcome (corrected, at home, cancelled, skipped)

Persists metrics as metrics.json in the run folder.
"""

from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any

import numpy as np

from snapshot_homing.core.geometry import GridPoint, Vec2

if TYPE_CHECKING:
    from snapshot_homing.scenarios.field import VectorField

logger = logging.getLogger(__name__)


def angular_error(vector: Vec2, position: GridPoint, home: GridPoint) -> float | None:
    """Angle between a homing vector and the true direction home.

    Returns:
        Error in radians, [0, π], or None when undefined (standing at
        home, or a zero vector).
    """
    correct = home.to_vec2() - position.to_vec2()
    if correct.is_zero() or vector.is_zero() or not vector.is_finite():
        return None
    return correct.angle_to(vector)


@dataclass
class FieldMetrics:
    """Summary of one vector field."""

    total_cells: int = 0
    corrected_cells: int = 0
    at_home_cells: int = 0
    cancelled_cells: int = 0
    skipped_cells: int = 0
    evaluated_cells: int = 0
    mean_angular_error: float = 0.0
    median_angular_error: float = 0.0
    max_angular_error: float = 0.0

    @property
    def mean_angular_error_deg(self) -> float:
        return math.degrees(self.mean_angular_error)

    @property
    def coverage(self) -> float:
        """Fraction of cells that produced a homing result."""
        if self.total_cells == 0:
            return 0.0
        return (self.total_cells - self.skipped_cells) / self.total_cells

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "total_cells": self.total_cells,
            "corrected_cells": self.corrected_cells,
            "at_home_cells": self.at_home_cells,
            "cancelled_cells": self.cancelled_cells,
            "skipped_cells": self.skipped_cells,
            "evaluated_cells": self.evaluated_cells,
            "coverage": self.coverage,
            "mean_angular_error": self.mean_angular_error,
            "mean_angular_error_deg": self.mean_angular_error_deg,
            "median_angular_error": self.median_angular_error,
            "max_angular_error": self.max_angular_error,
        }


def evaluate_field(field: "VectorField") -> FieldMetrics:
    """Compute metrics for a generated vector field.

    Every cell with a defined angular error is weighted equally.
    """
    from snapshot_homing.scenarios.field import CellStatus

    metrics = FieldMetrics(total_cells=len(field.cells))
    for cell in field.cells:
        if cell.status == CellStatus.CORRECTION:
            metrics.corrected_cells += 1
        elif cell.status == CellStatus.AT_HOME:
            metrics.at_home_cells += 1
        elif cell.status == CellStatus.CANCELLED:
            metrics.cancelled_cells += 1
        else:
            metrics.skipped_cells += 1

    errors = field.angular_errors[~np.isnan(field.angular_errors)]
    metrics.evaluated_cells = int(errors.size)
    if errors.size:
        metrics.mean_angular_error = float(np.mean(errors))
        metrics.median_angular_error = float(np.median(errors))
        metrics.max_angular_error = float(np.max(errors))
    return metrics


def save_metrics(metrics: FieldMetrics, run_dir: Path) -> Path:
    """Write ``metrics.json`` into ``run_dir``."""
    run_dir.mkdir(parents=True, exist_ok=True)
    path = run_dir / "metrics.json"
    with open(path, "w", encoding="utf-8") as f:
        json.dump(metrics.to_dict(), f, indent=2)
    logger.info("Saved metrics to %s", path)
    return path
