"""World and grid contracts.

The world is read-only to the core: obstacles are fixed for a run and the
grid only bounds where the bee may be placed.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from snapshot_homing.core.geometry import GridPoint
from snapshot_homing.core.interfaces import Obstacle


@dataclass(frozen=True)
class Grid:
    """Rectangular integer grid, half-open on both axes.

    Covers ``x_start <= x < x_stop`` and ``y_start <= y < y_stop``.
    Raster indices put row 0 at the top (largest y).
    """

    x_start: int
    x_stop: int
    y_start: int
    y_stop: int

    def __post_init__(self) -> None:
        if self.x_stop <= self.x_start or self.y_stop <= self.y_start:
            raise ValueError(
                f"Empty grid: x [{self.x_start}, {self.x_stop}), y [{self.y_start}, {self.y_stop})"
            )

    @classmethod
    def from_ranges(cls, x: tuple[int, int], y: tuple[int, int]) -> "Grid":
        return cls(x_start=x[0], x_stop=x[1], y_start=y[0], y_stop=y[1])

    @property
    def width(self) -> int:
        return self.x_stop - self.x_start

    @property
    def height(self) -> int:
        return self.y_stop - self.y_start

    @property
    def shape(self) -> tuple[int, int]:
        """(rows, cols) of the raster."""
        return (self.height, self.width)

    def __len__(self) -> int:
        return self.width * self.height

    def contains(self, point: GridPoint) -> bool:
        return self.x_start <= point.x < self.x_stop and self.y_start <= point.y < self.y_stop

    def cells(self) -> Iterator[GridPoint]:
        """All cells, y outer and x inner, both ascending."""
        for y in range(self.y_start, self.y_stop):
            for x in range(self.x_start, self.x_stop):
                yield GridPoint(x, y)

    def index(self, point: GridPoint) -> tuple[int, int]:
        """Raster (row, col) of a cell."""
        if not self.contains(point):
            raise IndexError(f"{point} is outside the grid")
        row = self.height - (point.y - self.y_start) - 1
        col = point.x - self.x_start
        return (row, col)

    def point_at(self, row: int, col: int) -> GridPoint:
        """Inverse of ``index``."""
        return GridPoint(self.x_start + col, self.y_start + self.height - 1 - row)


@dataclass(frozen=True)
class World:
    """Obstacles plus the grid the bee is allowed to stand on.

    Obstacles do not have to lie on the grid.
    """

    obstacles: tuple[Obstacle, ...]
    grid: Grid
    name: str = "world"

    def is_free(self, point: GridPoint) -> bool:
        """Whether the bee can take a snapshot or a retina image here."""
        return not any(o.contains(point) for o in self.obstacles)

    def free_cells(self) -> list[GridPoint]:
        return [p for p in self.grid.cells() if self.is_free(p)]
