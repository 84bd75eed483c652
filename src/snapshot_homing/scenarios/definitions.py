"""Named world definitions."""

from __future__ import annotations

import math
from typing import Callable, Iterable

from snapshot_homing.core.geometry import GridPoint
from snapshot_homing.modules.obstacles import CircleObstacle
from snapshot_homing.schemas.world import Grid, World
from snapshot_homing.utils.config import (
    DEFAULT_GRID_X,
    DEFAULT_GRID_Y,
    DEFAULT_HOME,
    DEFAULT_OBSTACLE_CENTERS,
    DEFAULT_OBSTACLE_RADIUS,
)


def build_world(
    circles: Iterable[tuple[float, float, float]],
    grid: Grid | None = None,
    name: str = "custom",
) -> World:
    """Create a world from ``(x, y, radius)`` triples."""
    obstacles = tuple(CircleObstacle.at(x, y, r) for x, y, r in circles)
    return World(
        obstacles=obstacles,
        grid=grid or Grid.from_ranges(DEFAULT_GRID_X, DEFAULT_GRID_Y),
        name=name,
    )


def default_world() -> World:
    """Three equal circles east and south of the origin."""
    return build_world(
        ((x, y, DEFAULT_OBSTACLE_RADIUS) for x, y in DEFAULT_OBSTACLE_CENTERS),
        name="three_circles",
    )


def ring_world(count: int = 6, distance: float = 4.0, radius: float = 0.5, name: str = "ring") -> World:
    """Equal circles evenly spaced on a ring around the origin."""
    circles = [
        (distance * math.cos(2 * math.pi * i / count), distance * math.sin(2 * math.pi * i / count), radius)
        for i in range(count)
    ]
    return build_world(circles, name=name)


def default_home() -> GridPoint:
    return GridPoint.from_tuple(DEFAULT_HOME)


# Registry of named worlds
WORLDS: dict[str, Callable[[], World]] = {
    "three_circles": default_world,
    "ring": ring_world,
}


def get_world(name: str) -> World:
    """Get a world by name.

    Raises:
        ValueError: If name is not registered.
    """
    if name not in WORLDS:
        available = ", ".join(WORLDS.keys())
        raise ValueError(f"Unknown world: {name}. Available: {available}")
    return WORLDS[name]()


def list_worlds() -> list[str]:
    return list(WORLDS.keys())
