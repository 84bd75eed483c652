"""Worlds and the vector field driver.

Each run produces:
- A vector field over the world grid
- Angular-error metrics against the true direction home
"""

from snapshot_homing.scenarios.definitions import (
    WORLDS,
    build_world,
    default_home,
    default_world,
    get_world,
    list_worlds,
)
from snapshot_homing.scenarios.field import (
    CellResult,
    CellStatus,
    VectorField,
    VectorFieldDriver,
    generate_field,
)

__all__ = [
    "WORLDS",
    "CellResult",
    "CellStatus",
    "VectorField",
    "VectorFieldDriver",
    "build_world",
    "default_home",
    "default_world",
    "generate_field",
    "get_world",
    "list_worlds",
]
