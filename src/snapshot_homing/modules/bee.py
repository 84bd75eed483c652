"""The bee: a fixed snapshot plus a movable position."""

from __future__ import annotations

import logging

from snapshot_homing.core.geometry import GridPoint, Vec2
from snapshot_homing.modules.homing import HomingEngine
from snapshot_homing.modules.image_builder import build_image
from snapshot_homing.schemas.image import Image
from snapshot_homing.schemas.results import HomingResult
from snapshot_homing.schemas.world import World

logger = logging.getLogger(__name__)


class Bee:
    """Agent that remembers what home looked like.

    The snapshot is taken once, at construction, and never recomputed.
    Every homing query builds a fresh retina image at the current position.
    """

    def __init__(
        self,
        world: World,
        home: GridPoint,
        engine: HomingEngine | None = None,
    ) -> None:
        """Take the snapshot at ``home``.

        Raises:
            DegenerateViewpointError: If home lies inside an obstacle.
        """
        self._world = world
        self._home = home
        self._engine = engine or HomingEngine()
        self._snapshot = build_image(home, world.obstacles)
        self.position = home
        logger.debug("Snapshot at %s has %d segments", home, len(self._snapshot))

    @property
    def home_position(self) -> GridPoint:
        return self._home

    @property
    def snapshot(self) -> Image:
        return self._snapshot

    @property
    def engine(self) -> HomingEngine:
        return self._engine

    @property
    def world(self) -> World:
        return self._world

    def move_to(self, position: GridPoint) -> None:
        self.position = position

    def retina(self) -> Image:
        """Image at the current position (not cached)."""
        return build_image(self.position, self._world.obstacles)

    def home_result(self) -> HomingResult:
        """Full homing result at the current position."""
        return self._engine.compute(self._snapshot, self.retina())

    def home(self) -> Vec2:
        """Homing vector at the current position.

        Raises:
            DegenerateViewpointError: If the bee stands inside an obstacle.
        """
        return self.home_result().vector
