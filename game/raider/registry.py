"""
Entity storage with deferred removal.

Systems never remove records while iterating; they flip ``alive`` through
:meth:`EntityRegistry.kill` and the engine calls :meth:`compact` once the
tick is over, so indices stay stable for the whole tick.
"""

from __future__ import annotations

import logging
from typing import Iterator, List, Optional

from .entities import Obstacle, Particle, Projectile
from .utils import is_finite_entity

logger = logging.getLogger(__name__)


class EntityRegistry:
    """Owns obstacles, projectiles and particles"""

    def __init__(self):
        self.obstacles: List[Obstacle] = []
        self.projectiles: List[Projectile] = []
        self.particles: List[Particle] = []

    def add_obstacle(self, obstacle: Obstacle) -> Obstacle:
        self.obstacles.append(obstacle)
        return obstacle

    def add_projectile(self, projectile: Projectile) -> Projectile:
        self.projectiles.append(projectile)
        return projectile

    def add_particle(self, particle: Particle) -> Particle:
        self.particles.append(particle)
        return particle

    @staticmethod
    def _live(items) -> Iterator:
        for item in items:
            if is_finite_entity(item) and item.alive:
                yield item

    def live_obstacles(self) -> Iterator[Obstacle]:
        return self._live(self.obstacles)

    def live_projectiles(self, enemy: Optional[bool] = None) -> Iterator[Projectile]:
        for p in self._live(self.projectiles):
            if enemy is None or p.enemy == enemy:
                yield p

    def live_particles(self) -> Iterator[Particle]:
        return self._live(self.particles)

    def kill(self, entity) -> None:
        entity.alive = False

    def clear_projectiles(self) -> None:
        for p in self.projectiles:
            if p is not None:
                p.alive = False

    def purge_out_of_bounds(self, width: float, height: float, margin: float) -> int:
        """Kill projectiles and obstacles outside the playfield plus margin.

        Obstacles get extra room above the top edge since they spawn there.
        """
        purged = 0
        for items, top in ((self.live_projectiles(), -margin), (self.live_obstacles(), -margin * 3)):
            for entity in list(items):
                if (entity.x + entity.width < -margin or entity.x > width + margin
                        or entity.y + entity.height < top or entity.y > height + margin):
                    entity.alive = False
                    purged += 1
        return purged

    def compact(self) -> None:
        """Drop dead and malformed records"""
        before = len(self.obstacles) + len(self.projectiles) + len(self.particles)
        self.obstacles = list(self._live(self.obstacles))
        self.projectiles = list(self._live(self.projectiles))
        self.particles = list(self._live(self.particles))
        dropped = before - len(self)
        if dropped:
            logger.debug("Compacted %d entity records", dropped)

    def clear(self) -> None:
        self.obstacles = []
        self.projectiles = []
        self.particles = []

    def __len__(self) -> int:
        return len(self.obstacles) + len(self.projectiles) + len(self.particles)
