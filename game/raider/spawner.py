"""
Procedural obstacle and power-up spawning
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np

from .config import EngineConfig
from .entities import Obstacle, ObstacleType
from .policy import Placement, policy_for
from .registry import EntityRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SpawnProfile:
    """One row of the spawn table"""
    type: ObstacleType
    weight: float
    min_level: int = 0
    size: Tuple[float, float] = (40.0, 40.0)
    extra_width: float = 0.0  # uniform random extra width
    drift: float = 0.0  # max |vx|; 0 means stationary
    min_drift: float = 0.0
    signed_drift: bool = False  # fixed speed band with random sign vs. symmetric jitter


SPAWN_TABLE: Tuple[SpawnProfile, ...] = (
    SpawnProfile(ObstacleType.LIFE, 0.02, size=(30.0, 30.0)),
    SpawnProfile(ObstacleType.FUEL, 0.10, size=(40.0, 60.0)),
    SpawnProfile(ObstacleType.SHIELD, 0.02, min_level=1, size=(30.0, 30.0)),
    SpawnProfile(ObstacleType.GUIDED, 0.02, min_level=2, size=(30.0, 30.0)),
    SpawnProfile(ObstacleType.ESCORT, 0.02, min_level=2, size=(30.0, 30.0)),
    SpawnProfile(ObstacleType.SLICK, 0.05, min_level=1, size=(50.0, 40.0), extra_width=20.0),
    # ships drift lazily, helicopters strafe
    SpawnProfile(ObstacleType.PATROL_SEA, 0.25, size=(30.0, 60.0), drift=0.25),
    SpawnProfile(ObstacleType.PATROL_AIR, 0.20, size=(40.0, 40.0), drift=3.0, min_drift=1.0, signed_drift=True),
    # fast jets
    SpawnProfile(ObstacleType.PATROL_AIR, 0.10, min_level=2, size=(30.0, 30.0), drift=3.0, min_drift=3.0,
                 signed_drift=True),
    SpawnProfile(ObstacleType.GROUND_SHOOTER, 0.12, size=(35.0, 35.0)),
    SpawnProfile(ObstacleType.ARMORED_SHOOTER, 0.05, min_level=3, size=(45.0, 45.0)),
    SpawnProfile(ObstacleType.STATIC, 0.03, size=(50.0, 30.0), extra_width=30.0),
    SpawnProfile(ObstacleType.BOSS, 0.01, min_level=4, size=(80.0, 60.0), drift=1.0, min_drift=1.0,
                 signed_drift=True),
)


class SpawnDirector:
    """Decides each tick whether something spawns, what it is and where"""

    def __init__(
        self,
        config: EngineConfig,
        registry: EntityRegistry,
        rng: np.random.Generator,
        table: Tuple[SpawnProfile, ...] = SPAWN_TABLE,
    ):
        total = sum(p.weight for p in table)
        if total > 1.0 + 1e-9:
            raise ValueError(f"spawn table weights sum to {total:.3f} > 1")
        self.config = config
        self.registry = registry
        self.rng = rng
        self.table = table

    def spawn_interval(self, scroll_speed: float) -> int:
        """Ticks between spawn rolls, shorter at higher scroll speeds"""
        cfg = self.config
        if scroll_speed <= 0 or not math.isfinite(scroll_speed):
            return max(cfg.spawn_rate, cfg.min_spawn_interval)
        interval = math.floor(cfg.spawn_rate / (scroll_speed / cfg.initial_scroll))
        return max(cfg.min_spawn_interval, interval)

    def cumulative_table(self, level: int) -> List[Tuple[float, SpawnProfile]]:
        """(upper bound, profile) pairs for the entries eligible at ``level``"""
        acc = 0.0
        rows = []
        for profile in self.table:
            if level < profile.min_level:
                continue
            acc += profile.weight
            rows.append((acc, profile))
        return rows

    def choose(self, roll: float, level: int) -> Optional[SpawnProfile]:
        for upper, profile in self.cumulative_table(level):
            if roll < upper:
                return profile
        # unallocated tail: a breather tick
        return None

    def step(self, tick: int, level: int, scroll_speed: float) -> Optional[Obstacle]:
        if tick % self.spawn_interval(scroll_speed) != 0:
            return None
        profile = self.choose(float(self.rng.random()), level)
        if profile is None:
            return None
        obstacle = self._build(profile)
        self.registry.add_obstacle(obstacle)
        logger.debug("Spawned %s at x=%.1f (level %d)", obstacle.type.value, obstacle.x, level)
        return obstacle

    # ----------------------------
    # Placement
    # ----------------------------

    def _build(self, profile: SpawnProfile) -> Obstacle:
        cfg = self.config
        width, height = profile.size
        if profile.extra_width:
            width += float(self.rng.random()) * profile.extra_width

        if policy_for(profile.type).placement == Placement.BANK:
            x = self._bank_x(width)
        else:
            x = self._channel_x(width)

        obstacle = Obstacle(
            type=profile.type,
            x=x,
            y=cfg.spawn_y,
            width=width,
            height=height,
            vx=self._drift(profile),
        )
        if profile.type == ObstacleType.BOSS:
            obstacle.health = cfg.boss_health
            obstacle.max_health = cfg.boss_health
        return obstacle

    def _channel_x(self, width: float) -> float:
        cfg = self.config
        available = max(0.0, cfg.channel_right - cfg.channel_left - width)
        return cfg.channel_left + float(self.rng.random()) * available

    def _bank_x(self, width: float) -> float:
        cfg = self.config
        gap = 10.0
        if self.rng.random() < 0.5:
            return float(self.rng.random()) * max(0.0, cfg.channel_left - width - gap)
        room = max(0.0, cfg.width - cfg.channel_right - width - gap)
        return cfg.channel_right + gap + float(self.rng.random()) * room

    def _drift(self, profile: SpawnProfile) -> float:
        if profile.drift <= 0:
            return 0.0
        if profile.signed_drift:
            sign = 1.0 if self.rng.random() > 0.5 else -1.0
            speed = profile.min_drift + float(self.rng.random()) * (profile.drift - profile.min_drift)
            return sign * speed
        return (float(self.rng.random()) - 0.5) * 2.0 * profile.drift
