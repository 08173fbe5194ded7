"""
Engine configuration
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Dict

logger = logging.getLogger(__name__)


class BankPolicy(str, Enum):
    """What happens when the craft touches the channel banks"""
    CLAMP = "clamp"
    LETHAL = "lethal"


@dataclass(frozen=True)
class EngineConfig:
    """All tunables of the simulation. Timings are in ticks (60 ticks ~ 1s)."""

    # Playfield
    width: int = 480
    height: int = 800
    channel_fraction: float = 0.7
    edge_margin: float = 20.0
    purge_margin: float = 50.0
    hitbox_padding: float = 5.0
    bank_policy: BankPolicy = BankPolicy.CLAMP

    # Player
    player_width: float = 40.0
    player_height: float = 40.0
    spawn_offset_y: float = 100.0
    move_speed: float = 5.0
    speed_recovery: float = 0.005
    slick_threshold: float = 0.4
    slick_multiplier: float = 0.3
    tilt_max: float = 0.3
    smoothing: float = 0.1
    start_lives: int = 3
    max_lives: int = 5
    max_fuel: float = 100.0
    fuel_burn_rate: float = 0.06
    ascend_burn_factor: float = 1.5
    fuel_pickup_amount: float = 40.0
    respawn_fuel_floor: float = 60.0
    invulnerable_ticks: int = 120

    # Scroll / difficulty
    initial_scroll: float = 3.0
    scroll_step: float = 0.5
    scroll_cap: float = 12.0
    level_ticks: int = 600
    level_score: int = 5000

    # Spawning
    spawn_rate: int = 60
    min_spawn_interval: int = 20
    spawn_y: float = -100.0

    # Projectiles
    projectile_speed: float = 12.0
    player_fire_ticks: int = 9
    enemy_projectile_speed: float = 5.0
    homing_turn: float = 0.25

    # Power-ups
    shield_ticks: int = 480
    guided_ticks: int = 600
    escort_ticks: int = 900
    max_escorts: int = 4

    # Bosses
    boss_health: int = 10

    def __post_init__(self):
        if not 0.0 < self.channel_fraction <= 1.0:
            raise ValueError(f"channel_fraction must be in (0, 1], got {self.channel_fraction}")
        if not 0.0 < self.smoothing <= 1.0:
            raise ValueError(f"smoothing must be in (0, 1], got {self.smoothing}")
        if self.start_lives < 1 or self.start_lives > self.max_lives:
            raise ValueError("start_lives must be within [1, max_lives]")
        if self.boss_health < 1:
            raise ValueError("boss_health must be positive")
        if self.min_spawn_interval < 1 or self.level_ticks < 1:
            raise ValueError("tick intervals must be positive")
        if self.max_escorts not in (0, 2, 4):
            raise ValueError("max_escorts must be 0, 2 or 4")
        # Accept plain strings from dict configs
        object.__setattr__(self, "bank_policy", BankPolicy(self.bank_policy))

    @property
    def channel_left(self) -> float:
        return self.width * (1.0 - self.channel_fraction) / 2.0

    @property
    def channel_right(self) -> float:
        return self.width - self.channel_left

    @property
    def spawn_point(self):
        return (self.width / 2.0 - self.player_width / 2.0, self.height - self.spawn_offset_y)

    @classmethod
    def from_dict(cls, params: Dict[str, Any]) -> "EngineConfig":
        """Build a config from a (possibly partial) dict, ignoring unknown keys"""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(params) - known)
        if unknown:
            logger.warning("Ignoring unknown engine config keys: %s", ", ".join(unknown))
        return cls(**{k: v for k, v in params.items() if k in known})
