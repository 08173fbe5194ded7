"""
Player life-cycle: lives, fuel, invulnerability and respawn
"""

from __future__ import annotations

import logging
from enum import Enum

from .config import EngineConfig
from .entities import Player
from .motion import InputState
from .registry import EntityRegistry

logger = logging.getLogger(__name__)


class LifeState(str, Enum):
    ALIVE = "alive"
    INVULNERABLE = "invulnerable"
    RESPAWNING = "respawning"
    DESTROYED = "destroyed"


class Outcome(str, Enum):
    IGNORED = "ignored"
    RESPAWNED = "respawned"
    DESTROYED = "destroyed"


class PlayerStateMachine:
    """Owns the single Player record and mediates every destructive event"""

    def __init__(self, config: EngineConfig, registry: EntityRegistry):
        self.config = config
        self.registry = registry
        self.player: Player = None  # type: ignore
        self._respawning = False
        self.reset()

    def reset(self):
        cfg = self.config
        x, y = cfg.spawn_point
        self.player = Player(
            x=x,
            y=y,
            width=cfg.player_width,
            height=cfg.player_height,
            max_lives=cfg.max_lives,
            max_fuel=cfg.max_fuel,
            lives=cfg.start_lives,
            fuel=cfg.max_fuel,
        )
        self._respawning = False

    # ----------------------------
    # State queries
    # ----------------------------

    @property
    def destroyed(self) -> bool:
        return self.player.lives <= 0

    def is_invulnerable(self, tick: int) -> bool:
        return tick < self.player.invulnerable_until

    def state(self, tick: int) -> LifeState:
        if self.destroyed:
            return LifeState.DESTROYED
        if self._respawning:
            return LifeState.RESPAWNING
        if self.is_invulnerable(tick):
            return LifeState.INVULNERABLE
        return LifeState.ALIVE

    # ----------------------------
    # Resources
    # ----------------------------

    def burn_fuel(self, inputs: InputState) -> bool:
        """Consume one tick of fuel; True when the tank ran dry"""
        cfg = self.config
        burn = cfg.fuel_burn_rate * (cfg.ascend_burn_factor if inputs.up else 1.0)
        self.player.fuel = self.player.fuel - burn
        return self.player.fuel <= 0.0

    def refuel(self, amount: float):
        self.player.fuel = self.player.fuel + amount

    def add_life(self):
        self.player.lives = self.player.lives + 1

    def can_fire(self, tick: int) -> bool:
        last = self.player.last_fire
        return last is None or tick - last >= self.config.player_fire_ticks

    # ----------------------------
    # Transitions
    # ----------------------------

    def destructive_event(self, tick: int, shielded: bool = False, cause: str = "collision") -> Outcome:
        """Apply a crash/hit/starvation event"""
        if self.destroyed:
            return Outcome.IGNORED
        if shielded or self.is_invulnerable(tick):
            logger.debug("Destructive event (%s) suppressed at tick %d", cause, tick)
            return Outcome.IGNORED

        self.player.lives = self.player.lives - 1
        if self.player.lives <= 0:
            logger.info("Player destroyed by %s at tick %d", cause, tick)
            return Outcome.DESTROYED

        self._respawning = True
        self._respawn(tick)
        logger.info("Player lost a life to %s at tick %d, %d left", cause, tick, self.player.lives)
        return Outcome.RESPAWNED

    def end_tick(self):
        """RESPAWNING only lasts until the tick that caused it is over"""
        self._respawning = False

    def _respawn(self, tick: int):
        cfg = self.config
        p = self.player
        p.x, p.y = cfg.spawn_point
        p.tilt = 0.0
        p.fuel = max(p.fuel, cfg.respawn_fuel_floor)
        p.invulnerable_until = tick + cfg.invulnerable_ticks
        self.registry.clear_projectiles()
