"""
Collision detection and per-type resolution
"""

from __future__ import annotations

import logging
import math
from typing import Dict

from .config import EngineConfig
from .effects import ParticleEmitter
from .entities import EffectType, Obstacle, ObstacleType
from .motion import MotionState
from .player_state import Outcome, PlayerStateMachine
from .policy import EFFECT_FOR_PICKUP, PickupEffect, policy_for
from .powerups import PowerUpManager
from .registry import EntityRegistry
from .score import ScoreKeeper
from .utils import rects_overlap

logger = logging.getLogger(__name__)


class CollisionResolver:
    def __init__(
        self,
        config: EngineConfig,
        registry: EntityRegistry,
        player_state: PlayerStateMachine,
        powerups: PowerUpManager,
        score: ScoreKeeper,
        emitter: ParticleEmitter,
    ):
        self.config = config
        self.registry = registry
        self.player_state = player_state
        self.powerups = powerups
        self.score = score
        self.emitter = emitter

    # ----------------------------
    # Shared effects
    # ----------------------------

    def apply_pickup(self, obs: Obstacle, tick: int, events: Dict[str, float]) -> None:
        """Same effect whether the pickup was touched or shot"""
        effect = policy_for(obs.type).pickup
        if effect == PickupEffect.FUEL:
            self.player_state.refuel(self.config.fuel_pickup_amount)
        elif effect == PickupEffect.LIFE:
            self.player_state.add_life()
        elif effect is not None:
            self.powerups.activate(EFFECT_FOR_PICKUP[effect], tick)
        self.registry.kill(obs)
        events["pickups"] += 1
        self.emitter.explosion(*obs.center, color=(245, 158, 11), count=5)

    def damage(self, obs: Obstacle, events: Dict[str, float]) -> bool:
        """One hit on a destructible obstacle; True if it was destroyed"""
        policy = policy_for(obs.type)
        events["hits"] += 1
        if obs.health is not None:
            obs.health -= 1
            if obs.health > 0:
                self.emitter.explosion(*obs.center, color=(251, 191, 36), count=5)
                return False
        self.registry.kill(obs)
        self.emitter.explosion(*obs.center, count=15)
        reason = "boss" if obs.type == ObstacleType.BOSS else "kill"
        self.score.award(policy.kill_score, reason)
        events["kills"] += 1
        logger.debug("Destroyed %s (+%d)", obs.type.value, policy.kill_score)
        return True

    # ----------------------------
    # Player projectiles vs. obstacles
    # ----------------------------

    def resolve_projectiles(self, tick: int, events: Dict[str, float]) -> None:
        pad = self.config.hitbox_padding
        for proj in self.registry.live_projectiles(enemy=False):
            for obs in self.registry.live_obstacles():
                policy = policy_for(obs.type)
                if not policy.shootable:
                    continue
                if not rects_overlap(obs.x, obs.y, obs.width, obs.height,
                                     proj.x, proj.y, proj.width, proj.height, pad):
                    continue
                self.registry.kill(proj)
                if not policy.destructible:
                    self.emitter.explosion(proj.x, proj.y, color=(251, 191, 36), count=5)
                elif policy.is_pickup:
                    self.apply_pickup(obs, tick, events)
                else:
                    self.damage(obs, events)
                break

    # ----------------------------
    # Player vs. obstacles
    # ----------------------------

    def resolve_player(self, tick: int, motion: MotionState, events: Dict[str, float]) -> Outcome:
        """Returns the worst outcome of this tick's player contacts"""
        cfg = self.config
        player = self.player_state.player
        shielded = self.powerups.is_active(EffectType.SHIELD, tick)
        worst = Outcome.IGNORED

        for obs in self.registry.live_obstacles():
            if not rects_overlap(player.x, player.y, player.width, player.height,
                                 obs.x, obs.y, obs.width, obs.height, cfg.hitbox_padding):
                continue
            policy = policy_for(obs.type)

            if policy.is_pickup:
                self.apply_pickup(obs, tick, events)
            elif obs.type == ObstacleType.SLICK:
                if motion.speed_multiplier > cfg.slick_threshold:
                    motion.speed_multiplier = cfg.slick_multiplier
                    self.emitter.explosion(player.x, player.y, color=(168, 85, 247), count=5)
            else:
                outcome = self.player_state.destructive_event(tick, shielded=shielded, cause=obs.type.value)
                if outcome == Outcome.IGNORED and not shielded:
                    # invulnerable: fly through
                    continue
                if outcome == Outcome.IGNORED:
                    events["suppressed"] += 1
                else:
                    events["deaths"] += 1
                    self.emitter.explosion(*player.center, color=(59, 130, 246), count=30)
                # bosses only take damage from projectiles
                if policy.destructible and obs.health is None:
                    self.damage(obs, events)
                if outcome != Outcome.IGNORED:
                    worst = outcome
                if outcome == Outcome.DESTROYED:
                    break
        return worst

    # ----------------------------
    # Obstacles leaving the screen
    # ----------------------------

    def resolve_exits(self, scroll_speed: float) -> int:
        """Remove obstacles past the bottom edge; survivors earn a speed-scaled bonus"""
        cfg = self.config
        bonus = 0
        for obs in self.registry.live_obstacles():
            if obs.y <= cfg.height:
                continue
            self.registry.kill(obs)
            if policy_for(obs.type).survival_bonus:
                points = int(math.floor(10 * (scroll_speed / cfg.initial_scroll)))
                self.score.award(max(points, 0), "survival")
                bonus += max(points, 0)
        return bonus
