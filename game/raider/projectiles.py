"""
Projectile ballistics: firing, homing, expiry and enemy hits on the player
"""

from __future__ import annotations

import logging
import math
from typing import List, Optional

from .config import EngineConfig
from .entities import EffectType, Obstacle, ObstacleType, Projectile, ProjectileTag
from .motion import InputState
from .player_state import Outcome, PlayerStateMachine
from .policy import policy_for
from .powerups import PowerUpManager
from .registry import EntityRegistry
from .utils import normalize, rects_overlap

logger = logging.getLogger(__name__)

BOSS_SPREAD = 0.25  # radians either side of the aimed shot


class ProjectileSystem:
    def __init__(
        self,
        config: EngineConfig,
        registry: EntityRegistry,
        player_state: PlayerStateMachine,
        powerups: PowerUpManager,
    ):
        self.config = config
        self.registry = registry
        self.player_state = player_state
        self.powerups = powerups

    # ----------------------------
    # Firing
    # ----------------------------

    def fire_player(self, tick: int, inputs: InputState) -> int:
        """Player gun plus every escort gun, sharing the player's rate limit"""
        if not inputs.fire or not self.player_state.can_fire(tick):
            return 0
        cfg = self.config
        player = self.player_state.player
        speed = cfg.projectile_speed

        self.registry.add_projectile(Projectile(
            x=player.x + player.width / 2.0 - 3.0,
            y=player.y,
            vx=0.0,
            vy=-speed,
            tag=ProjectileTag.PRIMARY,
        ))
        player.last_fire = tick
        shots = 1

        for escort, ex, ey in self.powerups.escort_positions(player.center):
            self.registry.add_projectile(Projectile(
                x=ex + escort.width / 2.0 - 2.0,
                y=ey,
                vx=0.0,
                vy=-speed,
                tag=ProjectileTag.ESCORT,
                width=4.0,
                height=10.0,
            ))
            escort.last_fire = tick
            shots += 1
        return shots

    def fire_enemies(self, tick: int) -> int:
        """Shooter-type obstacles on screen aim at the player centre"""
        cfg = self.config
        px, py = self.player_state.player.center
        shots = 0
        for obs in self.registry.live_obstacles():
            interval = policy_for(obs.type).fire_interval
            if interval is None:
                continue
            if not (0 < obs.y < cfg.height - 100):
                continue
            if obs.last_fire is not None and tick - obs.last_fire < interval:
                continue

            ox, oy = obs.center
            dx, dy = normalize(px - ox, py - oy)
            if dx == 0.0 and dy == 0.0:
                continue
            angles = [0.0]
            if obs.type == ObstacleType.BOSS:
                angles = [-BOSS_SPREAD, 0.0, BOSS_SPREAD]
            for angle in angles:
                c, s = math.cos(angle), math.sin(angle)
                vx = (dx * c - dy * s) * cfg.enemy_projectile_speed
                vy = (dx * s + dy * c) * cfg.enemy_projectile_speed
                self.registry.add_projectile(Projectile(
                    x=ox, y=oy, vx=vx, vy=vy, enemy=True, tag=ProjectileTag.ENEMY, width=8.0, height=8.0,
                ))
                shots += 1
            obs.last_fire = tick
        return shots

    # ----------------------------
    # Ballistics
    # ----------------------------

    def integrate(self, tick: int) -> None:
        guided = self.powerups.is_active(EffectType.GUIDED, tick)
        for proj in self.registry.live_projectiles():
            if guided and not proj.enemy and proj.tag == ProjectileTag.PRIMARY:
                self.steer(proj)
            proj.x += proj.vx
            proj.y += proj.vy
            if self._out_of_bounds(proj):
                self.registry.kill(proj)

    def nearest_hostile(self, proj: Projectile) -> Optional[Obstacle]:
        best, best_d2 = None, math.inf
        px, py = proj.center
        for obs in self.registry.live_obstacles():
            if not policy_for(obs.type).hostile:
                continue
            ox, oy = obs.center
            d2 = (ox - px) ** 2 + (oy - py) ** 2
            if d2 < best_d2:
                best, best_d2 = obs, d2
        return best

    def steer(self, proj: Projectile) -> bool:
        """Bend the heading toward the nearest hostile, keeping speed.

        Returns False when no adjustment was made (no target, zero distance
        or a degenerate heading).
        """
        target = self.nearest_hostile(proj)
        if target is None:
            return False
        speed = math.hypot(proj.vx, proj.vy)
        if speed <= 0.0 or not math.isfinite(speed):
            return False
        tx, ty = target.center
        px, py = proj.center
        to_x, to_y = normalize(tx - px, ty - py)
        if to_x == 0.0 and to_y == 0.0:
            return False
        turn = self.config.homing_turn
        hx, hy = normalize(proj.vx / speed + to_x * turn, proj.vy / speed + to_y * turn)
        if hx == 0.0 and hy == 0.0:
            return False
        proj.vx, proj.vy = hx * speed, hy * speed
        return True

    def _out_of_bounds(self, proj: Projectile) -> bool:
        cfg = self.config
        m = cfg.purge_margin
        return proj.y < -m or proj.y > cfg.height + m or proj.x < -m or proj.x > cfg.width + m

    # ----------------------------
    # Enemy fire vs. player
    # ----------------------------

    def resolve_enemy_hits(self, tick: int) -> List[Outcome]:
        """Consume every enemy projectile touching the player"""
        cfg = self.config
        player = self.player_state.player
        shielded = self.powerups.is_active(EffectType.SHIELD, tick)
        outcomes = []
        for proj in self.registry.live_projectiles(enemy=True):
            if not rects_overlap(player.x, player.y, player.width, player.height,
                                 proj.x, proj.y, proj.width, proj.height, cfg.hitbox_padding):
                continue
            self.registry.kill(proj)
            outcome = self.player_state.destructive_event(tick, shielded=shielded, cause="enemy fire")
            outcomes.append(outcome)
            if outcome == Outcome.DESTROYED:
                break
        return outcomes
