"""
RaiderEngine - the per-tick simulation driver
---------------------------------------------
One call to :meth:`RaiderEngine.advance` runs exactly one tick, always in
this order:

    motion -> difficulty -> spawn -> projectiles -> collisions
           -> player state / power-ups / score -> registry cleanup -> snapshot

Later phases read what earlier phases produced in the same tick (collisions
see this tick's positions and spawns), so the order must not change. All
timestamps are tick counts; there is no wall-clock access anywhere in the
simulation. All randomness comes from the injected generator.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Dict, List, Mapping, Optional, Tuple

import numpy as np

from .collisions import CollisionResolver
from .config import EngineConfig
from .difficulty import DifficultyScaler
from .effects import ParticleEmitter
from .entities import EffectType, ObstacleType, ProjectileTag
from .motion import InputState, MotionController, MotionState
from .player_state import LifeState, Outcome, PlayerStateMachine
from .powerups import PowerUpManager
from .projectiles import ProjectileSystem
from .registry import EntityRegistry
from .score import ScoreKeeper
from .spawner import SpawnDirector
from .utils import make_rng

logger = logging.getLogger(__name__)

EVENT_KEYS = ("shots", "enemy_shots", "hits", "kills", "pickups", "deaths", "suppressed", "spawns")


def new_events() -> Dict[str, float]:
    return {k: 0.0 for k in EVENT_KEYS}


# ----------------------------
# Read-only snapshot records
# ----------------------------

@dataclass(frozen=True)
class PlayerView:
    x: float
    y: float
    width: float
    height: float
    tilt: float
    lives: int
    fuel: float
    invulnerable: bool
    speed_multiplier: float
    effects: Tuple[Tuple[EffectType, int], ...]
    escorts: Tuple[Tuple[float, float, float, float], ...]

    def has_effect(self, effect: EffectType) -> bool:
        return any(e == effect for e, _ in self.effects)


@dataclass(frozen=True)
class ObstacleView:
    type: ObstacleType
    x: float
    y: float
    width: float
    height: float
    health: Optional[int] = None
    max_health: Optional[int] = None


@dataclass(frozen=True)
class ProjectileView:
    x: float
    y: float
    width: float
    height: float
    vx: float
    vy: float
    enemy: bool
    tag: ProjectileTag


@dataclass(frozen=True)
class ParticleView:
    x: float
    y: float
    size: float
    color: Tuple[int, int, int]
    alpha: float


@dataclass(frozen=True)
class FrameSnapshot:
    tick: int
    level: int
    score: int
    scroll_speed: float
    base_scroll: float
    river_offset: float
    state: LifeState
    player: PlayerView
    obstacles: Tuple[ObstacleView, ...]
    projectiles: Tuple[ProjectileView, ...]
    particles: Tuple[ParticleView, ...]
    events: Mapping[str, float]
    game_over: bool
    player_name: str


@dataclass(frozen=True)
class RunSummary:
    """Handed to leaderboard / high-score collaborators when the run ends"""
    player_name: str
    score: int
    ticks: int
    level: int


class RaiderEngine:
    """Frame-simulation engine. Not re-entrant: call :meth:`advance` once per frame."""

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        rng: Optional[np.random.Generator] = None,
        seed: Optional[int] = None,
        player_name: str = "PLAYER",
    ):
        self.config = config or EngineConfig()
        self.player_name = player_name
        self._game_over_listeners: List[Callable[[RunSummary], None]] = []
        self.reset(rng=rng, seed=seed)

    def reset(self, rng: Optional[np.random.Generator] = None, seed: Optional[int] = None) -> FrameSnapshot:
        cfg = self.config
        self.rng = rng if rng is not None else make_rng(seed)
        # Particles draw from their own stream so spawn rolls stay reproducible
        self.cosmetic_rng = self.rng.spawn(1)[0]

        self.tick = 0
        self.level = 0
        self.game_over = False
        self.summary: Optional[RunSummary] = None

        self.registry = EntityRegistry()
        self.score = ScoreKeeper()
        self.scaler = DifficultyScaler(cfg)
        self.motion_state = MotionState(scroll_speed=cfg.initial_scroll, base_scroll=cfg.initial_scroll)
        self.motion = MotionController(cfg)
        self.player_state = PlayerStateMachine(cfg, self.registry)
        self.powerups = PowerUpManager(cfg)
        self.emitter = ParticleEmitter(self.registry, self.cosmetic_rng)
        self.spawner = SpawnDirector(cfg, self.registry, self.rng)
        self.projectiles = ProjectileSystem(cfg, self.registry, self.player_state, self.powerups)
        self.collisions = CollisionResolver(
            cfg, self.registry, self.player_state, self.powerups, self.score, self.emitter,
        )

        self._events = new_events()
        self._snapshot = self.snapshot()
        return self._snapshot

    @property
    def player(self):
        return self.player_state.player

    def add_game_over_listener(self, listener: Callable[[RunSummary], None]) -> None:
        self._game_over_listeners.append(listener)

    # ----------------------------
    # Tick
    # ----------------------------

    def advance(self, inputs: Optional[InputState] = None) -> FrameSnapshot:
        if self.game_over:
            return self._snapshot
        inputs = inputs or InputState()
        self.tick += 1
        tick = self.tick
        events = self._events = new_events()
        outcomes: List[Outcome] = []

        # 1. motion
        bank_crash = self.motion.update_player(self.player, inputs, self.motion_state)
        self.motion.advance_obstacles(self.registry, self.motion_state.scroll_speed)

        # 2. difficulty
        difficulty = self.scaler(tick, self.score.total)
        self.level = difficulty.level
        self.motion_state.base_scroll = difficulty.base_scroll

        # 3. spawn
        if self.spawner.step(tick, self.level, self.motion_state.scroll_speed) is not None:
            events["spawns"] += 1

        # 4. projectiles
        events["shots"] += self.projectiles.fire_player(tick, inputs)
        events["enemy_shots"] += self.projectiles.fire_enemies(tick)
        self.projectiles.integrate(tick)
        for outcome in self.projectiles.resolve_enemy_hits(tick):
            self._count(outcome, events)
            outcomes.append(outcome)

        # 5. collisions
        if not self.player_state.destroyed:
            self.collisions.resolve_projectiles(tick, events)
            outcomes.append(self.collisions.resolve_player(tick, self.motion_state, events))
        if bank_crash and not self.player_state.destroyed:
            outcomes.append(self._destructive(tick, "bank", events))
        self.collisions.resolve_exits(self.motion_state.scroll_speed)

        # 6. player state / power-ups
        if not self.player_state.destroyed and self.player_state.burn_fuel(inputs):
            outcomes.append(self._destructive(tick, "fuel starvation", events))
        self.powerups.expire(tick)
        if Outcome.RESPAWNED in outcomes:
            self.motion_state.scroll_speed = self.motion_state.base_scroll

        # 7. cleanup
        self.emitter.update()
        if tick % 2 == 0 and not self.player_state.is_invulnerable(tick):
            self.emitter.trail(
                self.player, self.motion_state.scroll_speed,
                slowed=self.motion_state.speed_multiplier < 0.8, boosting=inputs.up,
            )
        cfg = self.config
        self.registry.purge_out_of_bounds(cfg.width, cfg.height, cfg.purge_margin)
        self.registry.compact()

        self.game_over = self.player_state.destroyed
        self._snapshot = self.snapshot()
        self.player_state.end_tick()
        if self.game_over:
            self._finish()
        return self._snapshot

    def _destructive(self, tick: int, cause: str, events: Dict[str, float]) -> Outcome:
        shielded = self.powerups.is_active(EffectType.SHIELD, tick)
        outcome = self.player_state.destructive_event(tick, shielded=shielded, cause=cause)
        self._count(outcome, events)
        return outcome

    @staticmethod
    def _count(outcome: Outcome, events: Dict[str, float]) -> None:
        if outcome == Outcome.IGNORED:
            events["suppressed"] += 1
        else:
            events["deaths"] += 1

    def _finish(self):
        self.summary = RunSummary(
            player_name=self.player_name, score=self.score.total, ticks=self.tick, level=self.level,
        )
        logger.info("Game over for %s: score %d after %d ticks", self.player_name, self.score.total, self.tick)
        for listener in self._game_over_listeners:
            listener(self.summary)

    # ----------------------------
    # Snapshot
    # ----------------------------

    def snapshot(self) -> FrameSnapshot:
        tick = self.tick
        p = self.player
        effects = tuple(
            (effect, record.expires_at)
            for effect, record in sorted(self.powerups.effects.items(), key=lambda kv: kv[0].value)
            if tick < record.expires_at
        )
        escorts = tuple(
            (x, y, escort.width, escort.height)
            for escort, x, y in self.powerups.escort_positions(p.center)
        )
        player = PlayerView(
            x=p.x, y=p.y, width=p.width, height=p.height, tilt=p.tilt,
            lives=p.lives, fuel=p.fuel,
            invulnerable=self.player_state.is_invulnerable(tick),
            speed_multiplier=self.motion_state.speed_multiplier,
            effects=effects, escorts=escorts,
        )
        obstacles = tuple(
            ObstacleView(o.type, o.x, o.y, o.width, o.height, o.health, o.max_health)
            for o in self.registry.live_obstacles()
        )
        projectiles = tuple(
            ProjectileView(b.x, b.y, b.width, b.height, b.vx, b.vy, b.enemy, b.tag)
            for b in self.registry.live_projectiles()
        )
        particles = tuple(
            ParticleView(q.x, q.y, q.size, q.color, max(0.0, q.life / q.max_life) if q.max_life else 0.0)
            for q in self.registry.live_particles()
        )
        return FrameSnapshot(
            tick=tick,
            level=self.level,
            score=self.score.total,
            scroll_speed=self.motion_state.scroll_speed,
            base_scroll=self.motion_state.base_scroll,
            river_offset=self.motion_state.river_offset,
            state=self.player_state.state(tick),
            player=player,
            obstacles=obstacles,
            projectiles=projectiles,
            particles=particles,
            events=MappingProxyType(dict(self._events)),
            game_over=self.game_over,
            player_name=self.player_name,
        )
