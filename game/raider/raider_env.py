"""
RaiderEnv - Gymnasium wrapper around the river raid engine
----------------------------------------------------------
- RaiderEngine for simulation (one env step == one engine tick)
- Gymnasium API
- MultiBinary(5) action space: [up, down, left, right, fire]
- Vector observation: player state + K nearest obstacles + M nearest enemy shots
- Reward from score gained, pickups, shots and lost lives
- Arcade window for "human" rendering, numpy rasterizer for "rgb_array"

Install:
    pip install -e .

Quick test:
    python -m game.raider.raider_env
"""

from __future__ import annotations

import math
from typing import Any, Dict, Optional

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from .config import EngineConfig
from .engine import FrameSnapshot, RaiderEngine
from .entities import EffectType, ObstacleType
from .motion import InputState
from .render import rasterize
from .utils import clamp

OBSTACLE_TYPES = list(ObstacleType)

DEFAULT_REWARD = {
    "R_SCORE": 0.01,   # per point
    "R_PICKUP": 0.5,
    "R_SHOT": 0.005,
    "R_ALIVE": 0.001,
    "R_DEATH": 5.0,    # per life lost
}


class RaiderEnv(gym.Env):
    """Side-scrolling river raid environment"""

    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": 60}

    def __init__(
        self,
        render_mode: Optional[str] = None,
        engine_config: Optional[Dict[str, Any]] = None,
        max_steps: int = 3600,  # 60s at 60 ticks/s
        k_obstacles: int = 6,
        m_projectiles: int = 4,
        reward_config: Optional[Dict[str, float]] = None,
        player_name: str = "AGENT",
    ):
        super().__init__()
        assert render_mode is None or render_mode in self.metadata["render_modes"]
        self.render_mode = render_mode
        self.max_steps = max_steps
        self.k_obstacles = k_obstacles
        self.m_projectiles = m_projectiles
        self.reward_config = {**DEFAULT_REWARD, **(reward_config or {})}

        config = EngineConfig.from_dict(engine_config or {})
        self.engine = RaiderEngine(config=config, player_name=player_name)
        self.last_snapshot: Optional[FrameSnapshot] = None

        # up, down, left, right, fire
        self.action_space = spaces.MultiBinary(5)

        # Player: pos(2) fuel lives tilt scroll invulnerable shield guided escorts
        # Each obstacle: rel pos(2) size(2) type(1)
        # Each enemy projectile: rel pos(2) vel(2)
        obs_dim = 10 + self.k_obstacles * 5 + self.m_projectiles * 4
        self.observation_space = spaces.Box(low=-1.0, high=1.0, shape=(obs_dim,), dtype=np.float32)

        self._window = None
        self._step_count = 0
        self._totals: Dict[str, float] = {}

    # ----------------------------
    # Gym API
    # ----------------------------

    def reset(self, seed: Optional[int] = None, options: Optional[dict] = None):
        super().reset(seed=seed)
        # the engine draws from the env's seeded generator
        self.last_snapshot = self.engine.reset(rng=self.np_random)
        self._step_count = 0
        self._totals = {"kills": 0.0, "pickups": 0.0, "deaths": 0.0, "shots": 0.0}
        return self._get_obs(), self._get_info()

    def step(self, action):
        action = np.asarray(action).astype(bool)
        inputs = InputState(*(bool(a) for a in action[:5]))

        prev_score = self.last_snapshot.score
        snap = self.engine.advance(inputs)
        self.last_snapshot = snap
        for key in self._totals:
            self._totals[key] += snap.events.get(key, 0.0)

        reward = self._compute_reward(snap, snap.score - prev_score)

        terminated = snap.game_over
        self._step_count += 1
        truncated = self._step_count >= self.max_steps

        if self.render_mode == "human":
            self.render()

        return self._get_obs(), reward, terminated, truncated, self._get_info()

    # ----------------------------
    # Observation / reward / info
    # ----------------------------

    def _get_obs(self) -> np.ndarray:
        snap = self.last_snapshot
        cfg = self.engine.config
        p = snap.player
        px, py = p.x + p.width / 2, p.y + p.height / 2

        obs_parts = [
            px / cfg.width * 2 - 1,
            py / cfg.height * 2 - 1,
            p.fuel / cfg.max_fuel * 2 - 1,
            p.lives / cfg.max_lives * 2 - 1,
            clamp(p.tilt / max(1e-6, cfg.tilt_max), -1, 1),
            clamp(snap.scroll_speed / cfg.scroll_cap * 2 - 1, -1, 1),
            1.0 if p.invulnerable else -1.0,
            1.0 if p.has_effect(EffectType.SHIELD) else -1.0,
            1.0 if p.has_effect(EffectType.GUIDED) else -1.0,
            len(p.escorts) / max(1, cfg.max_escorts) * 2 - 1,
        ]

        def dist2(e):
            return (e.x + e.width / 2 - px) ** 2 + (e.y + e.height / 2 - py) ** 2

        # Obstacles: top-K nearest
        obstacles = sorted(snap.obstacles, key=dist2)
        for i in range(self.k_obstacles):
            if i < len(obstacles):
                o = obstacles[i]
                obs_parts += [
                    clamp((o.x + o.width / 2 - px) / cfg.width, -1, 1),
                    clamp((o.y + o.height / 2 - py) / cfg.height, -1, 1),
                    clamp(o.width / cfg.width, -1, 1),
                    clamp(o.height / cfg.height, -1, 1),
                    OBSTACLE_TYPES.index(o.type) / (len(OBSTACLE_TYPES) - 1) * 2 - 1,
                ]
            else:
                obs_parts += [0.0, 0.0, 0.0, 0.0, 0.0]

        # Enemy projectiles: top-M nearest
        shots = sorted((b for b in snap.projectiles if b.enemy), key=dist2)
        speed = max(1e-6, cfg.enemy_projectile_speed)
        for i in range(self.m_projectiles):
            if i < len(shots):
                b = shots[i]
                obs_parts += [
                    clamp((b.x - px) / cfg.width, -1, 1),
                    clamp((b.y - py) / cfg.height, -1, 1),
                    clamp(b.vx / speed, -1, 1),
                    clamp(b.vy / speed, -1, 1),
                ]
            else:
                obs_parts += [0.0, 0.0, 0.0, 0.0]

        obs = np.array(obs_parts, dtype=np.float32)
        return np.clip(np.nan_to_num(obs, nan=0.0, posinf=1.0, neginf=-1.0), -1.0, 1.0)

    def _compute_reward(self, snap: FrameSnapshot, score_gain: int) -> float:
        rc = self.reward_config
        reward = rc["R_SCORE"] * score_gain
        reward += rc["R_PICKUP"] * snap.events.get("pickups", 0.0)
        reward -= rc["R_SHOT"] * snap.events.get("shots", 0.0)
        reward -= rc["R_DEATH"] * snap.events.get("deaths", 0.0)
        if not snap.game_over:
            reward += rc["R_ALIVE"]
        return float(reward) if math.isfinite(reward) else 0.0

    def _get_info(self) -> Dict[str, Any]:
        snap = self.last_snapshot
        return {
            "score": snap.score,
            "lives": snap.player.lives,
            "fuel": snap.player.fuel,
            "level": snap.level,
            "tick": snap.tick,
            "kills": self._totals.get("kills", 0.0),
            "pickups": self._totals.get("pickups", 0.0),
            "lives_lost": self._totals.get("deaths", 0.0),
            "num_obstacles": len(snap.obstacles),
            "num_projectiles": len(snap.projectiles),
            "step": self._step_count,
        }

    # ----------------------------
    # Rendering
    # ----------------------------

    def render(self):
        if self.render_mode is None:
            return None

        if self.render_mode == "rgb_array":
            return rasterize(self.last_snapshot, self.engine.config)

        if self._window is None:
            from .window import RaiderWindow
            cfg = self.engine.config
            self._window = RaiderWindow(self, cfg.width, cfg.height)
        self._window.on_draw()
        return None

    def close(self):
        if self._window is not None:
            self._window.close()
            self._window = None


# ----------------------------
# Quick sanity test
# ----------------------------

def run_random_episode(render: bool = True, seed: int = 42):
    """Run a random episode for testing"""
    env = RaiderEnv(render_mode="human" if render else None)
    obs, info = env.reset(seed=seed)

    terminated = False
    truncated = False
    total = 0.0

    print("Running episode... close the window to exit early.")

    import time
    while not (terminated or truncated):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total += reward

        if render and env._window:
            env._window.dispatch_events()
            env._window.on_draw()
            env._window.flip()
            time.sleep(1 / 60)

    print(f"Random episode return: {total:.2f}  score: {info['score']}  level: {info['level']}")
    env.close()
    return info


if __name__ == "__main__":
    run_random_episode(render=True)
