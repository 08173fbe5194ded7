"""
Headless rasterizer: turns a FrameSnapshot into an RGB array (for rgb_array
rendering and video recording). Purely a consumer of the snapshot.
"""

from __future__ import annotations

import numpy as np

from .config import EngineConfig
from .engine import FrameSnapshot
from .entities import EffectType, ObstacleType, ProjectileTag

LAND = (6, 78, 59)
RIVER = (37, 99, 235)
PLAYER = (226, 232, 240)
SHIELD = (56, 189, 248)
PLAYER_SHOT = (250, 204, 21)
ESCORT = (148, 163, 184)
ENEMY_SHOT = (220, 38, 38)

OBSTACLE_COLORS = {
    ObstacleType.STATIC: (120, 113, 108),
    ObstacleType.PATROL_AIR: (190, 18, 60),
    ObstacleType.PATROL_SEA: (30, 64, 175),
    ObstacleType.SLICK: (126, 34, 206),
    ObstacleType.FUEL: (245, 158, 11),
    ObstacleType.LIFE: (239, 68, 68),
    ObstacleType.GROUND_SHOOTER: (21, 128, 61),
    ObstacleType.ARMORED_SHOOTER: (63, 98, 18),
    ObstacleType.ESCORT: (14, 165, 233),
    ObstacleType.GUIDED: (251, 146, 60),
    ObstacleType.SHIELD: (56, 189, 248),
    ObstacleType.BOSS: (17, 24, 39),
}


def fill_rect(frame: np.ndarray, x: float, y: float, w: float, h: float, color) -> None:
    """Fill an axis-aligned box, clipped to the frame"""
    height, width = frame.shape[:2]
    x0, y0 = max(int(x), 0), max(int(y), 0)
    x1, y1 = min(int(x + w), width), min(int(y + h), height)
    if x0 < x1 and y0 < y1:
        frame[y0:y1, x0:x1] = color


def rasterize(snapshot: FrameSnapshot, config: EngineConfig) -> np.ndarray:
    frame = np.empty((config.height, config.width, 3), dtype=np.uint8)
    frame[:] = LAND
    fill_rect(frame, config.channel_left, 0, config.channel_right - config.channel_left, config.height, RIVER)

    for obs in snapshot.obstacles:
        fill_rect(frame, obs.x, obs.y, obs.width, obs.height, OBSTACLE_COLORS[obs.type])
        if obs.max_health:
            ratio = max(obs.health or 0, 0) / obs.max_health
            fill_rect(frame, obs.x, obs.y - 6, obs.width * ratio, 4, (239, 68, 68))

    for q in snapshot.particles:
        fill_rect(frame, q.x, q.y, q.size, q.size, q.color)

    for b in snapshot.projectiles:
        color = ENEMY_SHOT if b.enemy else (ESCORT if b.tag == ProjectileTag.ESCORT else PLAYER_SHOT)
        fill_rect(frame, b.x, b.y, b.width, b.height, color)

    p = snapshot.player
    for ex, ey, ew, eh in p.escorts:
        fill_rect(frame, ex, ey, ew, eh, ESCORT)
    # blink while invulnerable
    if not p.invulnerable or (snapshot.tick // 6) % 2 == 0:
        color = SHIELD if p.has_effect(EffectType.SHIELD) else PLAYER
        fill_rect(frame, p.x, p.y, p.width, p.height, color)
    return frame
