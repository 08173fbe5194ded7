"""
Cosmetic particles (explosions, sparks, jet trail). Nothing here affects gameplay.
"""

from __future__ import annotations

from typing import Tuple

import numpy as np

from .entities import Particle, Player
from .registry import EntityRegistry


class ParticleEmitter:
    def __init__(self, registry: EntityRegistry, rng: np.random.Generator):
        self.registry = registry
        self.rng = rng

    def explosion(self, x: float, y: float, color: Tuple[int, int, int] = (239, 68, 68), count: int = 20):
        for _ in range(count):
            vx, vy = (self.rng.random(2) - 0.5) * 10.0
            self.registry.add_particle(Particle(
                x=x, y=y, vx=float(vx), vy=float(vy),
                life=40.0 + float(self.rng.random()) * 20.0, max_life=60.0, color=color,
            ))

    def trail(self, player: Player, scroll_speed: float, slowed: bool, boosting: bool):
        cx = player.x + player.width / 2.0
        color = (100, 100, 100) if slowed else ((255, 150, 50) if boosting else (255, 255, 255))
        self.registry.add_particle(Particle(
            x=cx + (float(self.rng.random()) - 0.5) * 4.0,
            y=player.y + player.height - 5.0,
            vx=(float(self.rng.random()) - 0.5) * 1.5,
            vy=float(self.rng.random()) * 4.0 + scroll_speed / 2.0,
            life=10.0, max_life=10.0, size=5.0 if slowed else 4.0, color=color,
        ))

    def update(self):
        for p in self.registry.live_particles():
            p.x += p.vx
            p.y += p.vy
            p.life -= 1
            if p.life <= 0:
                self.registry.kill(p)
