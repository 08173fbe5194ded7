"""
Game entity dataclasses
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class ObstacleType(str, Enum):
    STATIC = "static-hazard"
    PATROL_AIR = "patrol-air"
    PATROL_SEA = "patrol-sea"
    SLICK = "slick-hazard"
    FUEL = "fuel-pickup"
    LIFE = "life-pickup"
    GROUND_SHOOTER = "ground-shooter"
    ARMORED_SHOOTER = "armored-shooter"
    ESCORT = "escort-pickup"
    GUIDED = "guided-pickup"
    SHIELD = "shield-pickup"
    BOSS = "elite-boss"


class EffectType(str, Enum):
    ESCORT = "escort"
    GUIDED = "guided"
    SHIELD = "shield"


class ProjectileTag(str, Enum):
    """Visual tag; PRIMARY is the only one homing applies to"""
    PRIMARY = "primary"
    ESCORT = "escort"
    ENEMY = "enemy"


@dataclass
class Player:
    """The craft. Lives and fuel are clamped on every assignment."""
    x: float
    y: float
    width: float = 40.0
    height: float = 40.0
    tilt: float = 0.0
    max_lives: int = 5
    max_fuel: float = 100.0
    lives: int = 3
    fuel: float = 100.0
    invulnerable_until: int = 0
    last_fire: Optional[int] = None

    def __setattr__(self, name, value):
        if name == "lives":
            value = int(min(max(value, 0), self.max_lives))
        elif name == "fuel":
            value = float(min(max(value, 0.0), self.max_fuel))
        object.__setattr__(self, name, value)

    @property
    def center(self):
        return self.x + self.width / 2.0, self.y + self.height / 2.0


@dataclass
class Obstacle:
    """Anything spawned into the world: hazards, enemies and pickups"""
    type: ObstacleType
    x: float
    y: float
    width: float
    height: float
    vx: float = 0.0
    last_fire: Optional[int] = None
    health: Optional[int] = None
    max_health: Optional[int] = None
    alive: bool = True

    @property
    def center(self):
        return self.x + self.width / 2.0, self.y + self.height / 2.0


@dataclass
class Projectile:
    x: float
    y: float
    vx: float
    vy: float
    enemy: bool = False
    tag: ProjectileTag = ProjectileTag.PRIMARY
    width: float = 6.0
    height: float = 12.0
    alive: bool = True

    @property
    def center(self):
        return self.x + self.width / 2.0, self.y + self.height / 2.0


@dataclass
class Particle:
    """Cosmetic only"""
    x: float
    y: float
    vx: float
    vy: float
    life: float
    max_life: float
    size: float = 6.0
    color: Tuple[int, int, int] = (255, 255, 255)
    alive: bool = True


@dataclass
class PowerUpEffect:
    type: EffectType
    expires_at: int


@dataclass
class HelperEscort:
    """Escort craft flying at a fixed offset beside the player"""
    side: str  # "left" | "right"
    offset_x: float
    offset_y: float
    last_fire: Optional[int] = None
    width: float = 20.0
    height: float = 20.0
