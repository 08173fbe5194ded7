"""
Per-type obstacle policy table.

Every behavioural decision that depends on an obstacle's type (can it be
shot, does it score, where does it spawn, does it shoot back) is looked up
here instead of being spread over conditionals in the systems.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

from .entities import EffectType, ObstacleType


class Placement(str, Enum):
    CHANNEL = "channel"
    BANK = "bank"


class PickupEffect(str, Enum):
    FUEL = "fuel"
    LIFE = "life"
    ESCORT = "escort"
    GUIDED = "guided"
    SHIELD = "shield"


@dataclass(frozen=True)
class ObstaclePolicy:
    destructible: bool
    shootable: bool  # does a player projectile stop on it
    kill_score: int = 0
    survival_bonus: bool = False
    pickup: Optional[PickupEffect] = None
    placement: Placement = Placement.CHANNEL
    drifts: bool = False
    fire_interval: Optional[int] = None  # ticks between enemy shots

    @property
    def is_pickup(self) -> bool:
        return self.pickup is not None

    @property
    def hostile(self) -> bool:
        """Valid homing target"""
        return self.destructible and not self.is_pickup


POLICIES: Dict[ObstacleType, ObstaclePolicy] = {
    ObstacleType.STATIC: ObstaclePolicy(destructible=False, shootable=True),
    ObstacleType.SLICK: ObstaclePolicy(destructible=False, shootable=False, survival_bonus=True),
    ObstacleType.PATROL_AIR: ObstaclePolicy(
        destructible=True, shootable=True, kill_score=50, survival_bonus=True, drifts=True,
    ),
    ObstacleType.PATROL_SEA: ObstaclePolicy(
        destructible=True, shootable=True, kill_score=100, survival_bonus=True, drifts=True,
        fire_interval=120,
    ),
    ObstacleType.GROUND_SHOOTER: ObstaclePolicy(
        destructible=True, shootable=True, kill_score=100, survival_bonus=True,
        placement=Placement.BANK, fire_interval=120,
    ),
    ObstacleType.ARMORED_SHOOTER: ObstaclePolicy(
        destructible=True, shootable=True, kill_score=150, survival_bonus=True,
        placement=Placement.BANK, fire_interval=90,
    ),
    ObstacleType.BOSS: ObstaclePolicy(
        destructible=True, shootable=True, kill_score=1000, survival_bonus=True, drifts=True,
        fire_interval=60,
    ),
    ObstacleType.FUEL: ObstaclePolicy(destructible=True, shootable=True, pickup=PickupEffect.FUEL),
    ObstacleType.LIFE: ObstaclePolicy(destructible=True, shootable=True, pickup=PickupEffect.LIFE),
    ObstacleType.ESCORT: ObstaclePolicy(destructible=True, shootable=True, pickup=PickupEffect.ESCORT),
    ObstacleType.GUIDED: ObstaclePolicy(destructible=True, shootable=True, pickup=PickupEffect.GUIDED),
    ObstacleType.SHIELD: ObstaclePolicy(destructible=True, shootable=True, pickup=PickupEffect.SHIELD),
}

EFFECT_FOR_PICKUP = {
    PickupEffect.ESCORT: EffectType.ESCORT,
    PickupEffect.GUIDED: EffectType.GUIDED,
    PickupEffect.SHIELD: EffectType.SHIELD,
}


def policy_for(obstacle_type: ObstacleType) -> ObstaclePolicy:
    return POLICIES[obstacle_type]
