"""
Timed power-up effects and the helper escorts tied to them
"""

from __future__ import annotations

import logging
from typing import Dict, List

from .config import EngineConfig
from .entities import EffectType, HelperEscort, PowerUpEffect

logger = logging.getLogger(__name__)

# (lateral offset, vertical offset) of each escort pair
ESCORT_SLOTS = ((50.0, 20.0), (90.0, 40.0))


class PowerUpManager:
    def __init__(self, config: EngineConfig):
        self.config = config
        self.effects: Dict[EffectType, PowerUpEffect] = {}
        self.escorts: List[HelperEscort] = []

    def duration(self, effect: EffectType) -> int:
        cfg = self.config
        return {
            EffectType.SHIELD: cfg.shield_ticks,
            EffectType.GUIDED: cfg.guided_ticks,
            EffectType.ESCORT: cfg.escort_ticks,
        }[effect]

    def activate(self, effect: EffectType, tick: int) -> PowerUpEffect:
        """Install an effect, or push back its expiry if already running"""
        expires = tick + self.duration(effect)
        record = self.effects.get(effect)
        if record is None:
            record = PowerUpEffect(type=effect, expires_at=expires)
            self.effects[effect] = record
        else:
            record.expires_at = max(record.expires_at, expires)

        if effect == EffectType.ESCORT:
            self._add_escort_pair()
        logger.debug("Effect %s active until tick %d", effect.value, record.expires_at)
        return record

    def _add_escort_pair(self):
        pairs = len(self.escorts) // 2
        if len(self.escorts) + 2 > self.config.max_escorts or pairs >= len(ESCORT_SLOTS):
            return
        dx, dy = ESCORT_SLOTS[pairs]
        self.escorts.append(HelperEscort(side="left", offset_x=-dx, offset_y=dy))
        self.escorts.append(HelperEscort(side="right", offset_x=dx, offset_y=dy))

    def is_active(self, effect: EffectType, tick: int) -> bool:
        record = self.effects.get(effect)
        return record is not None and tick < record.expires_at

    def expire(self, tick: int) -> List[EffectType]:
        """Purge effects whose expiry has passed"""
        expired = [e for e, r in self.effects.items() if tick >= r.expires_at]
        for effect in expired:
            del self.effects[effect]
            if effect == EffectType.ESCORT:
                self.escorts = []
            logger.debug("Effect %s expired at tick %d", effect.value, tick)
        return expired

    def escort_positions(self, player_center):
        """Top-left corner of every escort given the player's centre"""
        cx, cy = player_center
        return [
            (escort, cx + escort.offset_x - escort.width / 2.0, cy + escort.offset_y - escort.height / 2.0)
            for escort in self.escorts
        ]

    def reset(self):
        self.effects = {}
        self.escorts = []
