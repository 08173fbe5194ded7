"""
Player movement, scroll-speed smoothing and world drift
"""

from __future__ import annotations

from dataclasses import dataclass

from .config import BankPolicy, EngineConfig
from .entities import Player
from .policy import policy_for
from .registry import EntityRegistry
from .utils import approach, clamp


@dataclass(frozen=True)
class InputState:
    """Logical input flags sampled once per tick"""
    up: bool = False
    down: bool = False
    left: bool = False
    right: bool = False
    fire: bool = False

    @property
    def moving(self) -> bool:
        return self.up or self.down or self.left or self.right


@dataclass
class MotionState:
    scroll_speed: float
    base_scroll: float
    speed_multiplier: float = 1.0
    river_offset: float = 0.0


class MotionController:
    def __init__(self, config: EngineConfig):
        self.config = config

    def update_player(self, player: Player, inputs: InputState, state: MotionState) -> bool:
        """Move the craft and smooth scroll/tilt.

        Returns True when the craft touched a bank and the bank policy is
        lethal; the caller turns that into a destructive event.
        """
        cfg = self.config

        # Handling penalty recovers linearly
        if state.speed_multiplier < 1.0:
            state.speed_multiplier = min(1.0, state.speed_multiplier + cfg.speed_recovery)

        step = cfg.move_speed * state.speed_multiplier

        target_scroll = state.base_scroll
        if inputs.up:
            player.y -= step
            target_scroll = state.base_scroll * 2.0
        elif inputs.down:
            player.y += step
            target_scroll = state.base_scroll * 0.5
        state.scroll_speed = approach(state.scroll_speed, target_scroll, cfg.smoothing)

        target_tilt = 0.0
        if inputs.left:
            player.x -= step
            target_tilt = -cfg.tilt_max
        if inputs.right:
            player.x += step
            target_tilt = cfg.tilt_max
        player.tilt = approach(player.tilt, target_tilt, cfg.smoothing)

        bank_contact = self._constrain(player, inputs, state)
        state.river_offset = (state.river_offset + state.scroll_speed) % 40.0
        return bank_contact and cfg.bank_policy == BankPolicy.LETHAL

    def _constrain(self, player: Player, inputs: InputState, state: MotionState) -> bool:
        cfg = self.config
        left, right = cfg.channel_left, cfg.channel_right
        contact = player.x <= left or player.x + player.width >= right
        player.x = clamp(player.x, left, right - player.width)

        top = cfg.edge_margin
        bottom = cfg.height - cfg.edge_margin - player.height
        if player.y < top:
            player.y = top
        if player.y >= bottom:
            player.y = bottom
            if not inputs.down:
                state.scroll_speed = max(state.scroll_speed, state.base_scroll)
        return contact

    def advance_obstacles(self, registry: EntityRegistry, scroll_speed: float) -> None:
        """Scroll obstacles toward the player; drifting ones bounce off the banks"""
        cfg = self.config
        for obs in registry.live_obstacles():
            obs.y += scroll_speed
            if policy_for(obs.type).drifts and obs.vx:
                obs.x += obs.vx
                if obs.x <= cfg.channel_left or obs.x + obs.width >= cfg.channel_right:
                    obs.vx = -obs.vx
