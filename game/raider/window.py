"""
Arcade window that draws engine snapshots (human render mode)
"""

import arcade

from .engine import FrameSnapshot
from .entities import EffectType, ProjectileTag
from .render import OBSTACLE_COLORS, ENEMY_SHOT, ESCORT, LAND, PLAYER, PLAYER_SHOT, RIVER, SHIELD


class RaiderWindow(arcade.Window):
    """Arcade window for rendering the river raid environment"""

    def __init__(self, env, width: int, height: int):
        super().__init__(width, height, "RaiderEnv - Arcade")
        self.env = env
        self.HUD_C = (220, 220, 220)

    def _rect(self, x, y, w, h, color):
        # Snapshot y grows downward; arcade's grows upward
        top = self.height - y
        arcade.draw_lrbt_rectangle_filled(x, x + w, top - h, top, color)

    def on_draw(self):
        """Draw the latest snapshot"""
        self.clear()
        snap: FrameSnapshot = self.env.last_snapshot
        if snap is None:
            return
        cfg = self.env.engine.config

        self._rect(0, 0, cfg.width, cfg.height, LAND)
        self._rect(cfg.channel_left, 0, cfg.channel_right - cfg.channel_left, cfg.height, RIVER)

        for o in snap.obstacles:
            self._rect(o.x, o.y, o.width, o.height, OBSTACLE_COLORS[o.type])
        for q in snap.particles:
            r, g, b = q.color
            self._rect(q.x, q.y, q.size, q.size, (r, g, b, int(255 * q.alpha)))
        for b in snap.projectiles:
            color = ENEMY_SHOT if b.enemy else (ESCORT if b.tag == ProjectileTag.ESCORT else PLAYER_SHOT)
            self._rect(b.x, b.y, b.width, b.height, color)

        p = snap.player
        for ex, ey, ew, eh in p.escorts:
            self._rect(ex, ey, ew, eh, ESCORT)
        if not p.invulnerable or (snap.tick // 6) % 2 == 0:
            self._rect(p.x, p.y, p.width, p.height, SHIELD if p.has_effect(EffectType.SHIELD) else PLAYER)

        # HUD - fuel bar
        bar_w, bar_h = 180, 10
        x0, y0 = 12, self.height - 22
        arcade.draw_lrbt_rectangle_filled(x0, x0 + bar_w, y0, y0 + bar_h, (60, 60, 60))
        fill = bar_w * p.fuel / cfg.max_fuel
        if fill > 0:
            arcade.draw_lrbt_rectangle_filled(x0, x0 + fill, y0, y0 + bar_h, (245, 158, 11))

        txt = (f"Score: {snap.score}  "
               f"Lives: {p.lives}  "
               f"Level: {snap.level}  "
               f"Tick: {snap.tick}")
        arcade.draw_text(txt, 12, self.height - 40, self.HUD_C, 14)
        if snap.game_over:
            arcade.draw_text("GAME OVER", self.width / 2, self.height / 2, self.HUD_C, 28, anchor_x="center")
