"""
Arcade window that drives and draws a Simulation
"""

from __future__ import annotations

import math
from typing import Set

import arcade

from .configs.survivor_config import VIEWER_CONFIG
from .entities import BoostKind, EnemyKind
from .simulation import Simulation, WorldSnapshot
from .state import InputSnapshot, Phase
from .utils import clamp

KEY_NAMES = {
    arcade.key.UP: "up",
    arcade.key.W: "up",
    arcade.key.DOWN: "down",
    arcade.key.S: "down",
    arcade.key.LEFT: "left",
    arcade.key.A: "left",
    arcade.key.RIGHT: "right",
    arcade.key.D: "right",
}

UPGRADE_KEYS = {arcade.key.KEY_1: 0, arcade.key.KEY_2: 1, arcade.key.KEY_3: 2}

ENEMY_COLORS = {
    EnemyKind.GRUNT: (220, 80, 80),
    EnemyKind.SPRINTER: (244, 114, 182),
    EnemyKind.TANK: (168, 85, 247),
    EnemyKind.SHOOTER: (56, 189, 248),
    EnemyKind.CHARGER: (249, 115, 22),
}

BOOST_COLORS = {
    BoostKind.SPEED: (34, 211, 238),
    BoostKind.DAMAGE: (245, 158, 11),
    BoostKind.SHIELD: (167, 139, 250),
}


class SurvivorWindow(arcade.Window):
    """Feeds held keys to the simulation, ticks it and draws its snapshot"""

    def __init__(self, sim: Simulation, interactive: bool = True, max_dt: float = VIEWER_CONFIG["max_dt"]):
        width, height = int(sim.settings.width), int(sim.settings.height)
        super().__init__(width, height, VIEWER_CONFIG["title"])
        self.sim = sim
        self.interactive = interactive
        self.max_dt = max_dt
        self.held: Set[str] = set()

        # Colors
        self.BG = (18, 18, 22)
        self.PLAYER_C = (80, 200, 120)
        self.BULLET_C = (250, 204, 21)
        self.ENEMY_BULLET_C = (147, 197, 253)
        self.ORB_C = (74, 222, 128)
        self.HUD_C = (220, 220, 220)

        if interactive:
            self.set_update_rate(1 / VIEWER_CONFIG["fps"])

    # ----------------------------
    # Input
    # ----------------------------

    def on_key_press(self, symbol: int, modifiers: int):
        if symbol in KEY_NAMES:
            self.held.add(KEY_NAMES[symbol])
        elif symbol in UPGRADE_KEYS and UPGRADE_KEYS[symbol] < len(self.sim.upgrade_choices()):
            self.sim.choose_upgrade(UPGRADE_KEYS[symbol])
        elif symbol == arcade.key.ESCAPE:
            self.close()

    def on_key_release(self, symbol: int, modifiers: int):
        if symbol in KEY_NAMES:
            self.held.discard(KEY_NAMES[symbol])

    def on_update(self, delta_time: float):
        if not self.interactive:
            return
        dt = min(delta_time, self.max_dt)
        self.sim.tick(dt, InputSnapshot.from_keys(self.held))

    # ----------------------------
    # Drawing
    # ----------------------------

    def _y(self, y: float) -> float:
        # Simulation y grows downward, arcade y grows upward
        return self.height - y

    def on_draw(self):
        self.clear(color=self.BG)
        snap = self.sim.snapshot()

        for pt in snap.particles:
            alpha = int(255 * clamp(pt.life / pt.ttl if pt.ttl > 0 else 0, 0, 1))
            arcade.draw_circle_filled(pt.x, self._y(pt.y), pt.radius, (*pt.color, alpha))

        for o in snap.orbs:
            arcade.draw_circle_filled(o.x, self._y(o.y), o.radius, self.ORB_C)

        for b in snap.boosts:
            arcade.draw_circle_filled(b.x, self._y(b.y), b.radius, BOOST_COLORS[b.kind])
            arcade.draw_circle_outline(b.x, self._y(b.y), b.radius + 3, (255, 255, 255), 1)

        for e in snap.enemies:
            color = (255, 255, 255) if e.hit_timer > 0 else ENEMY_COLORS[e.kind]
            arcade.draw_circle_filled(e.x, self._y(e.y), e.radius, color)

        for b in snap.bullets:
            arcade.draw_circle_filled(b.x, self._y(b.y), b.radius, self.BULLET_C)
        for b in snap.enemy_bullets:
            arcade.draw_circle_filled(b.x, self._y(b.y), b.radius, self.ENEMY_BULLET_C)

        self._draw_player(snap)
        self._draw_hud(snap)
        if snap.phase is Phase.PAUSED_FOR_UPGRADE:
            self._draw_upgrade_menu(snap)
        elif snap.phase is Phase.GAME_OVER:
            arcade.draw_text(
                "GAME OVER", self.width / 2, self.height / 2, (239, 68, 68), 36,
                anchor_x="center", anchor_y="center",
            )

    def _draw_player(self, snap: WorldSnapshot):
        p = snap.player
        x, y = p.x, self._y(p.y)
        arcade.draw_circle_filled(x, y, p.radius + p.shoot_pulse * 20, self.PLAYER_C)
        # Facing marker
        nose = p.radius + 6
        arcade.draw_line(x, y, x + math.cos(p.angle) * nose, y - math.sin(p.angle) * nose, (255, 255, 255), 3)
        if p.boost_timers[BoostKind.SHIELD] > 0:
            arcade.draw_circle_outline(x, y, p.radius + 6, BOOST_COLORS[BoostKind.SHIELD], 2)

    def _draw_hud(self, snap: WorldSnapshot):
        bar_w, bar_h = 180, 10
        x0, y0 = 12, self.height - 22
        arcade.draw_lrbt_rectangle_filled(x0, x0 + bar_w, y0, y0 + bar_h, (60, 60, 60))
        fill = bar_w * clamp(snap.health / snap.max_health, 0, 1)
        if fill > 0:
            arcade.draw_lrbt_rectangle_filled(x0, x0 + fill, y0, y0 + bar_h, self.PLAYER_C)

        xp_fill = bar_w * clamp(snap.xp / snap.xp_to_level, 0, 1)
        arcade.draw_lrbt_rectangle_filled(x0, x0 + bar_w, y0 - 10, y0 - 6, (60, 60, 60))
        if xp_fill > 0:
            arcade.draw_lrbt_rectangle_filled(x0, x0 + xp_fill, y0 - 10, y0 - 6, self.ORB_C)

        txt = (f"Health: {math.ceil(snap.displayed_health)}  "
               f"Level: {snap.level}  "
               f"Time: {int(snap.elapsed)}s  "
               f"Score: {int(snap.displayed_score)}")
        arcade.draw_text(txt, 12, self.height - 44, self.HUD_C, 14)

    def _draw_upgrade_menu(self, snap: WorldSnapshot):
        arcade.draw_lrbt_rectangle_filled(0, self.width, 0, self.height, (0, 0, 0, 160))
        arcade.draw_text(
            "LEVEL UP - choose an upgrade", self.width / 2, self.height / 2 + 90,
            self.HUD_C, 22, anchor_x="center",
        )
        for i, choice in enumerate(snap.upgrade_choices):
            y = self.height / 2 + 30 - i * 50
            arcade.draw_text(
                f"[{i + 1}] {choice.label} - {choice.description}",
                self.width / 2, y, self.HUD_C, 16, anchor_x="center",
            )


def run_window(sim: Simulation, max_dt: float = VIEWER_CONFIG["max_dt"]):
    """Open the viewer and block until it is closed"""
    SurvivorWindow(sim, max_dt=max_dt)
    arcade.run()
