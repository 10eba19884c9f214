"""
Timer-driven creation of enemies and boost pickups
"""

from __future__ import annotations

import logging
import math
from typing import Optional

from .entities import ENEMY_STATS, BoostKind, BoostPickup, Enemy, EnemyKind
from .settings import SimSettings
from .state import SimulationState
from .utils import RandomSource, choice_index, uniform

logger = logging.getLogger(__name__)

# (minimum difficulty, roll must exceed, kind), strongest first
KIND_UNLOCKS = (
    (4, 0.78, EnemyKind.CHARGER),
    (3, 0.62, EnemyKind.SHOOTER),
    (2, 0.48, EnemyKind.TANK),
    (1, 0.32, EnemyKind.SPRINTER),
)

BOOST_KINDS = tuple(BoostKind)


def pick_enemy_kind(difficulty: int, roll: float) -> EnemyKind:
    """Map a single roll in [0, 1) to a kind, gated by difficulty"""
    for min_level, threshold, kind in KIND_UNLOCKS:
        if difficulty >= min_level and roll > threshold:
            return kind
    return EnemyKind.GRUNT


class Spawner:
    """Owns the enemy and boost spawn timers"""

    def __init__(self, settings: SimSettings, rng: RandomSource, cosmetic_rng: Optional[RandomSource] = None):
        self.settings = settings
        self.rng = rng
        self.cosmetic_rng = cosmetic_rng or rng

    def update(self, state: SimulationState, dt: float):
        s = self.settings

        state.spawn_timer += dt
        if state.spawn_timer >= state.spawn_interval:
            self.spawn_enemy(state)
            state.spawn_timer = 0.0

        # Keeps accumulating while the boost cap is reached
        state.boost_spawn_timer += dt
        if state.boost_spawn_timer >= s.boost_spawn_interval and len(state.boosts) < s.max_boosts:
            self.spawn_boost(state)
            state.boost_spawn_timer = 0.0

    def create_enemy(self, kind: EnemyKind, x: float, y: float, difficulty: int) -> Enemy:
        s = self.settings
        stats = ENEMY_STATS[kind]
        base_speed = (
            s.enemy_speed
            + difficulty * s.enemy_speed_scale
            + uniform(self.rng, 0.0, s.enemy_speed_jitter)
        )

        enemy = Enemy(
            x=x,
            y=y,
            radius=s.enemy_radius + stats.radius_offset,
            speed=base_speed + stats.speed_offset,
            health=stats.health,
            kind=kind,
            anim_time=uniform(self.cosmetic_rng, 0.0, math.pi * 2),
        )
        if kind is EnemyKind.SPRINTER:
            enemy.zigzag_phase = uniform(self.rng, 0.0, math.pi * 2)
        elif kind is EnemyKind.SHOOTER:
            enemy.shoot_cooldown = s.shooter_first_shot
        elif kind is EnemyKind.CHARGER:
            enemy.dash_timer = s.charger_first_dash
            enemy.dash_speed = s.charger_dash_speed
        return enemy

    def spawn_enemy(self, state: SimulationState, kind: Optional[EnemyKind] = None) -> Enemy:
        """Create an enemy just outside a random screen edge"""
        w, h = state.world.width, state.world.height
        edge = choice_index(self.rng, 4)
        if kind is None:
            kind = pick_enemy_kind(state.difficulty_level, self.rng.random())
        offset = (self.settings.enemy_radius + ENEMY_STATS[kind].radius_offset) * 2

        if edge == 0:  # top
            x, y = uniform(self.rng, 0.0, w), -offset
        elif edge == 1:  # right
            x, y = w + offset, uniform(self.rng, 0.0, h)
        elif edge == 2:  # bottom
            x, y = uniform(self.rng, 0.0, w), h + offset
        else:  # left
            x, y = -offset, uniform(self.rng, 0.0, h)

        enemy = self.create_enemy(kind, x, y, state.difficulty_level)
        state.enemies.append(enemy)
        logger.debug("Spawned %s at (%.0f, %.0f)", kind.value, x, y)
        return enemy

    def spawn_boost(self, state: SimulationState) -> BoostPickup:
        s = self.settings
        m = s.boost_margin
        kind = BOOST_KINDS[choice_index(self.rng, len(BOOST_KINDS))]
        boost = BoostPickup(
            x=uniform(self.rng, m, state.world.width - m),
            y=uniform(self.rng, m, state.world.height - m),
            kind=kind,
            radius=s.boost_radius,
            spin=uniform(self.cosmetic_rng, 0.0, math.pi * 2),
        )
        state.boosts.append(boost)
        logger.debug("Spawned %s boost at (%.0f, %.0f)", kind.value, boost.x, boost.y)
        return boost
