"""
Combat resolution: enemy fire, contact damage, projectile hits and auto-fire
"""

from __future__ import annotations

import logging
import math
from typing import List, Optional, Sequence

from . import boosts
from .entities import Bullet, Enemy, EnemyKind, Player, XpOrb
from .events import EventBus, GameEvent
from .particles import HIT_COLOR, KILL_COLOR, PLAYER_HIT_COLOR, ParticleEmitter
from .settings import SimSettings
from .state import SimulationState
from .utils import circle_collide, distance

logger = logging.getLogger(__name__)


def nearest_enemy(player: Player, enemies: Sequence[Enemy]) -> Optional[Enemy]:
    """Closest enemy to the player; the earliest one in pool order wins ties"""
    closest = None
    best = math.inf
    for e in enemies:
        d = distance(player.x, player.y, e.x, e.y)
        if d < best:
            closest, best = e, d
    return closest


class CombatResolver:
    """Pairwise collision tests and the health/score/XP mutations they cause"""

    def __init__(self, settings: SimSettings, events: EventBus, particles: ParticleEmitter):
        self.settings = settings
        self.events = events
        self.particles = particles

    def resolve(self, state: SimulationState, dt: float) -> List[Enemy]:
        """Run every combat pass for one tick, returns the enemies killed"""
        self.contact_damage(state, dt)
        self.enemy_bullet_hits(state)
        killed = self.player_bullet_hits(state)
        # Shots fired now are only tested against the player next tick
        self.fire_shooters(state, dt)
        return killed

    def fire_shooters(self, state: SimulationState, dt: float):
        p = state.player
        s = self.settings
        for e in state.enemies:
            if e.kind is not EnemyKind.SHOOTER:
                continue
            e.shoot_cooldown -= dt
            if e.shoot_cooldown > 0:
                continue
            e.shoot_cooldown = s.shooter_interval
            angle = math.atan2(p.y - e.y, p.x - e.x)
            state.enemy_bullets.append(Bullet(
                x=e.x,
                y=e.y,
                vx=math.cos(angle) * s.enemy_bullet_speed,
                vy=math.sin(angle) * s.enemy_bullet_speed,
                radius=s.enemy_bullet_radius,
                damage=s.enemy_bullet_damage,
            ))
            self.events.emit(GameEvent.SHOOT, source="enemy", x=e.x, y=e.y)

    def contact_damage(self, state: SimulationState, dt: float):
        # Continuous damage for every tick of overlap, scaled by dt
        p = state.player
        for e in state.enemies:
            if circle_collide(p.x, p.y, p.radius, e.x, e.y, e.radius):
                lost = boosts.apply_damage(p, self.settings.contact_dps * dt, self.settings)
                if lost > 0:
                    self.events.emit(GameEvent.PLAYER_HURT, amount=lost, source="contact")

    def enemy_bullet_hits(self, state: SimulationState):
        p = state.player
        bullets = state.enemy_bullets
        for i in range(len(bullets) - 1, -1, -1):
            b = bullets[i]
            if not circle_collide(p.x, p.y, p.radius, b.x, b.y, b.radius):
                continue
            lost = boosts.apply_damage(p, b.damage, self.settings)
            self.particles.burst(state, b.x, b.y, PLAYER_HIT_COLOR, 6)
            del bullets[i]
            self.events.emit(GameEvent.PLAYER_HURT, amount=lost, source="bullet")

    def player_bullet_hits(self, state: SimulationState) -> List[Enemy]:
        """
        Test every player bullet against every enemy.

        A bullet is consumed by the first enemy it overlaps. Enemies whose
        health drops to zero or below are removed in the same pass and drop
        one XP orb each.
        """
        enemies = state.enemies
        bullets = state.bullets
        killed = []
        for i in range(len(enemies) - 1, -1, -1):
            e = enemies[i]
            for j in range(len(bullets) - 1, -1, -1):
                b = bullets[j]
                if not circle_collide(e.x, e.y, e.radius, b.x, b.y, b.radius):
                    continue
                e.health -= b.damage
                e.hit_timer = self.settings.hit_flash
                self.particles.burst(state, b.x, b.y, HIT_COLOR, 6)
                del bullets[j]
                self.events.emit(GameEvent.HIT, kind=e.kind, damage=b.damage)
                if e.health <= 0:
                    del enemies[i]
                    killed.append(e)
                    self._on_kill(state, e)
                break
        return killed

    def _on_kill(self, state: SimulationState, e: Enemy):
        stats = e.stats
        state.score += stats.score
        self.particles.burst(state, e.x, e.y, KILL_COLOR, 10)
        state.orbs.append(XpOrb(x=e.x, y=e.y, amount=stats.xp, radius=self.settings.orb_radius))
        logger.debug("Killed %s at (%.0f, %.0f), score %d", e.kind.value, e.x, e.y, state.score)
        self.events.emit(GameEvent.ENEMY_KILLED, kind=e.kind, score=state.score)

    def auto_fire(self, state: SimulationState, dt: float) -> Optional[Bullet]:
        """Count the fire cooldown down and shoot at the nearest enemy when ready"""
        p = state.player
        s = self.settings
        if p.fire_cooldown > 0:
            p.fire_cooldown -= dt
        if p.fire_cooldown > 0:
            return None

        target = nearest_enemy(p, state.enemies)
        if target is None:
            return None

        angle = math.atan2(target.y - p.y, target.x - p.x)
        bullet = Bullet(
            x=p.x,
            y=p.y,
            vx=math.cos(angle) * s.bullet_speed,
            vy=math.sin(angle) * s.bullet_speed,
            radius=s.bullet_radius,
            damage=boosts.bullet_damage(p, s),
        )
        state.bullets.append(bullet)
        p.fire_cooldown = p.fire_rate
        p.shoot_pulse = s.shoot_pulse
        self.events.emit(GameEvent.SHOOT, source="player", x=p.x, y=p.y)
        return bullet
