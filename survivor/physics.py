"""
Movement for the player, enemies, projectiles and pickups
"""

from __future__ import annotations

import math
from typing import List

from . import boosts
from .entities import Bullet, EnemyKind
from .settings import SimSettings
from .state import InputSnapshot, SimulationState, World
from .utils import clamp, distance, turn_towards, vec_len


def update_player(state: SimulationState, settings: SimSettings, inputs: InputSnapshot, dt: float):
    p = state.player
    dx, dy = inputs.direction()
    moving = dx != 0.0 or dy != 0.0

    speed = boosts.move_speed(p, settings)
    target_vx = dx * speed
    target_vy = dy * speed
    accel = settings.player_accel if moving else settings.player_friction

    # Exponential approach to the target velocity
    p.vx += (target_vx - p.vx) * accel * dt
    p.vy += (target_vy - p.vy) * accel * dt

    p.x += p.vx * dt
    p.y += p.vy * dt

    # Hard walls
    r = p.radius
    p.x = clamp(p.x, r, state.world.width - r)
    p.y = clamp(p.y, r, state.world.height - r)

    p.shoot_pulse = max(0.0, p.shoot_pulse - dt)

    move_mag = vec_len(p.vx, p.vy)
    if move_mag > settings.facing_min_speed:
        heading = math.atan2(p.vy, p.vx)
        p.angle = turn_towards(p.angle, heading, dt * settings.turn_rate)
        p.anim_time += dt * (4 + move_mag / 60)


def enemy_step_speed(enemy, settings: SimSettings, dt: float) -> float:
    """Speed for this tick, advancing the kind-specific sub-state"""
    speed = enemy.speed
    if enemy.kind is EnemyKind.SPRINTER:
        enemy.zigzag_phase += dt * settings.zigzag_rate
        speed += math.sin(enemy.zigzag_phase) * settings.zigzag_amplitude
    elif enemy.kind is EnemyKind.CHARGER:
        enemy.dash_timer -= dt
        if enemy.dash_timer <= 0:
            # Dash only lasts for the tick it fires on
            enemy.dash_timer = settings.charger_dash_interval
            speed = enemy.dash_speed
    return speed


def update_enemies(state: SimulationState, settings: SimSettings, dt: float):
    px, py = state.player.x, state.player.y
    for e in state.enemies:
        heading = math.atan2(py - e.y, px - e.x)
        speed = enemy_step_speed(e, settings, dt)

        e.vx = math.cos(heading) * speed
        e.vy = math.sin(heading) * speed
        e.x += e.vx * dt
        e.y += e.vy * dt

        e.hit_timer = max(0.0, e.hit_timer - dt)
        e.angle = turn_towards(e.angle, heading, dt * settings.enemy_turn_rate)
        e.anim_time += dt * (3 + speed / 90)


def out_of_bounds(b: Bullet, world: World) -> bool:
    return (
        b.x < -b.radius
        or b.x > world.width + b.radius
        or b.y < -b.radius
        or b.y > world.height + b.radius
    )


def _advance_bullets(bullets: List[Bullet], world: World, dt: float):
    for b in bullets:
        b.x += b.vx * dt
        b.y += b.vy * dt

    # High-to-low so removal does not skip elements
    for i in range(len(bullets) - 1, -1, -1):
        if out_of_bounds(bullets[i], world):
            del bullets[i]


def update_bullets(state: SimulationState, dt: float):
    _advance_bullets(state.bullets, state.world, dt)
    _advance_bullets(state.enemy_bullets, state.world, dt)


def update_particles(state: SimulationState, settings: SimSettings, dt: float):
    particles = state.particles
    for i in range(len(particles) - 1, -1, -1):
        pt = particles[i]
        pt.x += pt.vx * dt
        pt.y += pt.vy * dt
        pt.life -= dt
        pt.vx *= settings.particle_damping
        pt.vy *= settings.particle_damping
        if pt.life <= 0:
            del particles[i]


def update_pickups(state: SimulationState, settings: SimSettings, dt: float):
    """Orbs drift toward a nearby player, boosts spin in place"""
    p = state.player
    for orb in state.orbs:
        if distance(p.x, p.y, orb.x, orb.y) < settings.orb_magnet_range:
            heading = math.atan2(p.y - orb.y, p.x - orb.x)
            orb.x += math.cos(heading) * settings.orb_magnet_speed * dt
            orb.y += math.sin(heading) * settings.orb_magnet_speed * dt

    for boost in state.boosts:
        boost.spin += dt * 4
