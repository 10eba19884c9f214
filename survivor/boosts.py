"""
Timed boost slots (speed, damage, shield) held by the player
"""

from __future__ import annotations

from .entities import BoostKind, Player
from .settings import SimSettings
from .utils import clamp


def boost_active(player: Player, kind: BoostKind) -> bool:
    return player.boost_timers.get(kind, 0.0) > 0


def move_speed(player: Player, settings: SimSettings) -> float:
    """Base speed with the speed boost multiplier applied"""
    mult = settings.boost_speed_mult if boost_active(player, BoostKind.SPEED) else 1.0
    return player.speed * mult


def bullet_damage(player: Player, settings: SimSettings) -> float:
    mult = settings.boost_damage_mult if boost_active(player, BoostKind.DAMAGE) else 1.0
    return player.damage * mult


def defense(player: Player, settings: SimSettings) -> float:
    """Upgrade defense plus the transient shield bonus, clamped to the global ceiling"""
    bonus = settings.shield_bonus if boost_active(player, BoostKind.SHIELD) else 0.0
    return clamp(player.defense + bonus, 0.0, settings.max_defense)


def collect(player: Player, kind: BoostKind, settings: SimSettings) -> None:
    # Overwrites whatever is left, durations never stack
    player.boost_timers[kind] = settings.boost_duration


def decay(player: Player, dt: float) -> None:
    for kind in BoostKind:
        player.boost_timers[kind] = max(0.0, player.boost_timers.get(kind, 0.0) - dt)


def apply_damage(player: Player, amount: float, settings: SimSettings) -> float:
    """
    Mitigate ``amount`` by the player's defense and subtract it from health.
    Health is clamped into [0, max_health]. Returns the health actually lost.
    """
    if amount <= 0:
        return 0.0
    mitigated = amount * (1.0 - defense(player, settings))
    before = player.health
    player.health = clamp(player.health - mitigated, 0.0, player.max_health)
    return before - player.health
