"""
Permanent upgrade catalog offered on level-up
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from functools import partial
from enum import Enum
from typing import Callable, Dict, List, Sequence, Tuple

from .entities import PlayerStats
from .utils import RandomSource

FIRE_RATE_FLOOR = 0.16
FIRE_RATE_FACTOR = 0.85
SPEED_STEP = 25.0
HEALTH_STEP = 20.0
DEFENSE_STEP = 0.08
DEFENSE_CAP = 0.6
DAMAGE_STEP = 8.0


class UpgradeKind(str, Enum):
    FIRE_RATE = "fire-rate"
    SPEED = "speed"
    HEALTH = "health"
    DEFENSE = "defense"
    DAMAGE = "damage"


def faster_fire(stats: PlayerStats) -> PlayerStats:
    return replace(stats, fire_rate=max(FIRE_RATE_FLOOR, stats.fire_rate * FIRE_RATE_FACTOR))


def faster_move(stats: PlayerStats) -> PlayerStats:
    return replace(stats, speed=stats.speed + SPEED_STEP)


def more_health(stats: PlayerStats) -> PlayerStats:
    max_health = stats.max_health + HEALTH_STEP
    return replace(stats, max_health=max_health, health=min(max_health, stats.health + HEALTH_STEP))


def more_defense(stats: PlayerStats, cap: float = DEFENSE_CAP) -> PlayerStats:
    return replace(stats, defense=min(cap, stats.defense + DEFENSE_STEP))


def more_damage(stats: PlayerStats) -> PlayerStats:
    return replace(stats, damage=stats.damage + DAMAGE_STEP)


@dataclass(frozen=True)
class Upgrade:
    """Menu entry plus its pure stat transformation"""
    kind: UpgradeKind
    label: str
    description: str
    effect: Callable[[PlayerStats], PlayerStats]

    @property
    def id(self) -> str:
        return self.kind.value


def build_catalog(max_defense: float = DEFENSE_CAP) -> Tuple[Upgrade, ...]:
    """The fixed catalog, with the defense upgrade capped at ``max_defense``"""
    return (
        Upgrade(UpgradeKind.FIRE_RATE, "Increase fire rate", "Shoot faster.", faster_fire),
        Upgrade(UpgradeKind.SPEED, "Increase player speed", "Move faster.", faster_move),
        Upgrade(UpgradeKind.HEALTH, "Increase max health", "Boost survivability.", more_health),
        Upgrade(UpgradeKind.DEFENSE, "Increase defense", "Reduce incoming damage.",
                partial(more_defense, cap=max_defense)),
        Upgrade(UpgradeKind.DAMAGE, "Increase damage", "Shots hit harder.", more_damage),
    )


UPGRADES: Tuple[Upgrade, ...] = build_catalog()

UPGRADES_BY_KIND: Dict[UpgradeKind, Upgrade] = {u.kind: u for u in UPGRADES}


def draw_upgrades(
    rng: RandomSource,
    count: int = 3,
    catalog: Sequence[Upgrade] = UPGRADES,
) -> List[Upgrade]:
    """Draw ``count`` distinct upgrades (partial Fisher-Yates over the catalog)"""
    pool = list(catalog)
    count = min(count, len(pool))
    for i in range(count):
        j = i + min(int(rng.random() * (len(pool) - i)), len(pool) - i - 1)
        pool[i], pool[j] = pool[j], pool[i]
    return pool[:count]
