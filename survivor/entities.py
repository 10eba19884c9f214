"""
Game entity dataclasses
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Tuple


class EnemyKind(str, Enum):
    GRUNT = "grunt"
    SPRINTER = "sprinter"
    TANK = "tank"
    SHOOTER = "shooter"
    CHARGER = "charger"

    @classmethod
    def parse(cls, value) -> "EnemyKind":
        """Resolve a kind tag, falling back to grunt for anything unknown"""
        try:
            return cls(value)
        except ValueError:
            return cls.GRUNT


class BoostKind(str, Enum):
    SPEED = "speed"
    DAMAGE = "damage"
    SHIELD = "shield"


@dataclass(frozen=True)
class EnemyStats:
    """Per-kind stat block, offsets are relative to the spawn-time base values"""
    radius_offset: float
    speed_offset: float
    health: float
    score: int
    xp: int


ENEMY_STATS: Dict[EnemyKind, EnemyStats] = {
    EnemyKind.GRUNT: EnemyStats(radius_offset=0, speed_offset=0, health=60, score=1, xp=20),
    EnemyKind.SPRINTER: EnemyStats(radius_offset=-2, speed_offset=40, health=40, score=1, xp=20),
    EnemyKind.TANK: EnemyStats(radius_offset=4, speed_offset=-20, health=120, score=3, xp=35),
    EnemyKind.SHOOTER: EnemyStats(radius_offset=0, speed_offset=-10, health=70, score=1, xp=20),
    EnemyKind.CHARGER: EnemyStats(radius_offset=2, speed_offset=0, health=80, score=1, xp=20),
}


def _boost_slots() -> Dict[BoostKind, float]:
    return {kind: 0.0 for kind in BoostKind}


@dataclass(frozen=True)
class PlayerStats:
    """The permanent stats an upgrade is allowed to change"""
    speed: float
    health: float
    max_health: float
    damage: float
    fire_rate: float
    defense: float


@dataclass
class Player:
    """Player avatar, the only entity that is never removed"""
    x: float
    y: float
    radius: float = 14.0
    speed: float = 230.0
    vx: float = 0.0
    vy: float = 0.0
    health: float = 100.0
    max_health: float = 100.0
    level: int = 1
    xp: float = 0.0
    xp_to_level: int = 100
    damage: float = 34.0
    fire_rate: float = 0.35
    fire_cooldown: float = 0.0
    defense: float = 0.0
    boost_timers: Dict[BoostKind, float] = field(default_factory=_boost_slots)
    angle: float = -math.pi / 2
    anim_time: float = 0.0
    shoot_pulse: float = 0.0

    def stats(self) -> PlayerStats:
        return PlayerStats(
            speed=self.speed,
            health=self.health,
            max_health=self.max_health,
            damage=self.damage,
            fire_rate=self.fire_rate,
            defense=self.defense,
        )

    def apply_stats(self, stats: PlayerStats) -> None:
        self.speed = stats.speed
        self.max_health = stats.max_health
        self.health = min(max(stats.health, 0.0), stats.max_health)
        self.damage = stats.damage
        self.fire_rate = stats.fire_rate
        self.defense = stats.defense

    @property
    def alive(self) -> bool:
        return self.health > 0


@dataclass
class Enemy:
    """Enemy entity that chases the player"""
    x: float
    y: float
    radius: float = 12.0
    speed: float = 80.0
    health: float = 60.0
    kind: EnemyKind = EnemyKind.GRUNT
    vx: float = 0.0
    vy: float = 0.0
    hit_timer: float = 0.0
    zigzag_phase: float = 0.0
    shoot_cooldown: float = 0.0
    dash_timer: float = 0.0
    dash_speed: float = 0.0
    angle: float = -math.pi / 2
    anim_time: float = 0.0

    @property
    def stats(self) -> EnemyStats:
        return ENEMY_STATS[self.kind]


@dataclass
class Bullet:
    """Bullet projectile entity (player or enemy owned)"""
    x: float
    y: float
    vx: float
    vy: float
    radius: float = 4.0
    damage: float = 0.0


@dataclass
class XpOrb:
    """Experience dropped by a dead enemy"""
    x: float
    y: float
    amount: float = 20.0
    radius: float = 6.0


@dataclass
class BoostPickup:
    """Collectible timed boost, persists until picked up"""
    x: float
    y: float
    kind: BoostKind = BoostKind.SPEED
    radius: float = 10.0
    spin: float = 0.0


@dataclass
class Particle:
    """Cosmetic particle, no gameplay effect"""
    x: float
    y: float
    vx: float
    vy: float
    radius: float = 2.0
    life: float = 0.5
    ttl: float = 0.5
    color: Tuple[int, int, int] = (255, 255, 255)
