"""
Tunable simulation constants
"""

from __future__ import annotations

from dataclasses import dataclass, fields, asdict
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class SimSettings:
    """Every gameplay constant of a session. Static once the simulation starts."""

    # Arena
    width: float = 900.0
    height: float = 600.0
    scale: float = 1.0

    # Player
    player_radius: float = 14.0
    player_speed: float = 230.0
    player_health: float = 100.0
    player_damage: float = 34.0
    player_fire_rate: float = 0.35
    player_accel: float = 12.0
    player_friction: float = 10.0
    xp_to_level: int = 100
    xp_growth: float = 1.2
    turn_rate: float = 12.0
    facing_min_speed: float = 5.0

    # Projectiles
    bullet_speed: float = 440.0
    bullet_radius: float = 4.0
    enemy_bullet_speed: float = 220.0
    enemy_bullet_radius: float = 4.0
    enemy_bullet_damage: float = 12.0
    shoot_pulse: float = 0.15

    # Enemies
    enemy_speed: float = 80.0
    enemy_speed_jitter: float = 40.0
    enemy_speed_scale: float = 6.0
    enemy_radius: float = 12.0
    enemy_turn_rate: float = 10.0
    contact_dps: float = 18.0
    hit_flash: float = 0.12
    zigzag_rate: float = 6.0
    zigzag_amplitude: float = 20.0
    shooter_first_shot: float = 1.2
    shooter_interval: float = 1.6
    charger_first_dash: float = 2.0
    charger_dash_interval: float = 2.2
    charger_dash_speed: float = 240.0

    # Spawning / difficulty
    base_spawn_interval: float = 1.2
    difficulty_interval: float = 20.0
    spawn_rate_scale: float = 0.1

    # Pickups
    orb_radius: float = 6.0
    orb_magnet_range: float = 130.0
    orb_magnet_speed: float = 140.0
    boost_radius: float = 10.0
    boost_duration: float = 10.0
    boost_spawn_interval: float = 12.0
    boost_margin: float = 50.0
    max_boosts: int = 2
    boost_speed_mult: float = 1.35
    boost_damage_mult: float = 1.35
    shield_bonus: float = 0.25

    # Defense caps
    max_upgrade_defense: float = 0.6
    max_defense: float = 0.8

    # Upgrade menu
    upgrade_choices: int = 3

    # Cosmetics
    particle_damping: float = 0.96
    hud_lerp_rate: float = 8.0

    def __post_init__(self):
        # Timers and the difficulty clock divide by or reset to these
        for f in fields(self):
            if f.name.endswith("_interval") and getattr(self, f.name) <= 0:
                raise ValueError(f"{f.name} must be positive, got {getattr(self, f.name)}")

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]] = None) -> "SimSettings":
        """Build settings from a (partial) config dict, rejecting unknown keys"""
        data = dict(data or {})
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown simulation settings: {', '.join(unknown)}")
        return cls(**data)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
