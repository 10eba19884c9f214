"""
Session state: world bounds, entity pools, counters and the input snapshot
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Tuple

from .entities import (
    BoostKind,
    BoostPickup,
    Bullet,
    Enemy,
    EnemyKind,
    Particle,
    Player,
    XpOrb,
)
from .settings import SimSettings
from .upgrades import UpgradeKind
from .utils import normalize

UP_KEYS = frozenset({"up", "w", "arrowup", "keyw"})
DOWN_KEYS = frozenset({"down", "s", "arrowdown", "keys"})
LEFT_KEYS = frozenset({"left", "a", "arrowleft", "keya"})
RIGHT_KEYS = frozenset({"right", "d", "arrowright", "keyd"})


class Phase(str, Enum):
    RUNNING = "running"
    PAUSED_FOR_UPGRADE = "paused_for_upgrade"
    GAME_OVER = "game_over"


@dataclass(frozen=True)
class InputSnapshot:
    """Held movement intents, the only thing the core reads from input devices"""
    up: bool = False
    down: bool = False
    left: bool = False
    right: bool = False

    @classmethod
    def from_keys(cls, held: Iterable[str]) -> "InputSnapshot":
        names = {str(k).lower() for k in held}
        return cls(
            up=bool(names & UP_KEYS),
            down=bool(names & DOWN_KEYS),
            left=bool(names & LEFT_KEYS),
            right=bool(names & RIGHT_KEYS),
        )

    @property
    def moving(self) -> bool:
        return self.direction() != (0.0, 0.0)

    def direction(self) -> Tuple[float, float]:
        """Unit intent vector, (0, 0) when idle or when opposite keys cancel out"""
        dx = (1.0 if self.right else 0.0) - (1.0 if self.left else 0.0)
        dy = (1.0 if self.down else 0.0) - (1.0 if self.up else 0.0)
        return normalize(dx, dy)


IDLE = InputSnapshot()


@dataclass(frozen=True)
class World:
    width: float
    height: float
    scale: float = 1.0


@dataclass
class HudState:
    """Smoothed HUD values, interpolated even while paused"""
    displayed_health: float = 0.0
    displayed_score: float = 0.0


@dataclass
class SimulationState:
    """All mutable state of one session. Reset by building a new one."""
    world: World
    player: Player
    enemies: List[Enemy] = field(default_factory=list)
    bullets: List[Bullet] = field(default_factory=list)
    enemy_bullets: List[Bullet] = field(default_factory=list)
    particles: List[Particle] = field(default_factory=list)
    orbs: List[XpOrb] = field(default_factory=list)
    boosts: List[BoostPickup] = field(default_factory=list)
    score: int = 0
    elapsed: float = 0.0
    difficulty_level: int = 0
    spawn_interval: float = 1.2
    spawn_timer: float = 0.0
    boost_spawn_timer: float = 0.0
    game_over: bool = False
    pending_upgrades: List[List[UpgradeKind]] = field(default_factory=list)
    hud: HudState = field(default_factory=HudState)

    @classmethod
    def initial(cls, settings: SimSettings) -> "SimulationState":
        player = Player(
            x=settings.width * 0.5,
            y=settings.height * 0.5,
            radius=settings.player_radius,
            speed=settings.player_speed,
            health=settings.player_health,
            max_health=settings.player_health,
            xp_to_level=settings.xp_to_level,
            damage=settings.player_damage,
            fire_rate=settings.player_fire_rate,
        )
        return cls(
            world=World(settings.width, settings.height, settings.scale),
            player=player,
            spawn_interval=settings.base_spawn_interval,
            hud=HudState(displayed_health=player.health, displayed_score=0.0),
        )

    @property
    def phase(self) -> Phase:
        if self.game_over:
            return Phase.GAME_OVER
        if self.pending_upgrades:
            return Phase.PAUSED_FOR_UPGRADE
        return Phase.RUNNING

    # ----------------------------
    # Serialization
    # ----------------------------

    def to_dict(self) -> Dict[str, Any]:
        """Plain, JSON-compatible copy of the whole state"""
        data = asdict(self)
        data["player"]["boost_timers"] = {
            kind.value: value for kind, value in self.player.boost_timers.items()
        }
        for enemy in data["enemies"]:
            enemy["kind"] = EnemyKind(enemy["kind"]).value
        for boost in data["boosts"]:
            boost["kind"] = BoostKind(boost["kind"]).value
        for particle in data["particles"]:
            particle["color"] = list(particle["color"])
        data["pending_upgrades"] = [
            [UpgradeKind(kind).value for kind in offer] for offer in self.pending_upgrades
        ]
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SimulationState":
        player_data = dict(data["player"])
        timers = player_data.pop("boost_timers", {})
        player = Player(**player_data)
        for kind in BoostKind:
            player.boost_timers[kind] = max(0.0, float(timers.get(kind.value, 0.0)))

        enemies = []
        for item in data.get("enemies", []):
            item = dict(item)
            item["kind"] = EnemyKind.parse(item.get("kind"))
            enemies.append(Enemy(**item))

        boosts = []
        for item in data.get("boosts", []):
            item = dict(item)
            item["kind"] = BoostKind(item.get("kind", BoostKind.SPEED.value))
            boosts.append(BoostPickup(**item))

        particles = []
        for item in data.get("particles", []):
            item = dict(item)
            item["color"] = tuple(item.get("color", (255, 255, 255)))
            particles.append(Particle(**item))

        return cls(
            world=World(**data["world"]),
            player=player,
            enemies=enemies,
            bullets=[Bullet(**b) for b in data.get("bullets", [])],
            enemy_bullets=[Bullet(**b) for b in data.get("enemy_bullets", [])],
            particles=particles,
            orbs=[XpOrb(**o) for o in data.get("orbs", [])],
            boosts=boosts,
            score=int(data.get("score", 0)),
            elapsed=float(data.get("elapsed", 0.0)),
            difficulty_level=int(data.get("difficulty_level", 0)),
            spawn_interval=float(data.get("spawn_interval", 1.2)),
            spawn_timer=float(data.get("spawn_timer", 0.0)),
            boost_spawn_timer=float(data.get("boost_spawn_timer", 0.0)),
            game_over=bool(data.get("game_over", False)),
            pending_upgrades=[
                [UpgradeKind(kind) for kind in offer] for offer in data.get("pending_upgrades", [])
            ],
            hud=HudState(**data.get("hud", {})),
        )
