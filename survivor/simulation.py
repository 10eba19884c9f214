"""
Simulation - the per-frame driver of the survivor game core
-----------------------------------------------------------
- One ``tick(dt)`` per animation frame, fully synchronous
- Phase order: physics -> combat -> progression -> spawning -> difficulty
- Running / paused-for-upgrade / game-over state machine
- Read-only snapshots for renderers, dict round-trip for save/replay tests
- Injectable random sources for deterministic runs
"""

from __future__ import annotations

import copy
import logging
import math
from dataclasses import dataclass, replace
from typing import Any, Dict, Optional, Tuple

from . import boosts, physics, pickups
from .combat import CombatResolver
from .difficulty import DifficultyController
from .entities import BoostPickup, Bullet, Enemy, Particle, Player, XpOrb
from .events import EventBus, GameEvent
from .particles import ParticleEmitter
from .progression import Progression
from .settings import SimSettings
from .spawner import Spawner
from .state import IDLE, InputSnapshot, Phase, SimulationState
from .upgrades import Upgrade
from .utils import RandomSource, clamp, lerp, make_rng

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UpgradeChoice:
    """What the upgrade menu shows for one option"""
    id: str
    label: str
    description: str


@dataclass(frozen=True)
class WorldSnapshot:
    """Copies of every entity pool plus HUD scalars, safe to hand to a renderer"""
    player: Player
    enemies: Tuple[Enemy, ...]
    bullets: Tuple[Bullet, ...]
    enemy_bullets: Tuple[Bullet, ...]
    orbs: Tuple[XpOrb, ...]
    boosts: Tuple[BoostPickup, ...]
    particles: Tuple[Particle, ...]
    width: float
    height: float
    health: float
    max_health: float
    level: int
    xp: float
    xp_to_level: int
    elapsed: float
    score: int
    difficulty_level: int
    displayed_health: float
    displayed_score: float
    phase: Phase
    upgrade_choices: Tuple[UpgradeChoice, ...]


class Simulation:
    """Owns one session's state and advances it frame by frame"""

    def __init__(
        self,
        settings: Optional[SimSettings] = None,
        seed: Optional[int] = None,
        rng: Optional[RandomSource] = None,
        cosmetic_rng: Optional[RandomSource] = None,
        state: Optional[SimulationState] = None,
        spawn_initial: bool = True,
        particles: bool = True,
    ):
        self.settings = settings or SimSettings()
        self.rng = rng if rng is not None else make_rng(seed)
        if cosmetic_rng is None:
            cosmetic_rng = make_rng(None if seed is None else seed + 1)
        self.cosmetic_rng = cosmetic_rng

        self.events = EventBus()
        self.particles = ParticleEmitter(self.cosmetic_rng, enabled=particles)
        self.spawner = Spawner(self.settings, self.rng, self.cosmetic_rng)
        self.combat = CombatResolver(self.settings, self.events, self.particles)
        self.progression = Progression(self.settings, self.rng, self.events)
        self.difficulty = DifficultyController(self.settings)

        self.inputs: InputSnapshot = IDLE
        self._frames = 0

        if state is None:
            state = SimulationState.initial(self.settings)
            if spawn_initial:
                self.spawner.spawn_enemy(state)
        self.state = state

    @classmethod
    def from_config(cls, config: Optional[Dict[str, Any]] = None, **kwargs) -> "Simulation":
        return cls(settings=SimSettings.from_dict(config), **kwargs)

    # ----------------------------
    # Driver API
    # ----------------------------

    @property
    def phase(self) -> Phase:
        return self.state.phase

    @property
    def frames(self) -> int:
        """Number of ticks that advanced the world"""
        return self._frames

    def set_input(self, inputs: InputSnapshot):
        self.inputs = inputs

    def tick(self, dt: float, inputs: Optional[InputSnapshot] = None) -> Phase:
        """Advance the world by ``dt`` seconds. Returns the phase after the tick."""
        if math.isnan(dt) or dt < 0:
            raise ValueError(f"Frame delta must be a non-negative number, got {dt!r}")
        if inputs is not None:
            self.inputs = inputs

        state = self.state
        if state.phase is not Phase.RUNNING:
            self._update_hud(dt)
            return state.phase

        s = self.settings

        # Physics
        physics.update_player(state, s, self.inputs, dt)
        physics.update_enemies(state, s, dt)
        physics.update_bullets(state, dt)
        physics.update_particles(state, s, dt)
        physics.update_pickups(state, s, dt)

        # Combat
        self.combat.resolve(state, dt)
        if state.player.health <= 0:
            self._game_over()
            self._update_hud(dt)
            return state.phase
        self.combat.auto_fire(state, dt)

        # Progression and boosts
        xp = pickups.collect_orbs(state)
        if xp > 0:
            self.progression.gain_xp(state, xp)
        pickups.collect_boosts(state, s, self.events, self.particles)
        boosts.decay(state.player, dt)

        # Spawning and difficulty
        self.spawner.update(state, dt)
        self.difficulty.update(state, dt)

        self._frames += 1
        self._update_hud(dt)
        return state.phase

    def _game_over(self):
        state = self.state
        state.player.health = 0.0
        state.game_over = True
        logger.info(
            "Game over after %.1fs: score %d, level %d",
            state.elapsed, state.score, state.player.level,
        )
        self.events.emit(
            GameEvent.GAME_OVER,
            score=state.score,
            level=state.player.level,
            elapsed=state.elapsed,
        )

    def _update_hud(self, dt: float):
        hud = self.state.hud
        t = clamp(dt * self.settings.hud_lerp_rate, 0.0, 1.0)
        hud.displayed_health = lerp(hud.displayed_health, self.state.player.health, t)
        hud.displayed_score = lerp(hud.displayed_score, self.state.score, t)

    # ----------------------------
    # Progression API
    # ----------------------------

    def upgrade_choices(self) -> Tuple[UpgradeChoice, ...]:
        return tuple(
            UpgradeChoice(u.id, u.label, u.description)
            for u in self.progression.current_offer(self.state)
        )

    def choose_upgrade(self, index: int) -> Upgrade:
        return self.progression.choose(self.state, index)

    def gain_xp(self, amount: float) -> int:
        return self.progression.gain_xp(self.state, amount)

    def apply_damage(self, amount: float) -> float:
        """Mitigated damage to the player, does not end the game by itself"""
        return boosts.apply_damage(self.state.player, amount, self.settings)

    # ----------------------------
    # Snapshots
    # ----------------------------

    def snapshot(self) -> WorldSnapshot:
        state = self.state
        p = state.player
        return WorldSnapshot(
            player=copy.deepcopy(p),
            enemies=tuple(replace(e) for e in state.enemies),
            bullets=tuple(replace(b) for b in state.bullets),
            enemy_bullets=tuple(replace(b) for b in state.enemy_bullets),
            orbs=tuple(replace(o) for o in state.orbs),
            boosts=tuple(replace(b) for b in state.boosts),
            particles=tuple(replace(pt) for pt in state.particles),
            width=state.world.width,
            height=state.world.height,
            health=p.health,
            max_health=p.max_health,
            level=p.level,
            xp=p.xp,
            xp_to_level=p.xp_to_level,
            elapsed=state.elapsed,
            score=state.score,
            difficulty_level=state.difficulty_level,
            displayed_health=state.hud.displayed_health,
            displayed_score=state.hud.displayed_score,
            phase=state.phase,
            upgrade_choices=self.upgrade_choices(),
        )

    def to_dict(self) -> Dict[str, Any]:
        return self.state.to_dict()

    def restore(self, data: Dict[str, Any]):
        """Replace the live state with a deserialized one"""
        self.state = SimulationState.from_dict(data)
