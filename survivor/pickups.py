"""
Player pickup of XP orbs and boosts
"""

from __future__ import annotations

from . import boosts
from .events import EventBus, GameEvent
from .particles import BOOST_COLOR, ParticleEmitter
from .settings import SimSettings
from .state import SimulationState
from .utils import circle_collide


def collect_orbs(state: SimulationState) -> float:
    """Remove every orb touching the player, returns the XP they carried"""
    p = state.player
    orbs = state.orbs
    total = 0.0
    for i in range(len(orbs) - 1, -1, -1):
        orb = orbs[i]
        if circle_collide(p.x, p.y, p.radius, orb.x, orb.y, orb.radius):
            total += orb.amount
            del orbs[i]
    return total


def collect_boosts(state: SimulationState, settings: SimSettings, events: EventBus, particles: ParticleEmitter):
    p = state.player
    pool = state.boosts
    for i in range(len(pool) - 1, -1, -1):
        boost = pool[i]
        if circle_collide(p.x, p.y, p.radius, boost.x, boost.y, boost.radius):
            boosts.collect(p, boost.kind, settings)
            particles.burst(state, boost.x, boost.y, BOOST_COLOR, 10)
            del pool[i]
            events.emit(GameEvent.BOOST_COLLECTED, kind=boost.kind)
