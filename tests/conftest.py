import pytest

from survivor.entities import Enemy, EnemyKind
from survivor.events import EventBus
from survivor.particles import ParticleEmitter
from survivor.settings import SimSettings
from survivor.simulation import Simulation
from survivor.state import SimulationState
from survivor.utils import SequenceRandom


@pytest.fixture
def settings():
    return SimSettings()


@pytest.fixture
def state(settings):
    return SimulationState.initial(settings)


@pytest.fixture
def events():
    return EventBus()


@pytest.fixture
def quiet_particles():
    return ParticleEmitter(SequenceRandom([0.5]), enabled=False)


@pytest.fixture
def sim(settings):
    """Simulation with an empty arena and a fixed gameplay roll of 0.5"""
    return Simulation(
        settings=settings,
        rng=SequenceRandom([0.5]),
        cosmetic_rng=SequenceRandom([0.5]),
        spawn_initial=False,
    )


def make_enemy(x, y, kind=EnemyKind.GRUNT, health=60.0, radius=12.0, speed=80.0, **kwargs):
    return Enemy(x=x, y=y, kind=kind, health=health, radius=radius, speed=speed, **kwargs)
