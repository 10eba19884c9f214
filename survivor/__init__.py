"""Survivor - simulation core of a top-down survival shooter"""

from .entities import BoostKind, EnemyKind
from .errors import SimulationError, UpgradeSelectionError
from .events import EventBus, GameEvent
from .settings import SimSettings
from .simulation import Simulation, UpgradeChoice, WorldSnapshot
from .state import InputSnapshot, Phase, SimulationState
from .upgrades import UPGRADES, Upgrade, UpgradeKind
from .utils import SequenceRandom, make_rng

__all__ = [
    'Simulation',
    'SimulationState',
    'SimSettings',
    'InputSnapshot',
    'Phase',
    'WorldSnapshot',
    'UpgradeChoice',
    'EnemyKind',
    'BoostKind',
    'GameEvent',
    'EventBus',
    'Upgrade',
    'UpgradeKind',
    'UPGRADES',
    'SimulationError',
    'UpgradeSelectionError',
    'SequenceRandom',
    'make_rng',
]
