"""
Time-driven difficulty scaling
"""

from __future__ import annotations

import logging
import math

from .settings import SimSettings
from .state import SimulationState

logger = logging.getLogger(__name__)


def difficulty_for(elapsed: float, settings: SimSettings) -> int:
    return int(math.floor(elapsed / settings.difficulty_interval))


def spawn_interval_for(level: int, settings: SimSettings) -> float:
    return settings.base_spawn_interval / (1 + level * settings.spawn_rate_scale)


class DifficultyController:
    """Tracks un-paused time and derives the difficulty level and spawn interval"""

    def __init__(self, settings: SimSettings):
        self.settings = settings

    def update(self, state: SimulationState, dt: float):
        state.elapsed += dt
        level = difficulty_for(state.elapsed, self.settings)
        # Never goes down
        if level > state.difficulty_level:
            state.difficulty_level = level
            logger.info("Difficulty %d at %.1fs", level, state.elapsed)
        state.spawn_interval = spawn_interval_for(state.difficulty_level, self.settings)
