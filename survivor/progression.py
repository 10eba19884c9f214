"""
XP, leveling and the upgrade menu queue
"""

from __future__ import annotations

import logging
import math
from typing import List

from .errors import UpgradeSelectionError
from .events import EventBus, GameEvent
from .settings import SimSettings
from .state import SimulationState
from .upgrades import Upgrade, build_catalog, draw_upgrades
from .utils import RandomSource

logger = logging.getLogger(__name__)


def next_threshold(current: int, growth: float) -> int:
    # Half-up rounding, round() would round 0.5 to even
    return max(1, int(math.floor(current * growth + 0.5)))


class Progression:
    """
    Level-up state machine.

    Each level-up draws its own offer of upgrades and appends it to
    ``state.pending_upgrades``. The simulation stays paused while that queue is
    non-empty; offers are presented and resolved one at a time, oldest first.
    """

    def __init__(self, settings: SimSettings, rng: RandomSource, events: EventBus):
        self.settings = settings
        self.rng = rng
        self.events = events
        self.catalog = build_catalog(max_defense=settings.max_upgrade_defense)
        self.by_kind = {u.kind: u for u in self.catalog}

    def gain_xp(self, state: SimulationState, amount: float) -> int:
        """Add XP and settle every level-up it causes. Returns levels gained."""
        p = state.player
        amount = max(0.0, amount)
        p.xp += amount
        if amount > 0:
            self.events.emit(GameEvent.XP_GAINED, amount=amount)
        gained = 0
        while p.xp >= p.xp_to_level:
            p.xp -= p.xp_to_level
            p.level += 1
            p.xp_to_level = next_threshold(p.xp_to_level, self.settings.xp_growth)
            offer = draw_upgrades(self.rng, self.settings.upgrade_choices, self.catalog)
            state.pending_upgrades.append([u.kind for u in offer])
            gained += 1
            logger.info("Level %d reached, next at %d xp", p.level, p.xp_to_level)
            self.events.emit(GameEvent.LEVEL_UP, level=p.level, choices=[u.id for u in offer])
        return gained

    def current_offer(self, state: SimulationState) -> List[Upgrade]:
        if not state.pending_upgrades:
            return []
        return [self.by_kind[kind] for kind in state.pending_upgrades[0]]

    def choose(self, state: SimulationState, index: int) -> Upgrade:
        """Apply one upgrade from the open menu exactly once and close that menu"""
        offer = self.current_offer(state)
        if not offer:
            raise UpgradeSelectionError("No upgrade menu is open")
        if not 0 <= index < len(offer):
            raise UpgradeSelectionError(f"Upgrade index {index} out of range 0..{len(offer) - 1}")

        upgrade = offer[index]
        p = state.player
        p.apply_stats(upgrade.effect(p.stats()))
        state.pending_upgrades.pop(0)
        logger.info("Upgrade chosen: %s", upgrade.id)
        return upgrade
