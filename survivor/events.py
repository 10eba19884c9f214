"""
Discrete simulation events for sound/cosmetic layers
"""

from __future__ import annotations

import logging
from collections import defaultdict
from enum import Enum
from typing import Callable, DefaultDict, List

logger = logging.getLogger(__name__)

Listener = Callable[..., None]


class GameEvent(str, Enum):
    SHOOT = "shoot"
    HIT = "hit"
    BOOST_COLLECTED = "boost_collected"
    XP_GAINED = "xp_gained"
    LEVEL_UP = "level_up"
    ENEMY_KILLED = "enemy_killed"
    PLAYER_HURT = "player_hurt"
    GAME_OVER = "game_over"


class EventBus:
    """
    Fan-out of named events to subscribed listeners.
    Listeners run synchronously inside the tick; a failing listener is
    logged and skipped so it cannot change the simulation outcome.
    """

    def __init__(self):
        self._listeners: DefaultDict[GameEvent, List[Listener]] = defaultdict(list)

    def subscribe(self, event: GameEvent, listener: Listener) -> Callable[[], None]:
        """Register a listener, returns a callable that unsubscribes it"""
        event = GameEvent(event)
        self._listeners[event].append(listener)

        def unsubscribe():
            if listener in self._listeners[event]:
                self._listeners[event].remove(listener)

        return unsubscribe

    def emit(self, event: GameEvent, **payload) -> None:
        for listener in list(self._listeners.get(event, ())):
            try:
                listener(**payload)
            except Exception:
                logger.exception("Listener %r failed on %s", listener, event.value)
