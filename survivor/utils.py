"""
Utility functions for game mechanics
"""

from __future__ import annotations
import math
import random
from typing import Optional, Protocol, Sequence, Tuple


class RandomSource(Protocol):
    """Anything with a ``random()`` method returning a float in [0, 1)"""

    def random(self) -> float: ...


class SequenceRandom:
    """Deterministic random source that replays a fixed cyclic sequence"""

    def __init__(self, values: Sequence[float]):
        if not values:
            raise ValueError("SequenceRandom needs at least one value")
        self._values = [float(v) for v in values]
        self._index = 0

    def random(self) -> float:
        value = self._values[self._index % len(self._values)]
        self._index += 1
        return value


def make_rng(seed: Optional[int] = None) -> random.Random:
    """Build a private (optionally seeded) random generator"""
    return random.Random(seed)


def uniform(rng: RandomSource, lo: float, hi: float) -> float:
    """Draw a float in [lo, hi) from a random source"""
    return lo + rng.random() * (hi - lo)


def choice_index(rng: RandomSource, n: int) -> int:
    """Pick an index in [0, n) uniformly"""
    return min(int(rng.random() * n), n - 1)


def clamp(x: float, lo: float, hi: float) -> float:
    """Clamp value between low and high bounds"""
    return lo if x < lo else hi if x > hi else x


def lerp(start: float, end: float, t: float) -> float:
    return start + (end - start) * t


def vec_len(x: float, y: float) -> float:
    """Calculate vector length (magnitude)"""
    return math.hypot(x, y)


def normalize(x: float, y: float, eps: float = 1e-8) -> Tuple[float, float]:
    """Normalize a vector to unit length"""
    l = math.hypot(x, y)
    if l < eps:
        return 0.0, 0.0
    return x / l, y / l


def distance(x1: float, y1: float, x2: float, y2: float) -> float:
    return math.hypot(x1 - x2, y1 - y2)


def circle_collide(x1, y1, r1, x2, y2, r2) -> bool:
    """Check if two circles overlap (strictly closer than the sum of radii)"""
    dx = x1 - x2
    dy = y1 - y2
    rr = r1 + r2
    return (dx * dx + dy * dy) < (rr * rr)


def angle_delta(target: float, current: float) -> float:
    """Shortest signed rotation from ``current`` to ``target`` in (-pi, pi]"""
    diff = target - current
    return math.atan2(math.sin(diff), math.cos(diff))


def turn_towards(current: float, target: float, rate: float) -> float:
    """Rotate ``current`` toward ``target`` by fraction ``rate`` (capped at 1)"""
    return current + angle_delta(target, current) * clamp(rate, 0.0, 1.0)
