"""
Cosmetic particle bursts
"""

from __future__ import annotations

import math
from typing import Tuple

from .entities import Particle
from .state import SimulationState
from .utils import RandomSource, uniform

Color = Tuple[int, int, int]

HIT_COLOR: Color = (250, 204, 21)
KILL_COLOR: Color = (251, 146, 60)
PLAYER_HIT_COLOR: Color = (147, 197, 253)
BOOST_COLOR: Color = (110, 231, 183)


class ParticleEmitter:
    """Scatters particles using its own random source, never the gameplay one"""

    def __init__(self, rng: RandomSource, enabled: bool = True):
        self.rng = rng
        self.enabled = enabled

    def burst(self, state: SimulationState, x: float, y: float, color: Color, count: int):
        if not self.enabled:
            return
        for _ in range(count):
            angle = uniform(self.rng, 0.0, math.pi * 2)
            speed = uniform(self.rng, 40.0, 160.0)
            life = uniform(self.rng, 0.4, 0.7)
            state.particles.append(Particle(
                x=x,
                y=y,
                vx=math.cos(angle) * speed,
                vy=math.sin(angle) * speed,
                radius=uniform(self.rng, 2.0, 4.0),
                life=life,
                ttl=life,
                color=color,
            ))
