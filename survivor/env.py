"""
SurvivorEnv - Gymnasium wrapper around the survivor simulation
--------------------------------------------------------------
- Action: MultiDiscrete([3, 3, 3]) = [horizontal, vertical, upgrade pick]
    horizontal: 0 none, 1 left, 2 right
    vertical:   0 none, 1 up, 2 down
    upgrade:    index into the open upgrade menu (ignored while running)
- Vector observation: player state + top-K nearest enemies + top-M nearest orbs
- Auto-fire is part of the simulation, the agent only moves and picks upgrades
- Reward: score gained + 0.01 per XP gained - 0.05 per health lost, minus a
  death penalty on the terminal step (see REWARD_CONFIG)
"""

from __future__ import annotations

import math
from typing import Any, Dict, Optional

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from .configs.survivor_config import ENV_CONFIG, REWARD_CONFIG, SIM_CONFIG
from .entities import BoostKind, EnemyKind
from .events import GameEvent
from .settings import SimSettings
from .simulation import Simulation
from .state import InputSnapshot, Phase
from .utils import clamp

KIND_IDS = {kind: i for i, kind in enumerate(EnemyKind)}


def action_to_input(action) -> InputSnapshot:
    horizontal, vertical = int(action[0]), int(action[1])
    return InputSnapshot(
        left=horizontal == 1,
        right=horizontal == 2,
        up=vertical == 1,
        down=vertical == 2,
    )


class SurvivorEnv(gym.Env):
    """Survivor simulation exposed through the Gymnasium API"""

    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": 30}

    def __init__(
        self,
        render_mode: Optional[str] = None,
        dt: float = ENV_CONFIG["dt"],
        max_steps: int = ENV_CONFIG["max_steps"],
        k_enemies: int = ENV_CONFIG["k_enemies"],
        m_orbs: int = ENV_CONFIG["m_orbs"],
        sim_config: Optional[Dict[str, Any]] = None,
        reward_config: Optional[Dict[str, float]] = None,
    ):
        super().__init__()
        self.render_mode = render_mode
        self.dt = dt
        self.max_steps = max_steps
        self.k_enemies = k_enemies
        self.m_orbs = m_orbs
        self.settings = SimSettings.from_dict(SIM_CONFIG if sim_config is None else sim_config)
        self.rewards = dict(REWARD_CONFIG, **(reward_config or {}))

        self.action_space = spaces.MultiDiscrete([3, 3, self.settings.upgrade_choices])

        # Player: pos(2) vel(2) health(1) xp(1) defense(1) boosts(3) paused(1)
        # Each enemy: rel pos(2) kind(1)
        # Each orb: rel pos(2)
        obs_dim = 11 + self.k_enemies * 3 + self.m_orbs * 2
        self.observation_space = spaces.Box(low=-1.0, high=1.0, shape=(obs_dim,), dtype=np.float32)

        self.sim: Simulation = None  # type: ignore
        self._window = None
        self._step_count = 0
        self._events: Dict[str, float] = {}

    # ----------------------------
    # Gym API
    # ----------------------------

    def reset(self, seed: Optional[int] = None, options: Optional[dict] = None):
        super().reset(seed=seed)
        if seed is None:
            seed = int(self.np_random.integers(0, 2**31 - 1))

        self.sim = Simulation(settings=self.settings, seed=seed)
        self.sim.events.subscribe(GameEvent.XP_GAINED, self._on_xp)
        self.sim.events.subscribe(GameEvent.PLAYER_HURT, self._on_hurt)
        self._step_count = 0
        self._reset_events()

        return self._get_obs(), self._get_info()

    def step(self, action):
        self._reset_events()

        if self.sim.phase is Phase.PAUSED_FOR_UPGRADE:
            choices = self.sim.upgrade_choices()
            self.sim.choose_upgrade(int(action[2]) % len(choices))

        score_before = self.sim.state.score
        self.sim.tick(self.dt, action_to_input(action))
        self._events["score"] = float(self.sim.state.score - score_before)

        reward = self._compute_reward()
        terminated = self.sim.phase is Phase.GAME_OVER
        self._step_count += 1
        truncated = self._step_count >= self.max_steps

        if self.render_mode == "human":
            self.render()

        return self._get_obs(), reward, terminated, truncated, self._get_info()

    # ----------------------------
    # Event accumulators
    # ----------------------------

    def _reset_events(self):
        self._events = {"score": 0.0, "xp": 0.0, "damage": 0.0}

    def _on_xp(self, amount: float = 0.0, **_):
        self._events["xp"] += amount

    def _on_hurt(self, amount: float = 0.0, **_):
        self._events["damage"] += amount

    def _compute_reward(self) -> float:
        r = self.rewards
        reward = 0.0
        reward += r["R_SCORE"] * self._events["score"]
        reward += r["R_XP"] * self._events["xp"]
        reward -= r["R_DAMAGE"] * self._events["damage"]
        if self.sim.phase is Phase.GAME_OVER:
            reward -= r["R_DEATH"]
        return float(reward)

    # ----------------------------
    # Observation / info
    # ----------------------------

    def _get_obs(self) -> np.ndarray:
        state = self.sim.state
        p = state.player
        w, h = state.world.width, state.world.height
        top_speed = max(1e-6, p.speed * self.settings.boost_speed_mult)

        obs_parts = [
            p.x / w * 2 - 1,
            p.y / h * 2 - 1,
            clamp(p.vx / top_speed, -1, 1),
            clamp(p.vy / top_speed, -1, 1),
            p.health / max(1e-6, p.max_health) * 2 - 1,
            p.xp / max(1, p.xp_to_level) * 2 - 1,
            p.defense / self.settings.max_defense * 2 - 1,
        ]
        for kind in BoostKind:
            obs_parts.append(p.boost_timers[kind] / self.settings.boost_duration * 2 - 1)
        obs_parts.append(1.0 if self.sim.phase is Phase.PAUSED_FOR_UPGRADE else -1.0)

        enemies_sorted = sorted(state.enemies, key=lambda e: (e.x - p.x) ** 2 + (e.y - p.y) ** 2)
        n_kinds = len(KIND_IDS) - 1
        for i in range(self.k_enemies):
            if i < len(enemies_sorted):
                e = enemies_sorted[i]
                obs_parts += [
                    clamp((e.x - p.x) / w, -1, 1),
                    clamp((e.y - p.y) / h, -1, 1),
                    KIND_IDS[e.kind] / n_kinds * 2 - 1,
                ]
            else:
                obs_parts += [0.0, 0.0, 0.0]

        orbs_sorted = sorted(state.orbs, key=lambda o: (o.x - p.x) ** 2 + (o.y - p.y) ** 2)
        for i in range(self.m_orbs):
            if i < len(orbs_sorted):
                o = orbs_sorted[i]
                obs_parts += [clamp((o.x - p.x) / w, -1, 1), clamp((o.y - p.y) / h, -1, 1)]
            else:
                obs_parts += [0.0, 0.0]

        obs = np.clip(np.array(obs_parts, dtype=np.float32), -1.0, 1.0)
        return obs

    def _get_info(self) -> Dict[str, Any]:
        state = self.sim.state
        return {
            "health": state.player.health,
            "level": state.player.level,
            "score": state.score,
            "elapsed": state.elapsed,
            "difficulty": state.difficulty_level,
            "num_enemies": len(state.enemies),
            "num_orbs": len(state.orbs),
            "phase": self.sim.phase.value,
            "step": self._step_count,
        }

    # ----------------------------
    # Rendering
    # ----------------------------

    def render(self):
        if self.render_mode is None:
            return None
        if self.render_mode == "rgb_array":
            return render_rgb_array(self.sim)

        if self._window is None:
            from .render import SurvivorWindow

            self._window = SurvivorWindow(self.sim, interactive=False)
        self._window.dispatch_events()
        self._window.on_draw()
        self._window.flip()
        return None

    def close(self):
        if self._window is not None:
            self._window.close()
            self._window = None


def render_rgb_array(sim: Simulation) -> np.ndarray:
    """Rasterize the snapshot as filled circles into an (H, W, 3) uint8 frame"""
    snap = sim.snapshot()
    w, h = int(snap.width), int(snap.height)
    frame = np.zeros((h, w, 3), dtype=np.uint8)
    frame[:] = (18, 18, 22)
    ys, xs = np.mgrid[0:h, 0:w]

    def disc(x, y, r, color):
        x0, x1 = max(0, int(x - r)), min(w, int(math.ceil(x + r)) + 1)
        y0, y1 = max(0, int(y - r)), min(h, int(math.ceil(y + r)) + 1)
        if x0 >= x1 or y0 >= y1:
            return
        mask = (xs[y0:y1, x0:x1] - x) ** 2 + (ys[y0:y1, x0:x1] - y) ** 2 <= r * r
        frame[y0:y1, x0:x1][mask] = color

    for o in snap.orbs:
        disc(o.x, o.y, o.radius, (74, 222, 128))
    for b in snap.boosts:
        disc(b.x, b.y, b.radius, (167, 139, 250))
    for e in snap.enemies:
        disc(e.x, e.y, e.radius, (255, 255, 255) if e.hit_timer > 0 else (220, 80, 80))
    for b in snap.bullets:
        disc(b.x, b.y, b.radius, (250, 204, 21))
    for b in snap.enemy_bullets:
        disc(b.x, b.y, b.radius, (147, 197, 253))
    disc(snap.player.x, snap.player.y, snap.player.radius, (80, 200, 120))
    return frame


# ----------------------------
# Quick sanity test
# ----------------------------

def run_random_episode(seed: int = 42, max_steps: Optional[int] = None, render: bool = False) -> Dict[str, Any]:
    """Run one episode with a random policy and report the final info dict"""
    kwargs = {} if max_steps is None else {"max_steps": max_steps}
    env = SurvivorEnv(render_mode="human" if render else None, **kwargs)
    env.action_space.seed(seed)
    obs, info = env.reset(seed=seed)

    terminated = False
    truncated = False
    total = 0.0
    while not (terminated or truncated):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total += reward

    env.close()
    info["return"] = total
    return info
