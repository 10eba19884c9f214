"""
Command-line entry point

Usage:
    python -m survivor                    # open the arcade viewer
    python -m survivor --headless         # random-policy episode, prints a summary
    python -m survivor --headless --steps 600 --seed 7
    python -m survivor --headless --dt 0.05   # coarser fixed step
"""

import argparse
import logging

from .configs.survivor_config import ENV_CONFIG, SIM_PRESETS


def main(argv=None):
    parser = argparse.ArgumentParser(description="Top-down survival shooter simulation")
    parser.add_argument(
        "--headless",
        action="store_true",
        help="Run a random-policy episode without a window",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=42,
        help="Random seed (default: 42)",
    )
    parser.add_argument(
        "--steps",
        type=int,
        default=ENV_CONFIG["max_steps"],
        help=f"Max steps for headless runs (default: {ENV_CONFIG['max_steps']})",
    )
    parser.add_argument(
        "--dt",
        type=float,
        default=ENV_CONFIG["dt"],
        help=f"Fixed step for headless runs, frame cap for the viewer (default: {ENV_CONFIG['dt']:.4f})",
    )
    parser.add_argument(
        "--preset",
        type=str,
        default="default",
        choices=sorted(SIM_PRESETS),
        help="Simulation preset (default: default)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )

    args = parser.parse_args(argv)
    if args.dt <= 0:
        parser.error("--dt must be positive")
    logging.basicConfig(level=args.log_level, format="%(levelname)s %(name)s: %(message)s")

    if args.headless:
        from .env import SurvivorEnv

        env = SurvivorEnv(dt=args.dt, max_steps=args.steps, sim_config=SIM_PRESETS[args.preset])
        env.action_space.seed(args.seed)
        obs, info = env.reset(seed=args.seed)

        print(f"\n{'='*60}")
        print(f"Running random episode (seed={args.seed}, preset={args.preset})...")
        print(f"{'='*60}\n")

        total = 0.0
        terminated = truncated = False
        while not (terminated or truncated):
            obs, reward, terminated, truncated, info = env.step(env.action_space.sample())
            total += reward
        env.close()

        print(f"Episode return: {total:.2f}")
        print(f"Survived: {info['elapsed']:.1f}s ({info['step']} steps)")
        print(f"Score: {info['score']}  Level: {info['level']}  Difficulty: {info['difficulty']}")
        print(f"Final phase: {info['phase']}")
        return info

    from .render import run_window
    from .simulation import Simulation

    sim = Simulation.from_config(SIM_PRESETS[args.preset], seed=args.seed)
    run_window(sim, max_dt=args.dt)
    return None


if __name__ == "__main__":
    main()
