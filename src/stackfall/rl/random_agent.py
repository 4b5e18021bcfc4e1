from __future__ import annotations

import argparse
import logging
from typing import Optional

import gymnasium as gym

# Ensure envs are registered
import stackfall.env  # noqa: F401
from stackfall.game import GameConfig, Theme


def run_random(steps: int = 200, seed: Optional[int] = None, config: Optional[GameConfig] = None,
               render: bool = False) -> dict:
    env = gym.make("Stackfall-v0", config=config, render_mode="ansi" if render else None)
    obs, info = env.reset(seed=seed)
    env.action_space.seed(seed)
    total_reward = 0.0
    episodes = 0
    best_score = 0
    for _ in range(steps):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total_reward += float(reward)
        best_score = max(best_score, info["score"])
        if terminated or truncated:
            episodes += 1
            if render:
                print(env.render())
            obs, info = env.reset()
    env.close()
    return {"total_reward": total_reward, "episodes": episodes, "best_score": best_score}


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play Stackfall with uniformly random actions")
    p.add_argument("--steps", type=int, default=200)
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--theme", choices=[t.value for t in Theme], default=Theme.TECHNICOLOR.value)
    p.add_argument("--compact", action="store_true", help="Use the 20-row compact field")
    p.add_argument("--render", action="store_true", help="Print the final board of each episode")
    p.add_argument("--log-level", default="WARNING")
    return p


def main() -> None:
    args = build_parser().parse_args()
    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(name)s %(levelname)s %(message)s")
    config = GameConfig.for_theme(args.theme, compact=args.compact)
    result = run_random(args.steps, seed=args.seed, config=config, render=args.render)
    print(
        f"Random agent total reward: {result['total_reward']:.2f} "
        f"over {result['episodes']} finished episodes, best score {result['best_score']}"
    )


if __name__ == "__main__":  # pragma: no cover
    main()
