from __future__ import annotations

import argparse

import numpy as np
import gymnasium as gym

import timed_block_puzzle.env  # noqa: F401  ensure registration


def run_random(steps: int = 200, seed: int = 0) -> float:
    env = gym.make("TimedBlockPuzzle-5x5-v0")
    rng = np.random.default_rng(seed)
    obs, info = env.reset(seed=seed)
    total_reward = 0.0
    games = 0
    for _ in range(steps):
        # Prefer valid placements if available
        valid = np.argwhere(info["action_mask"])
        if valid.size:
            action = valid[rng.integers(len(valid))]
        else:
            action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total_reward += float(reward)
        if terminated or truncated:
            games += 1
            print(f"Game {games} finished: score={info['score']} level={info['level']}")
            obs, info = env.reset()
    env.close()
    print(f"Random agent total reward: {total_reward:.2f}")
    return total_reward


def main() -> None:
    p = argparse.ArgumentParser()
    p.add_argument("--steps", type=int, default=200)
    p.add_argument("--seed", type=int, default=0)
    args = p.parse_args()
    run_random(args.steps, args.seed)


if __name__ == "__main__":  # pragma: no cover
    main()
