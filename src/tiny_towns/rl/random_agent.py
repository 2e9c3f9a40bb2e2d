from __future__ import annotations

import argparse
import logging
from typing import List, Optional

import gymnasium as gym

import tiny_towns.env  # noqa: F401
from tiny_towns.env.wrappers import ResampleInvalidActionWrapper

logger = logging.getLogger(__name__)


def run_random(episodes: int = 5, seed: Optional[int] = None, show_board: bool = False) -> List[int]:
    """Play episodes with uniformly random (valid) actions; returns final scores."""
    env = ResampleInvalidActionWrapper(gym.make("TinyTowns-4x4-v0", render_mode="ansi"))
    env.action_space.seed(seed)
    scores: List[int] = []
    try:
        obs, info = env.reset(seed=seed)
        for episode in range(episodes):
            total_reward = 0.0
            while True:
                action = env.action_space.sample()
                obs, reward, terminated, truncated, info = env.step(action)
                total_reward += float(reward)
                if terminated or truncated:
                    break
            scores.append(int(info["score"]))
            logger.info("Episode %d: score=%d reward=%.1f steps=%d",
                        episode + 1, info["score"], total_reward, info["steps"])
            if show_board:
                logger.info("Final board:\n%s", env.render())
            obs, info = env.reset()
    finally:
        env.close()
    return scores


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Run a random Tiny Towns agent")
    p.add_argument("--episodes", type=int, default=5)
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--show-board", action="store_true")
    return p


def main() -> None:
    args = build_parser().parse_args()
    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
    scores = run_random(args.episodes, args.seed, args.show_board)
    logger.info("Mean score over %d episodes: %.2f", len(scores), sum(scores) / max(1, len(scores)))


if __name__ == "__main__":  # pragma: no cover
    main()
