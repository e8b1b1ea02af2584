"""Gymnasium environments for Timed Block Puzzle."""

from __future__ import annotations

from gymnasium.envs.registration import register

register(
    id="TimedBlockPuzzle-5x5-v0",
    entry_point="timed_block_puzzle.env.timed_env:TimedBlockPuzzleEnv",
)

__all__ = ["TimedBlockPuzzle-5x5-v0"]
