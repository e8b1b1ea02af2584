from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from timed_block_puzzle.game import (
    PIECE_COUNT,
    GameConfig,
    GamePiece,
    GameState,
    ManualTurnTimer,
    ScoringRules,
    TimedBlockPuzzleGame,
)


def compute_action_mask(game: TimedBlockPuzzleGame) -> np.ndarray:
    """(width, height, 4) mask: True where rotating by r then placing at (x, y) succeeds."""
    width, height = game.grid.width, game.grid.height
    mask = np.zeros((width, height, 4), dtype=np.bool_)
    if game.state is not GameState.RUNNING or game.current_piece is None:
        return mask
    current = game.current_piece
    for r in range(4):
        probe = GamePiece(current.kind, current.rotation + r)
        for x in range(width):
            for y in range(height):
                mask[x, y, r] = game.grid.can_play_piece(probe, x, y)
    return mask


class TimedBlockPuzzleEnv(gym.Env):
    """Drives the engine on a simulated clock: each step consumes `step_ms` of turn time."""

    metadata = {"render_modes": ["rgb_array"], "render_fps": 30}

    def __init__(self, config: Optional[GameConfig] = None, rules: Optional[ScoringRules] = None,
                 render_mode: Optional[str] = None,
                 step_ms: int = 1000,
                 max_episode_steps: int = 10000,
                 life_penalty: float = 50.0,
                 invalid_action_penalty: float = -1.0) -> None:
        super().__init__()
        self.timer = ManualTurnTimer()
        self.game = TimedBlockPuzzleGame(config, rules, timer=self.timer)
        self.render_mode = render_mode
        self.step_ms = int(step_ms)
        self.max_episode_steps = int(max_episode_steps)
        self.life_penalty = float(life_penalty)
        self.invalid_action_penalty = float(invalid_action_penalty)

        width, height = self.game.grid.width, self.game.grid.height
        self.observation_space = spaces.Dict(
            {
                "grid": spaces.Box(low=0, high=PIECE_COUNT, shape=(height, width), dtype=np.int32),
                "pieces": spaces.Box(low=0, high=PIECE_COUNT - 1, shape=(2,), dtype=np.int8),
                "lives": spaces.Discrete(self.game.config.starting_lives + 2, start=-1),
                "multiplier": spaces.Box(low=1, high=np.inf, shape=(1,), dtype=np.float32),
                "time_fraction": spaces.Box(low=0.0, high=1.0, shape=(1,), dtype=np.float32),
            }
        )
        # Action: (x, y, rotation)
        self.action_space = spaces.MultiDiscrete((width, height, 4))
        self._steps = 0

    def _get_obs(self) -> Dict[str, Any]:
        pieces = np.zeros((2,), dtype=np.int8)
        if self.game.current_piece is not None:
            pieces[0] = int(self.game.current_piece.kind)
            pieces[1] = int(self.game.following_piece.kind)
        delay = max(1, self.game.timer_delay_ms())
        fraction = min(1.0, self.game.time_remaining_ms() / delay)
        return {
            "grid": self.game.grid.clone_state(),
            "pieces": pieces,
            "lives": int(self.game.lives),
            "multiplier": np.array([self.game.multiplier], dtype=np.float32),
            "time_fraction": np.array([fraction], dtype=np.float32),
        }

    def _get_info(self) -> Dict[str, Any]:
        return {
            "action_mask": compute_action_mask(self.game),
            "score": self.game.score,
            "level": self.game.level,
            "lives": self.game.lives,
            "steps": self._steps,
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        if seed is not None:
            self.game.rng.seed(seed)
        self.game.stop()
        self.game.start()
        self._steps = 0
        return self._get_obs(), self._get_info()

    def step(self, action):
        x, y, r = map(int, action)
        score_before = self.game.score
        lives_before = self.game.lives

        self.game.rotate_current(r)
        placed = self.game.attempt_placement(x, y)
        if not placed:
            self.game.rotate_current(-r)
        # Every step uses up turn time; an idle turn may end in a forced expiry
        self.timer.advance(self.step_ms)

        lives_lost = lives_before - self.game.lives
        reward = float(self.game.score - score_before) - self.life_penalty * lives_lost
        if not placed:
            reward += self.invalid_action_penalty

        self._steps += 1
        terminated = self.game.is_over
        truncated = self._steps >= self.max_episode_steps
        info = self._get_info()
        info["placed"] = placed
        info["lives_lost"] = lives_lost
        return self._get_obs(), reward, terminated, truncated, info

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode != "rgb_array":
            return None
        grid = self.game.grid.grid
        cell = 12
        h, w = grid.shape
        img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
        for y in range(h):
            for x in range(w):
                color = (70, 200, 120) if grid[y, x] else (30, 30, 36)
                img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = color
        return img

    def close(self) -> None:
        self.game.stop()
