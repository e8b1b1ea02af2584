from __future__ import annotations

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from .timed_env import compute_action_mask


class FlattenDiscreteActionWrapper(gym.ActionWrapper):
    """Flattens MultiDiscrete (x, y, r) -> Discrete(N) for PPO.

    Also exposes `get_action_mask()` returning a 1D boolean mask of shape (N,).
    Order: x, y, r (C-order flattening).
    """

    def __init__(self, env: gym.Env):
        super().__init__(env)
        assert isinstance(env.action_space, spaces.MultiDiscrete)
        self.width, self.height, self.rot = map(int, env.action_space.nvec)
        self.n = int(self.width * self.height * self.rot)
        self.action_space = spaces.Discrete(self.n)

    def _unflatten(self, idx: int) -> tuple[int, int, int]:
        r = idx % self.rot
        idx //= self.rot
        y = idx % self.height
        x = idx // self.height
        return int(x), int(y), int(r)

    def action(self, action: int):  # type: ignore[override]
        return np.array(self._unflatten(int(action)), dtype=np.int64)

    def get_action_mask(self) -> np.ndarray:
        return compute_action_mask(self.env.unwrapped.game).reshape(-1)
