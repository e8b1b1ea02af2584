from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class LevelPolicy(str, Enum):
    STEP = "step"  # advance one level whenever score // threshold differs
    SNAP = "snap"  # jump straight to score // threshold


@dataclass
class ScoringRules:
    points_per_block: int = 10
    level_threshold: int = 1000
    base_delay_ms: int = 12000
    delay_step_ms: int = 500
    min_delay_ms: int = 2500
    level_policy: LevelPolicy = LevelPolicy.STEP

    def score_for_clear(self, lines: int, blocks: int, multiplier: int) -> int:
        if lines <= 0:
            return 0
        return lines * blocks * self.points_per_block * multiplier

    def timer_delay_ms(self, level: int) -> int:
        return max(self.min_delay_ms, self.base_delay_ms - self.delay_step_ms * level)

    def next_level(self, level: int, score: int) -> int:
        target = score // self.level_threshold
        if target == level:
            return level
        if self.level_policy is LevelPolicy.SNAP:
            return target
        return level + 1
