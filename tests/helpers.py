from __future__ import annotations

import itertools

from timed_block_puzzle.game import (
    EffectSink,
    GameConfig,
    ManualTurnTimer,
    TimedBlockPuzzleGame,
)


def scripted(*indices):
    it = itertools.cycle([int(i) for i in indices])
    return lambda size: next(it)


def make_game(*indices, width=5, height=5, **kwargs):
    timer = ManualTurnTimer()
    game = TimedBlockPuzzleGame(
        GameConfig(width=width, height=height),
        timer=timer,
        index_source=scripted(*indices),
        **kwargs,
    )
    return game, timer


class RecordingEffects(EffectSink):
    def __init__(self):
        self.calls = []

    def on_piece_placed(self, piece):
        self.calls.append(("placed", piece.kind))

    def on_piece_rotated(self, piece):
        self.calls.append(("rotated", piece.rotation))

    def on_piece_swapped(self, current, following):
        self.calls.append(("swapped", current.kind))

    def on_life_lost(self, lives):
        self.calls.append(("life_lost", lives))

    def on_lines_cleared(self, lines):
        self.calls.append(("lines_cleared", lines))
