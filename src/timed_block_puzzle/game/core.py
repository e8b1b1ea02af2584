from __future__ import annotations

import logging
import random
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Set

from .events import (
    EventChannel,
    EventKind,
    GameEvent,
    GameUpdated,
    LinesCleared,
    NextPieceChanged,
    Subscription,
    TimerTicked,
)
from .grid import BlockCoordinate, GameGrid
from .pieces import PIECE_COUNT, GamePiece, create_piece
from .rules import ScoringRules
from .timer import ThreadingTurnTimer, TurnTimer

logger = logging.getLogger(__name__)

IndexSource = Callable[[int], int]
PieceFactory = Callable[[int], GamePiece]


class GameState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    TERMINAL = "terminal"


@dataclass
class GameConfig:
    width: int = 5
    height: int = 5
    random_seed: Optional[int] = None
    starting_lives: int = 3


class EffectSink:
    """Receives gameplay occurrences (for sounds, animations). Every hook is a no-op here."""

    def on_piece_placed(self, piece: GamePiece) -> None:
        pass

    def on_piece_rotated(self, piece: GamePiece) -> None:
        pass

    def on_piece_swapped(self, current: GamePiece, following: GamePiece) -> None:
        pass

    def on_life_lost(self, lives: int) -> None:
        pass

    def on_lines_cleared(self, lines: int) -> None:
        pass


class TimedBlockPuzzleGame:
    """Grid placement game with a per-turn countdown.

    The player places the current piece anywhere it fits. Full rows and columns
    are cleared after every placement. If no piece is placed before the turn
    timer runs out, the current piece is thrown away and a life is lost.

    Commands and the timer callback all run under one re-entrant lock, and
    events are published while it is held, so subscribers see transitions in
    the order they happened. Subscribers must return promptly.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rules: Optional[ScoringRules] = None,
        timer: Optional[TurnTimer] = None,
        effects: Optional[EffectSink] = None,
        index_source: Optional[IndexSource] = None,
        piece_factory: PieceFactory = create_piece,
    ) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.timer = timer or ThreadingTurnTimer()
        self.effects = effects or EffectSink()
        self.rng = random.Random(self.config.random_seed)
        self.index_source: IndexSource = index_source or self.rng.randrange
        self.piece_factory = piece_factory
        self.events = EventChannel()
        self.grid = GameGrid(self.config.width, self.config.height)

        self._lock = threading.RLock()
        self._turn_token = 0
        self.state = GameState.IDLE
        self.current_piece: Optional[GamePiece] = None
        self.following_piece: Optional[GamePiece] = None
        self.score = 0
        self.level = 0
        self.lives = self.config.starting_lives
        self.multiplier = 1
        self.lines_cleared_total = 0
        self.pieces_placed = 0

    # ------------------------------------------------------------------
    # Subscriptions

    def subscribe(self, callback: Callable[[GameEvent], None], *kinds: EventKind) -> Subscription:
        return self.events.subscribe(callback, *kinds)

    def _emit(self, event: GameEvent) -> None:
        self.events.publish(event)

    # ------------------------------------------------------------------
    # Commands

    def start(self) -> None:
        with self._lock:
            if self.state is GameState.RUNNING:
                logger.warning("start() called on a running game; ignoring")
                return
            logger.info("Starting %dx%d game", self.grid.width, self.grid.height)
            self.grid.reset()
            self._reset_counters()
            self.current_piece = self._spawn_piece()
            self.following_piece = self._spawn_piece()
            self.state = GameState.RUNNING
            self._emit(NextPieceChanged(self.current_piece, self.following_piece))
            self._arm_timer()

    def stop(self) -> None:
        with self._lock:
            logger.info("Stopping game (score=%d, level=%d)", self.score, self.level)
            self._turn_token += 1
            self.timer.cancel()
            self._reset_counters()
            self.state = GameState.IDLE

    def attempt_placement(self, x: int, y: int) -> bool:
        """Play the current piece centred on (x, y). Returns False if it does not fit."""
        with self._lock:
            if self.state is not GameState.RUNNING:
                return False
            piece = self.current_piece
            if not self.grid.can_play_piece(piece, x, y):
                return False
            self.grid.play_piece(piece, x, y)
            self.pieces_placed += 1
            logger.debug("Placed %s at (%d, %d)", piece.name, x, y)
            self.effects.on_piece_placed(piece)
            self._after_piece()
            self._next_piece()
            self._arm_timer()
            return True

    def rotate_current(self, quarter_turns: int = 1) -> None:
        with self._lock:
            if self.state is not GameState.RUNNING:
                return
            self.current_piece.rotate(quarter_turns)
            logger.debug("Rotated %s to %d", self.current_piece.name, self.current_piece.rotation)
            self.effects.on_piece_rotated(self.current_piece)
            self._emit(GameUpdated())

    def swap_current_and_following(self) -> None:
        with self._lock:
            if self.state is not GameState.RUNNING:
                return
            self.current_piece, self.following_piece = self.following_piece, self.current_piece
            logger.debug("Swapped pieces; current is now %s", self.current_piece.name)
            self.effects.on_piece_swapped(self.current_piece, self.following_piece)
            self._emit(NextPieceChanged(self.current_piece, self.following_piece))

    # ------------------------------------------------------------------
    # Queries

    @property
    def is_over(self) -> bool:
        return self.state is GameState.TERMINAL

    def get_cell(self, x: int, y: int) -> int:
        with self._lock:
            return self.grid.get(x, y)

    def timer_delay_ms(self) -> int:
        return self.rules.timer_delay_ms(self.level)

    def time_remaining_ms(self) -> int:
        if self.state is not GameState.RUNNING:
            return 0
        return self.timer.remaining_ms()

    def get_state(self) -> dict:
        with self._lock:
            return {
                "grid": self.grid.clone_state(),
                "state": self.state.value,
                "current_piece": int(self.current_piece.kind) if self.current_piece else -1,
                "following_piece": int(self.following_piece.kind) if self.following_piece else -1,
                "score": self.score,
                "level": self.level,
                "lives": self.lives,
                "multiplier": self.multiplier,
                "lines_cleared_total": self.lines_cleared_total,
                "pieces_placed": self.pieces_placed,
                "timer_delay_ms": self.timer_delay_ms(),
                "time_remaining_ms": self.time_remaining_ms(),
            }

    # ------------------------------------------------------------------
    # Turn internals (callers hold self._lock)

    def _reset_counters(self) -> None:
        self.score = 0
        self.level = 0
        self.lives = self.config.starting_lives
        self.multiplier = 1
        self.lines_cleared_total = 0
        self.pieces_placed = 0

    def _spawn_piece(self) -> GamePiece:
        index = self.index_source(PIECE_COUNT)
        piece = self.piece_factory(index)
        logger.debug("Picked piece %d (%s)", index, piece.name)
        return piece

    def _next_piece(self) -> None:
        self.current_piece = self.following_piece
        self.following_piece = self._spawn_piece()
        self._emit(NextPieceChanged(self.current_piece, self.following_piece))

    def _arm_timer(self) -> None:
        self._turn_token += 1
        token = self._turn_token
        delay = self.timer_delay_ms()
        logger.debug("Turn timer armed for %d ms", delay)
        self.timer.arm(delay, lambda: self._on_timer_expired(token))

    def _after_piece(self) -> None:
        cleared: Set[BlockCoordinate] = set()
        lines = 0
        for x in self.grid.full_columns():
            cleared.update(BlockCoordinate(x, y) for y in range(self.grid.rows))
            lines += 1
        for y in self.grid.full_rows():
            cleared.update(BlockCoordinate(x, y) for x in range(self.grid.cols))
            lines += 1

        if cleared:
            self.grid.clear(cleared)
            logger.debug("Cleared %d lines (%d blocks)", lines, len(cleared))
            self.effects.on_lines_cleared(lines)
            self._emit(LinesCleared(frozenset(cleared)))

        self.score += self.rules.score_for_clear(lines, len(cleared), self.multiplier)
        self.lines_cleared_total += lines
        if lines > 0:
            self.multiplier += 1
        else:
            self.multiplier = 1

        level = self.rules.next_level(self.level, self.score)
        if level != self.level:
            logger.info("Level %d -> %d", self.level, level)
            self.level = level

    def _on_timer_expired(self, token: int) -> None:
        with self._lock:
            if token != self._turn_token or self.state is not GameState.RUNNING:
                return
            self.lives -= 1
            logger.info("Turn timer expired; %d lives left", self.lives)
            self.effects.on_life_lost(self.lives)
            if self.lives < 0:
                logger.info("Game over with score %d", self.score)
                self._turn_token += 1
                self.timer.cancel()
                self.state = GameState.TERMINAL
                self._emit(GameUpdated())
            else:
                self._next_piece()
                self._arm_timer()
            self._emit(TimerTicked())
