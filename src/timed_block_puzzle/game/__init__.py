"""Game module for Timed Block Puzzle.

Exports the engine and its supporting classes:
- GameGrid: Board of cell values with placement checks
- GamePiece / PieceType: The 15-piece catalog and in-place rotation
- ScoringRules: Score, level and turn-timer formulas
- EventChannel: Ordered fan-out of typed engine events
- TurnTimer: Thread-backed and manual single-shot turn timers
- TimedBlockPuzzleGame: The turn state machine
"""

from .errors import GameError, OutOfBounds, InvalidIndex
from .grid import BlockCoordinate, GameGrid
from .pieces import PIECE_COUNT, GamePiece, PieceType, create_piece
from .rules import LevelPolicy, ScoringRules
from .events import (
    EventChannel,
    GameEvent,
    GameUpdated,
    LinesCleared,
    NextPieceChanged,
    TimerTicked,
)
from .timer import ManualTurnTimer, ThreadingTurnTimer, TurnTimer
from .core import EffectSink, GameConfig, GameState, TimedBlockPuzzleGame

__all__ = [
    "GameError",
    "OutOfBounds",
    "InvalidIndex",
    "BlockCoordinate",
    "GameGrid",
    "PIECE_COUNT",
    "GamePiece",
    "PieceType",
    "create_piece",
    "LevelPolicy",
    "ScoringRules",
    "EventChannel",
    "GameEvent",
    "GameUpdated",
    "LinesCleared",
    "NextPieceChanged",
    "TimerTicked",
    "ManualTurnTimer",
    "ThreadingTurnTimer",
    "TurnTimer",
    "EffectSink",
    "GameConfig",
    "GameState",
    "TimedBlockPuzzleGame",
]
