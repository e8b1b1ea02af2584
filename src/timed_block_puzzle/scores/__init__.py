"""Leaderboard persistence for finished games."""

from .leaderboard import (
    Leaderboard,
    ScoreEntry,
    append_score,
    load_scores,
    parse_score_line,
    write_default_scores,
)

__all__ = [
    "Leaderboard",
    "ScoreEntry",
    "append_score",
    "load_scores",
    "parse_score_line",
    "write_default_scores",
]
