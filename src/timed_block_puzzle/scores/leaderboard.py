"""Local high-score file made of ``name:score`` lines."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import List, Optional

logger = logging.getLogger(__name__)

DEFAULT_SCORES = (("Player1", 100), ("Player2", 150), ("Player3", 200))


@dataclass(frozen=True)
class ScoreEntry:
    name: str
    score: int

    def to_line(self) -> str:
        return f"{self.name}:{self.score}"


def parse_score_line(line: str) -> Optional[ScoreEntry]:
    parts = line.strip().split(":")
    if len(parts) != 2:
        return None
    try:
        score = int(parts[1].strip())
    except ValueError:
        return None
    return ScoreEntry(parts[0].strip(), score)


def load_scores(path: str) -> List[ScoreEntry]:
    if not os.path.exists(path):
        logger.info("No score file at %s", path)
        return []
    entries: List[ScoreEntry] = []
    # Undecodable bytes become U+FFFD so the line fails to parse and is skipped
    with open(path, "r", encoding="utf-8", errors="replace") as f:
        for lineno, line in enumerate(f, start=1):
            if not line.strip():
                continue
            entry = parse_score_line(line)
            if entry is None:
                logger.debug("Skipping malformed score line %d in %s: %r", lineno, path, line)
                continue
            entries.append(entry)
    return entries


def append_score(path: str, entry: ScoreEntry) -> None:
    if ":" in entry.name or "\n" in entry.name or "\r" in entry.name:
        raise ValueError(f"name cannot contain ':' or line breaks: {entry.name!r}")
    with open(path, "a", encoding="utf-8") as f:
        f.write(entry.to_line() + "\n")


def write_default_scores(path: str) -> None:
    with open(path, "w", encoding="utf-8") as f:
        for name, score in DEFAULT_SCORES:
            f.write(f"{name}:{score}\n")


class Leaderboard:
    def __init__(self, path: str, limit: int = 10) -> None:
        self.path = path
        self.limit = limit
        self.entries: List[ScoreEntry] = []

    def load(self) -> List[ScoreEntry]:
        self.entries = load_scores(self.path)
        return self.entries

    def top(self) -> List[ScoreEntry]:
        ranked = sorted(self.entries, key=lambda e: e.score, reverse=True)
        return ranked[: self.limit]

    def is_high_score(self, score: int) -> bool:
        ranked = self.top()
        if len(ranked) < self.limit:
            return True
        return score > ranked[-1].score

    def submit(self, name: str, score: int) -> ScoreEntry:
        entry = ScoreEntry(name.strip(), int(score))
        append_score(self.path, entry)
        logger.info("Recorded score %s", entry.to_line())
        self.load()
        return entry
