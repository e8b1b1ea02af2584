from __future__ import annotations

import argparse
import logging
import os

from .leaderboard import Leaderboard, write_default_scores


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="python -m timed_block_puzzle.scores")
    p.add_argument("--file", type=str, required=True, help="Path to the name:score file")
    p.add_argument("--limit", type=int, default=10)
    p.add_argument("--init", action="store_true", help="Seed the file with default scores if it is missing")
    p.add_argument("--log-level", type=str, default="WARNING")
    return p


def main() -> None:
    args = build_parser().parse_args()
    logging.basicConfig(level=args.log_level.upper())
    if args.init and not os.path.exists(args.file):
        write_default_scores(args.file)
    board = Leaderboard(args.file, limit=args.limit)
    board.load()
    ranked = board.top()
    if not ranked:
        print("No scores yet")
        return
    for i, entry in enumerate(ranked, start=1):
        print(f"{i:>2}. {entry.name:<20} {entry.score:>8}")


if __name__ == "__main__":  # pragma: no cover
    main()
