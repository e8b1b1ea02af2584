from __future__ import annotations

import argparse
import logging
from typing import Dict

import pygame

from timed_block_puzzle.game import GameConfig, LinesCleared, TimedBlockPuzzleGame
from timed_block_puzzle.scores import Leaderboard
from .renderer import Renderer

logger = logging.getLogger(__name__)

FLASH_FRAMES = 12


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser()
    p.add_argument("--cols", type=int, default=5)
    p.add_argument("--rows", type=int, default=5)
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--name", type=str, default="Player")
    p.add_argument("--scores-file", type=str, default=None,
                   help="name:score file to record finished games in")
    p.add_argument("--log-level", type=str, default="INFO")
    return p


def run(args: argparse.Namespace) -> None:
    game = TimedBlockPuzzleGame(GameConfig(width=args.cols, height=args.rows, random_seed=args.seed))
    leaderboard = Leaderboard(args.scores_file) if args.scores_file else None

    # Cleared cells flash for a few frames
    flashing: Dict = {}

    def on_lines_cleared(event: LinesCleared) -> None:
        for c in event.coordinates:
            flashing[c] = FLASH_FRAMES

    game.subscribe(on_lines_cleared, LinesCleared)

    pygame.init()
    try:
        renderer = Renderer()
        screen = pygame.display.set_mode(renderer.window_size((args.rows, args.cols)))
        pygame.display.set_caption("Timed Block Puzzle")
        font = pygame.font.SysFont(None, 24)
        clock = pygame.time.Clock()

        game.start()
        recorded = False
        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.MOUSEBUTTONDOWN:
                    if event.button == 1:
                        x, y = renderer.cell_at(event.pos)
                        game.attempt_placement(x, y)
                    elif event.button == 3:
                        game.swap_current_and_following()
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key in (pygame.K_e, pygame.K_RIGHTBRACKET):
                        game.rotate_current(1)
                    elif event.key in (pygame.K_q, pygame.K_LEFTBRACKET):
                        game.rotate_current(3)
                    elif event.key in (pygame.K_r, pygame.K_SPACE):
                        game.swap_current_and_following()
                    elif event.key == pygame.K_n and game.is_over:
                        game.stop()
                        game.start()
                        recorded = False

            if game.is_over and not recorded:
                recorded = True
                if leaderboard is not None:
                    leaderboard.load()
                    if leaderboard.is_high_score(game.score):
                        leaderboard.submit(args.name, game.score)

            renderer.draw(screen, game, font, flashing=list(flashing))
            for c in list(flashing):
                flashing[c] -= 1
                if flashing[c] <= 0:
                    del flashing[c]
            clock.tick(60)
    finally:
        game.stop()
        pygame.quit()


def main() -> None:
    args = build_parser().parse_args()
    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(name)s %(levelname)s %(message)s")
    run(args)


if __name__ == "__main__":  # pragma: no cover
    main()
