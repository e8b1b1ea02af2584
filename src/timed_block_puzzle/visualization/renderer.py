from __future__ import annotations

from typing import Iterable, Optional, Set, Tuple

import numpy as np
import pygame

from timed_block_puzzle.game import BlockCoordinate, GamePiece, TimedBlockPuzzleGame


def _color_for_value(v: int) -> Tuple[int, int, int]:
    palette = {
        0: (20, 20, 26),
        1: (0, 240, 240),     # LINE
        2: (240, 240, 0),     # C
        3: (160, 0, 240),     # PLUS
        4: (240, 240, 240),   # DOT
        5: (0, 240, 0),       # SQUARE
        6: (240, 160, 0),     # L
        7: (0, 0, 240),       # J
        8: (240, 0, 0),       # WAVE
        9: (240, 0, 160),     # REVERSE_WAVE
        10: (120, 200, 255),  # T
        11: (255, 120, 80),   # BIG_T
        12: (120, 255, 160),  # Y
        13: (200, 160, 255),  # DIAGONAL
        14: (255, 220, 140),  # DOUBLE
        15: (140, 140, 255),  # CORNER
    }
    return palette.get(abs(v), (200, 200, 200))


class Renderer:
    def __init__(self, cell_size: int = 60, margin: int = 20, preview_cell: int = 24) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self.preview_cell = preview_cell

    def window_size(self, grid_shape: Tuple[int, int]) -> Tuple[int, int]:
        h, w = grid_shape
        width = self.margin * 3 + w * self.cell_size + 4 * self.preview_cell
        height = self.margin * 3 + h * self.cell_size + 12
        return width, height

    def cell_at(self, pos: Tuple[int, int]) -> Tuple[int, int]:
        mx, my = pos
        return (mx - self.margin) // self.cell_size, (my - self.margin) // self.cell_size

    def _grid_surface(self, state: np.ndarray, flashing: Set[BlockCoordinate]) -> pygame.Surface:
        h, w = state.shape
        surf = pygame.Surface((w * self.cell_size, h * self.cell_size))
        surf.fill((30, 30, 36))
        for y in range(h):
            for x in range(w):
                if BlockCoordinate(x, y) in flashing:
                    color = (255, 255, 255)
                else:
                    color = _color_for_value(int(state[y, x]))
                rect = pygame.Rect(x * self.cell_size, y * self.cell_size, self.cell_size - 1, self.cell_size - 1)
                pygame.draw.rect(surf, color, rect)
        return surf

    def _draw_piece(self, screen: pygame.Surface, piece: Optional[GamePiece], x0: int, y0: int) -> None:
        if piece is None:
            return
        blocks = piece.shape()
        for py in range(3):
            for px in range(3):
                if blocks[py, px]:
                    rect = pygame.Rect(x0 + px * self.preview_cell, y0 + py * self.preview_cell,
                                       self.preview_cell - 1, self.preview_cell - 1)
                    pygame.draw.rect(screen, _color_for_value(piece.value), rect)

    def _draw_countdown(self, screen: pygame.Surface, game: TimedBlockPuzzleGame, width: int, y: int) -> None:
        delay = max(1, game.timer_delay_ms())
        fraction = min(1.0, game.time_remaining_ms() / delay)
        color = (70, 200, 120) if fraction > 0.5 else (240, 200, 0) if fraction > 0.25 else (230, 60, 60)
        pygame.draw.rect(screen, (50, 50, 60), pygame.Rect(self.margin, y, width, 12))
        pygame.draw.rect(screen, color, pygame.Rect(self.margin, y, int(width * fraction), 12))

    def draw(self, screen: pygame.Surface, game: TimedBlockPuzzleGame, font: pygame.font.Font,
             flashing: Iterable[BlockCoordinate] = ()) -> None:
        state = game.grid.clone_state()
        h, w = state.shape
        screen.fill((10, 10, 14))
        screen.blit(self._grid_surface(state, set(flashing)), (self.margin, self.margin))

        board_w = w * self.cell_size
        self._draw_countdown(screen, game, board_w, self.margin * 2 + h * self.cell_size)

        x_side = self.margin * 2 + board_w
        self._draw_piece(screen, game.current_piece, x_side, self.margin)
        self._draw_piece(screen, game.following_piece, x_side, self.margin + 4 * self.preview_cell)

        info_lines = [
            f"Score: {game.score}",
            f"Level: {game.level}",
            f"Lives: {max(game.lives, 0)}",
            f"x{game.multiplier}",
        ]
        y_text = self.margin + 8 * self.preview_cell
        for i, txt in enumerate(info_lines):
            screen.blit(font.render(txt, True, (230, 230, 230)), (x_side, y_text + i * 20))
        if game.is_over:
            over = font.render("Game Over - N: new game, ESC: quit", True, (255, 100, 100))
            screen.blit(over, (self.margin, 2))
        pygame.display.flip()
