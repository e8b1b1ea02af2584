from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterator

import numpy as np

from .errors import OutOfBounds

if TYPE_CHECKING:
    from .pieces import GamePiece


@dataclass(frozen=True)
class BlockCoordinate:
    x: int
    y: int


class GameGrid:
    """Fixed-size board of cell values.

    0 marks an empty cell; positive values are the colour index of the piece
    that filled it. Storage is row-major, so cell (x, y) lives at grid[y, x].
    """

    def __init__(self, width: int, height: int) -> None:
        self.width = int(width)
        self.height = int(height)
        self.grid = np.zeros((self.height, self.width), dtype=np.int32)

    @property
    def cols(self) -> int:
        return self.width

    @property
    def rows(self) -> int:
        return self.height

    def reset(self) -> None:
        self.grid.fill(0)

    def is_inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def _check(self, x: int, y: int) -> None:
        if not self.is_inside(x, y):
            raise OutOfBounds(x, y, self.width, self.height)

    def get(self, x: int, y: int) -> int:
        self._check(x, y)
        return int(self.grid[y, x])

    def set(self, x: int, y: int, value: int) -> None:
        self._check(x, y)
        self.grid[y, x] = value

    def can_play_piece(self, piece: "GamePiece", x: int, y: int) -> bool:
        """True only if every block of `piece` centred on (x, y) lands on an empty cell."""
        for cx, cy in piece.cells_at(x, y):
            if not self.is_inside(cx, cy):
                return False
            if self.grid[cy, cx] != 0:
                return False
        return True

    def play_piece(self, piece: "GamePiece", x: int, y: int) -> None:
        """Write `piece` onto the grid centred on (x, y).

        Assumes can_play_piece() already returned True; nothing is checked
        here and occupied cells are overwritten.
        """
        value = piece.value
        for cx, cy in piece.cells_at(x, y):
            self.grid[cy, cx] = value

    def full_columns(self) -> Iterator[int]:
        for x in np.where(np.all(self.grid != 0, axis=0))[0]:
            yield int(x)

    def full_rows(self) -> Iterator[int]:
        for y in np.where(np.all(self.grid != 0, axis=1))[0]:
            yield int(y)

    def clear(self, coordinates) -> None:
        for c in coordinates:
            self.set(c.x, c.y, 0)

    def filled_ratio(self) -> float:
        return float(np.count_nonzero(self.grid)) / float(self.width * self.height)

    def clone_state(self) -> np.ndarray:
        return self.grid.copy()
