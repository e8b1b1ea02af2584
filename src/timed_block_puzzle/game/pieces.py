from __future__ import annotations

from enum import IntEnum
from typing import List, Tuple

import numpy as np

from .errors import InvalidIndex


class PieceType(IntEnum):
    LINE = 0
    C = 1
    PLUS = 2
    DOT = 3
    SQUARE = 4
    L = 5
    J = 6
    WAVE = 7
    REVERSE_WAVE = 8
    T = 9
    BIG_T = 10
    Y = 11
    DIAGONAL = 12
    DOUBLE = 13
    CORNER = 14


PIECE_COUNT = len(PieceType)

Shape = np.ndarray


def _rot90(shape: Shape, k: int) -> Shape:
    k = k % 4
    if k == 0:
        return shape.copy()
    return np.rot90(shape, k, axes=(1, 0)).copy()  # rotate clockwise when k>0


# Rows are y, columns are x; the centre cell (1, 1) is the anchor.
BASE_SHAPES = {
    PieceType.LINE: np.array([[0, 0, 0], [1, 1, 1], [0, 0, 0]], dtype=np.int8),
    PieceType.C: np.array([[0, 0, 0], [1, 1, 1], [1, 0, 1]], dtype=np.int8),
    PieceType.PLUS: np.array([[0, 1, 0], [1, 1, 1], [0, 1, 0]], dtype=np.int8),
    PieceType.DOT: np.array([[0, 0, 0], [0, 1, 0], [0, 0, 0]], dtype=np.int8),
    PieceType.SQUARE: np.array([[1, 1, 0], [1, 1, 0], [0, 0, 0]], dtype=np.int8),
    PieceType.L: np.array([[0, 0, 0], [1, 1, 1], [0, 0, 1]], dtype=np.int8),
    PieceType.J: np.array([[0, 0, 1], [1, 1, 1], [0, 0, 0]], dtype=np.int8),
    PieceType.WAVE: np.array([[0, 1, 1], [1, 1, 0], [0, 0, 0]], dtype=np.int8),
    PieceType.REVERSE_WAVE: np.array([[1, 1, 0], [0, 1, 1], [0, 0, 0]], dtype=np.int8),
    PieceType.T: np.array([[1, 0, 0], [1, 1, 0], [1, 0, 0]], dtype=np.int8),
    PieceType.BIG_T: np.array([[1, 1, 1], [0, 1, 0], [0, 1, 0]], dtype=np.int8),
    PieceType.Y: np.array([[1, 0, 1], [0, 1, 0], [0, 1, 0]], dtype=np.int8),
    PieceType.DIAGONAL: np.array([[1, 0, 0], [0, 1, 0], [0, 0, 1]], dtype=np.int8),
    PieceType.DOUBLE: np.array([[0, 1, 0], [0, 1, 0], [0, 0, 0]], dtype=np.int8),
    PieceType.CORNER: np.array([[1, 1, 0], [1, 0, 0], [0, 0, 0]], dtype=np.int8),
}


class GamePiece:
    """A catalog shape plus its current rotation.

    Rotating changes the footprint in place; the kind and colour never change.
    """

    def __init__(self, kind: PieceType, rotation: int = 0) -> None:
        self.kind = PieceType(kind)
        self.rotation = rotation % 4
        self.blocks = _rot90(BASE_SHAPES[self.kind], self.rotation)

    @property
    def value(self) -> int:
        return int(self.kind) + 1

    @property
    def name(self) -> str:
        return self.kind.name

    def rotate(self, quarter_turns: int = 1) -> None:
        self.rotation = (self.rotation + quarter_turns) % 4
        self.blocks = _rot90(BASE_SHAPES[self.kind], self.rotation)

    def shape(self) -> Shape:
        return self.blocks.copy()

    def block_count(self) -> int:
        return int(np.count_nonzero(self.blocks))

    def cells_at(self, x: int, y: int) -> List[Tuple[int, int]]:
        cells: List[Tuple[int, int]] = []
        for dy in range(3):
            for dx in range(3):
                if self.blocks[dy, dx]:
                    cells.append((x - 1 + dx, y - 1 + dy))
        return cells

    def __repr__(self) -> str:
        return f"GamePiece({self.kind.name}, rotation={self.rotation})"


def create_piece(index: int) -> GamePiece:
    if not 0 <= index < PIECE_COUNT:
        raise InvalidIndex(index, PIECE_COUNT)
    return GamePiece(PieceType(index))
