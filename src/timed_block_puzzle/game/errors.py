from __future__ import annotations


class GameError(Exception):
    """Base class for engine errors."""


class OutOfBounds(GameError, IndexError):
    def __init__(self, x: int, y: int, width: int, height: int) -> None:
        super().__init__(f"({x}, {y}) is outside a {width}x{height} grid")
        self.x = x
        self.y = y


class InvalidIndex(GameError, IndexError):
    def __init__(self, index: int, size: int) -> None:
        super().__init__(f"piece index {index} is outside [0, {size})")
        self.index = index
