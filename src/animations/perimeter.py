"""
Perimeter traversal

Walks the border cells of a width x height rectangle clockwise, starting
at (0, 0), forever.
"""

from typing import Iterator, Tuple

from models.enums import Facing

Position = Tuple[int, int]


class PositionGenerator:
    """
    Infinite iterator over border positions

    Every next() returns the current cell and then applies one move of the
    facing state machine. Reaching the end of an edge costs one step that
    only turns (the corner is returned again), so a full lap takes
    2 * (width + height) steps.

    A new lap from the origin requires a new generator; there is no rewind.

    Example:
        positions = PositionGenerator(80, 24)
        next(positions)  # (0, 0)
        next(positions)  # (1, 0)
    """

    def __init__(self, width: int, height: int):
        if width < 1 or height < 1:
            raise ValueError(f"Rectangle must be at least 1x1, got {width}x{height}")

        self.width = width
        self.height = height
        self.x = 0
        self.y = 0
        self.facing = Facing.RIGHT

    @property
    def lap_length(self) -> int:
        """Number of steps after which the sequence repeats"""
        return 2 * (self.width + self.height)

    def __iter__(self) -> Iterator[Position]:
        return self

    def __next__(self) -> Position:
        position = (self.x, self.y)
        self._advance()
        return position

    def _advance(self) -> None:
        if self.facing is Facing.RIGHT:
            if self.x + 1 < self.width:
                self.x += 1
            else:
                self.facing = Facing.DOWN
        elif self.facing is Facing.DOWN:
            if self.y + 1 < self.height:
                self.y += 1
            else:
                self.facing = Facing.LEFT
        elif self.facing is Facing.LEFT:
            if self.x != 0:
                self.x -= 1
            else:
                self.facing = Facing.UP
        elif self.facing is Facing.UP:
            if self.y != 0:
                self.y -= 1
            else:
                self.facing = Facing.RIGHT
