"""Tetromino shapes: their layouts, movement, rotation and collision checks."""

from __future__ import annotations

import random as _random
from enum import Enum
from typing import TYPE_CHECKING, NamedTuple, Protocol

from .board import SECOND_BOARD_OFFSET

if TYPE_CHECKING:
    from .board import Board


class Point(NamedTuple):
    """A screen coordinate."""

    x: int
    y: int


class _HasXY(Protocol):
    x: int
    y: int


class _RandomSource(Protocol):
    def randrange(self, stop: int) -> int: ...


MATRIX_SIZE = 4


class ShapeKind(Enum):
    """The seven shapes the game deals."""

    SQUARE = 0
    RECTANGLE = 1
    PLUS = 2
    S = 3
    L = 4
    REVERSE_L = 5
    REVERSE_S = 6


_TEMPLATES: dict[ShapeKind, tuple[tuple[int, int], ...]] = {
    ShapeKind.SQUARE: ((1, 1), (2, 1), (1, 2), (2, 2)),
    ShapeKind.RECTANGLE: ((1, 1), (2, 1), (3, 1), (4, 1)),
    ShapeKind.PLUS: ((1, 1), (1, 2), (2, 2), (1, 3)),
    ShapeKind.S: ((2, 1), (3, 1), (1, 2), (2, 2)),
    ShapeKind.L: ((1, 1), (1, 2), (2, 2), (3, 2)),
    ShapeKind.REVERSE_L: ((3, 1), (1, 2), (2, 2), (3, 2)),
    ShapeKind.REVERSE_S: ((1, 1), (2, 1), (2, 2), (3, 2)),
}

# Occupied (row, column) cells of each shape's 4x4 rotation matrix.
_MATRIX_CELLS: dict[ShapeKind, tuple[tuple[int, int], ...]] = {
    ShapeKind.SQUARE: ((0, 0), (0, 1), (1, 0), (1, 1)),
    ShapeKind.RECTANGLE: ((0, 0), (0, 1), (0, 2), (0, 3)),
    ShapeKind.PLUS: ((0, 0), (1, 0), (1, 1), (2, 0)),
    ShapeKind.S: ((0, 1), (0, 2), (1, 0), (1, 1)),
    ShapeKind.L: ((0, 0), (1, 0), (1, 1), (1, 2)),
    ShapeKind.REVERSE_L: ((0, 2), (1, 0), (1, 1), (1, 2)),
    ShapeKind.REVERSE_S: ((0, 0), (0, 1), (1, 1), (1, 2)),
}


def _board_column(x: int) -> int:
    return x - SECOND_BOARD_OFFSET if x >= SECOND_BOARD_OFFSET else x


class Shape:
    """A falling piece made of four cells."""

    def __init__(self, kind: ShapeKind | int) -> None:
        self.kind = ShapeKind(kind)
        self.coords: list[Point] = [Point(x, y) for x, y in _TEMPLATES[self.kind]]
        self.matrix: list[list[int]] = [[0] * MATRIX_SIZE for _ in range(MATRIX_SIZE)]
        for row, column in _MATRIX_CELLS[self.kind]:
            self.matrix[row][column] = 1
        self.width = self.coords[3].x - self.coords[0].x + 1
        self.height = self.coords[3].y - self.coords[0].y + 1

    def __repr__(self) -> str:
        return f"Shape({self.kind.name}, coords={self.coords})"

    @classmethod
    def random(cls, rng: _RandomSource | None = None) -> "Shape":
        """Deal a shape of a randomly chosen kind."""
        source = rng if rng is not None else _random
        return cls(ShapeKind(source.randrange(len(ShapeKind))))

    def move_x(self, dx: int) -> None:
        self.coords = [Point(p.x + dx, p.y) for p in self.coords]

    def move_y(self, dy: int) -> None:
        self.coords = [Point(p.x, p.y + dy) for p in self.coords]

    def lowest_point(self) -> Point:
        return self.coords[3]

    def highest_point(self) -> Point:
        return self.coords[0]

    def leftmost_point(self) -> Point:
        """The cell with the smallest x; the last such cell on ties."""
        return min(reversed(self.coords), key=lambda p: p.x)

    def rightmost_point(self) -> Point:
        """The cell with the largest x; the last such cell on ties."""
        return max(reversed(self.coords), key=lambda p: p.x)

    def rotate_clockwise(self, edge: _HasXY) -> None:
        """Rotate the shape a quarter turn clockwise."""
        self.matrix = [list(row)[::-1] for row in zip(*self.matrix)]
        self._relocate(edge)

    def rotate_counterclockwise(self, edge: _HasXY) -> None:
        """Rotate the shape a quarter turn counterclockwise."""
        self.matrix = [list(column) for column in zip(*(row[::-1] for row in self.matrix))]
        self._relocate(edge)

    def _relocate(self, edge: _HasXY) -> None:
        x_diff = self.coords[0].x - edge.x
        y_diff = self.coords[0].y - edge.y
        occupied = [
            (row, column)
            for row, cells in enumerate(self.matrix)
            for column, value in enumerate(cells)
            if value == 1
        ][:4]
        self.coords = [Point(column + x_diff, row + 1 + y_diff) for row, column in occupied]
        self.width, self.height = self.height, self.width

    def is_free_to_left(self, board: "Board") -> bool:
        """Whether the shape can move one cell to the left."""
        leftmost = self.leftmost_point()
        if leftmost.x < SECOND_BOARD_OFFSET:
            return all(
                board.cells[p.y][p.x - 1] == 0 for p in self.coords if p.x == leftmost.x
            )
        column = _board_column(leftmost.x) - 1
        return board.cells[leftmost.y][column] == 0

    def is_free_to_right(self, board: "Board") -> bool:
        """Whether the shape can move one cell to the right."""
        rightmost = self.rightmost_point()
        if rightmost.x < SECOND_BOARD_OFFSET:
            return all(
                board.cells[p.y][p.x + 1] == 0 for p in self.coords if p.x == rightmost.x
            )
        column = _board_column(rightmost.x) + 1
        return board.cells[rightmost.y][column] == 0

    def is_free_to_descend(self, board: "Board") -> bool:
        """Whether the shape can fall by one row."""
        lowest = self.lowest_point()
        if lowest.x < SECOND_BOARD_OFFSET:
            return all(board.cells[p.y + 1][p.x] == 0 for p in self.coords)
        start = _board_column(self.leftmost_point().x)
        stop = _board_column(self.rightmost_point().x)
        below = board.cells[lowest.y + 1]
        return all(below[column] == 0 for column in range(start, stop + 1))