"""The playing field of one player: a walled grid of cells."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from .shapes import Shape

# Horizontal screen offset of the second player's field relative to its board.
SECOND_BOARD_OFFSET = 18

EMPTY = 0
FILLED = 1
WALL = -1


class _HasX(Protocol):
    x: int


class Board:
    """A grid of HEIGHT x WIDTH playable cells surrounded by walls.

    Columns 0 and ``columns - 1`` and the bottom row are walls; the top
    row has no wall.
    """

    HEIGHT = 18
    WIDTH = 12

    def __init__(self) -> None:
        rows, columns = self.rows, self.columns
        self.cells: list[list[int]] = [
            [
                WALL if column in (0, columns - 1) or row == rows - 1 else EMPTY
                for column in range(columns)
            ]
            for row in range(rows)
        ]

    @property
    def rows(self) -> int:
        """Number of rows including the bottom wall."""
        return self.HEIGHT + 2

    @property
    def columns(self) -> int:
        """Number of columns including both side walls."""
        return self.WIDTH + 2

    def delete_line(self, row: int) -> None:
        """Clear ``row`` and shift every row above it one step down."""
        self.cells[row][1:-1] = [EMPTY] * (self.columns - 2)
        for current in range(row, 0, -1):
            self.cells[current][1:-1] = self.cells[current - 1][1:-1]

    def clear_full_rows(self) -> int:
        """Delete every completely filled row and return how many were deleted."""
        removed = 0
        for row in range(self.rows - 1):
            if EMPTY not in self.cells[row][1:-1]:
                self.delete_line(row)
                removed += 1
        return removed

    def place(self, shape: "Shape", edge: _HasX) -> None:
        """Mark the cells occupied by ``shape`` as filled.

        ``edge`` is the owning player's field origin; a field placed at the
        second player's offset has its screen columns shifted back.
        """
        for point in shape.coords:
            x = point.x
            if edge.x >= SECOND_BOARD_OFFSET:
                x -= SECOND_BOARD_OFFSET
            self.cells[point.y][x] = FILLED

    def is_topped_out(self) -> bool:
        """Return True once a filled cell has reached the first playable row."""
        return FILLED in self.cells[1][1:]