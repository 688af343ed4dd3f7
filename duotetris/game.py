"""The two-player game: drawing both fields, the falling pieces and the menus."""

from __future__ import annotations

import argparse
import random
import time
from enum import Enum
from typing import Protocol, Sequence

from .board import SECOND_BOARD_OFFSET, Board
from .console import Color, Console, open_terminal
from .menus import ask_for_colors, initial_menu, paused_menu, show_instructions
from .player import Player
from .shapes import Point, Shape

ESCAPE = "\x1b"

# A field origin at or beyond this column belongs to the second player.
_SECOND_PLAYER_COLUMN = 14
_SCORE_ROW = 21

_SHAPE_COLORS = (
    Color.FOREGROUND_BLUE | Color.BACKGROUND_BLUE,
    Color.FOREGROUND_RED | Color.BACKGROUND_RED,
    Color.FOREGROUND_GREEN | Color.BACKGROUND_GREEN,
)

_FRAME_COLOR_ON = (
    Color.BACKGROUND_BLUE
    | Color.BACKGROUND_GREEN
    | Color.BACKGROUND_RED
    | Color.BACKGROUND_INTENSITY
    | Color.FOREGROUND_BLUE
    | Color.FOREGROUND_GREEN
    | Color.FOREGROUND_RED
    | Color.FOREGROUND_INTENSITY
)


class _RandomSource(Protocol):
    def randrange(self, stop: int) -> int: ...


class Outcome(Enum):
    """How a round of play ended."""

    EXIT = 0
    RESTART = 1
    FINISHED = 2


def choose_shape_color(rng: _RandomSource) -> Color:
    """Pick the colour of a new piece: blue, red or green."""
    return _SHAPE_COLORS[rng.randrange(len(_SHAPE_COLORS))]


class Game:
    """Two players, each with a field, playing side by side on one console."""

    def __init__(
        self,
        console: Console | None = None,
        rng: _RandomSource | None = None,
        delay: float = 0.2,
    ) -> None:
        self.console = console if console is not None else Console()
        self.rng: _RandomSource = rng if rng is not None else random.Random()
        self.delay = delay
        self.player1 = Player.for_side(0)
        self.player2 = Player.for_side(1)

    def _sleep(self, factor: float = 1.0) -> None:
        if self.delay > 0:
            time.sleep(self.delay * factor)

    def generate_shape(self, point: Point) -> Shape:
        """Deal a new piece placed at the field whose origin is ``point``."""
        if point.x >= _SECOND_PLAYER_COLUMN:
            x_diff = point.x - self.player2.edge.x + SECOND_BOARD_OFFSET
        else:
            x_diff = point.x - self.player1.edge.x
        shape = Shape.random(self.rng)
        shape.move_x(x_diff)
        shape.move_y(point.y - 1)
        return shape

    def draw_shape(self, shape: Shape) -> None:
        """Draw every cell of ``shape`` as '#'."""
        for point in shape.coords:
            self.console.goto(point.x, point.y)
            self.console.write("#")

    def erase_shape(self, shape: Shape) -> None:
        """Blank out what draw_shape drew."""
        for point in shape.coords:
            self.console.set_color(Color.WHITE)
            self.console.goto(point.x, point.y)
            self.console.write(" ")

    def _draw_border(self, player: Player, frame_color: Color) -> None:
        console = self.console
        left, top = player.edge.x, player.edge.y
        right = left + player.frame_width
        bottom = top + player.frame_height
        for column in range(left, right):
            console.set_color(frame_color)
            console.goto(column, top - 1)
            console.write("-")
            console.goto(column, bottom)
            console.write("-")
        for row in range(top - 1, bottom + 1):
            console.set_color(frame_color)
            console.goto(left - 1, row)
            console.write("|")
            console.set_color(frame_color)
            console.goto(right, row)
            console.write("|")

    def _draw_cells(self, board: Board, last_row: int, width: int, offset: int) -> None:
        for row, cells in enumerate(board.cells[: last_row + 1]):
            for column in range(1, width + 1):
                if cells[column] == 1:
                    self.console.goto(column + offset, row)
                    self.console.write("&")

    def draw_frame(self, board1: Board, board2: Board, color: bool) -> None:
        """Draw both fields' borders, their settled cells and the scores."""
        frame_color = _FRAME_COLOR_ON if color else Color.WHITE
        self._draw_border(self.player1, frame_color)
        self._draw_border(self.player2, frame_color)
        self._draw_cells(board1, self.player1.frame_height, self.player1.frame_width, 0)
        self._draw_cells(
            board2,
            self.player2.frame_height + 1,
            self.player2.frame_width,
            SECOND_BOARD_OFFSET,
        )
        console = self.console
        console.set_color(Color.FOREGROUND_BLUE)
        console.goto(1, _SCORE_ROW)
        console.write(f"Player 1 score : {self.player1.score}")
        console.goto(23, _SCORE_ROW)
        console.write(f"Player 2 score : {self.player2.score}")

    def handle_key(
        self, key: str, brick1: Shape, brick2: Shape, board1: Board, board2: Board
    ) -> None:
        """Apply a movement key to the matching player's piece."""
        # Lower-case rotation keys rotate without the free-space check.
        rotation_edge = self.player1.edge
        if key in "aA" and brick1.is_free_to_left(board1):
            brick1.move_x(-1)
        elif key in "dD" and brick1.is_free_to_right(board1):
            brick1.move_x(1)
        elif key in "xX" and brick1.is_free_to_descend(board1):
            brick1.move_y(1)
        elif key == "s" or (key == "S" and self._free_to_rotate(brick1, board1)):
            brick1.rotate_clockwise(rotation_edge)
        elif key == "w" or (key == "W" and self._free_to_rotate(brick1, board1)):
            brick1.rotate_counterclockwise(rotation_edge)
        elif key in "jJ" and brick2.is_free_to_left(board2):
            brick2.move_x(-1)
        elif key in "lL" and brick2.is_free_to_right(board2):
            brick2.move_x(1)
        elif key in "mM" and brick2.is_free_to_descend(board2):
            brick2.move_y(1)
        elif key == "k" or (key == "K" and self._free_to_rotate(brick2, board2)):
            brick2.rotate_clockwise(rotation_edge)
        elif key == "i" or (key == "I" and self._free_to_rotate(brick2, board2)):
            brick2.rotate_counterclockwise(rotation_edge)
        self._keep_in_bounds(brick1, brick2)

    @staticmethod
    def _free_to_rotate(brick: Shape, board: Board) -> bool:
        return (
            brick.is_free_to_left(board)
            and brick.is_free_to_right(board)
            and brick.is_free_to_descend(board)
        )

    def _keep_in_bounds(self, brick1: Shape, brick2: Shape) -> None:
        p1, p2 = self.player1, self.player2
        if brick1.leftmost_point().x < p1.edge.x:
            brick1.move_x(1)
        if brick1.rightmost_point().x >= p1.edge.x + p1.frame_width:
            brick1.move_x(-1)
        if brick2.leftmost_point().x < p2.edge.x:
            brick2.move_x(1)
        if brick2.rightmost_point().x > p2.edge.x + p2.frame_width:
            brick2.move_x(-1)

    def _can_fall(self, brick: Shape, player: Player, board: Board) -> bool:
        return (
            brick.lowest_point().y + 1 < player.frame_height + 1
            and brick.is_free_to_descend(board)
        )

    def _announce(self, lines: Sequence[str]) -> Outcome:
        console = self.console
        self._sleep(2.5)
        console.clear()
        console.flush()
        for line in lines:
            console.write(line + "\n")
        console.write("\n**Press any Key to go back to Main Menu**\n")
        console.read_key()
        console.clear()
        return Outcome.FINISHED

    def play(self, color: bool) -> Outcome:
        """Play one round until someone loses or the pause menu ends it."""
        console = self.console
        board1, board2 = Board(), Board()
        color1 = color2 = Color.WHITE
        brick1 = brick2 = None
        landed = 0
        cleared1 = cleared2 = 0

        while True:
            if cleared1 or cleared2:
                console.clear()
            self.draw_frame(board1, board2, color)
            if landed in (0, 1) and color:
                color1 = choose_shape_color(self.rng)
            if landed in (0, 2) and color:
                color2 = choose_shape_color(self.rng)
            if landed in (0, 1):
                brick1 = self.generate_shape(self.player1.edge)
            if landed in (0, 2):
                brick2 = self.generate_shape(self.player2.edge)
            assert brick1 is not None and brick2 is not None

            while True:
                console.set_color(color1)
                self.draw_shape(brick1)
                console.set_color(color2)
                self.draw_shape(brick2)
                self._sleep()

                self.erase_shape(brick1)
                self.erase_shape(brick2)
                self._sleep()
                console.hide_cursor()

                if self._can_fall(brick1, self.player1, board1):
                    brick1.move_y(1)
                else:
                    board1.place(brick1, self.player1.edge)
                    landed = 1
                    break

                if self._can_fall(brick2, self.player2, board2):
                    brick2.move_y(1)
                else:
                    board2.place(brick2, self.player2.edge)
                    landed = 2
                    break

                if not console.key_ready():
                    continue
                key = console.read_key()
                if key != ESCAPE:
                    self.handle_key(key, brick1, brick2, board1, board2)
                    continue
                console.goto(0, self.player1.frame_height + 4)
                choice = paused_menu(console)
                if choice == 1:
                    console.clear()
                    console.goto(1, 1)
                    return Outcome.RESTART
                if choice == 2:
                    console.clear()
                    self.draw_frame(board1, board2, color)
                elif choice == 8:
                    show_instructions(console)
                    console.clear()
                    self.draw_frame(board1, board2, color)
                elif choice == 9:
                    return Outcome.EXIT
                self._keep_in_bounds(brick1, brick2)

            cleared1 = board1.clear_full_rows()
            cleared2 = board2.clear_full_rows()
            self.player1.add_score(cleared1 * 10)
            self.player2.add_score(cleared2 * 10)

            lost1, lost2 = board1.is_topped_out(), board2.is_topped_out()
            if lost1 and lost2:
                score1, score2 = self.player1.score, self.player2.score
                verdict = (
                    "PLAYER 1 WINS CONGRATULATIONS!!" if score1 > score2 else "THERE IS A TIE!!"
                )
                return self._announce(
                    [
                        "BOTH LOST AT THE SAME TIME!!",
                        f"Player 1 score : {score1}",
                        f"Player 2 score : {score2}",
                        verdict,
                    ]
                )
            if lost1:
                return self._announce(["PLAYER 2 WINS CONGRATULATIONS!!"])
            if lost2:
                return self._announce(["PLAYER 1 WINS CONGRATULATIONS!!"])

    def main_menu(self) -> None:
        """Offer the start menu until the user chooses to exit."""
        console = self.console
        while True:
            choice = initial_menu(console)
            if choice == "1":
                console.clear()
                colors = ask_for_colors(console)
                outcome = self.play(colors)
                while outcome is Outcome.RESTART:
                    outcome = self.play(colors)
                if outcome is Outcome.EXIT:
                    return
            elif choice == "8":
                show_instructions(console)
                console.clear()
            elif choice != "9":
                console.write("Wrong input,please try again\n")
                self._sleep(2.5)
                choice = console.read_key()
                console.clear()
            if choice == "9":
                console.write("\n\n")
                return


def main(argv: Sequence[str] | None = None) -> int:
    """Run the game on the terminal."""
    parser = argparse.ArgumentParser(prog="duotetris", description="Two-player console Tetris.")
    parser.parse_args(argv)
    with open_terminal() as console:
        try:
            Game(console).main_menu()
        except (EOFError, KeyboardInterrupt):
            console.write("\n")
    return 0