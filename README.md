# duotetris

A two-player falling-block puzzle game for the terminal. Two players share one
keyboard and play on two boards shown side by side. Each board is 12 columns
wide and 18 rows high. The game draws with ANSI escape sequences and needs no
libraries outside the standard library.

## Installing

```
pip install .
```

## Playing

```
duotetris
```

The main menu waits for a single key:

- `1`: start a new game. You are then asked to press `Y` to play with colours
  or `N` to play without them. Any other key repeats the question.
- `8`: show the instructions and the keys, then wait for any key.
- `9`: exit.

### Keys

| Action                   | Player 1 | Player 2 |
|--------------------------|----------|----------|
| Left                     | `a`      | `j`      |
| Right                    | `d`      | `l`      |
| Rotate clockwise         | `s`      | `k`      |
| Rotate counterclockwise  | `w`      | `i`      |
| Drop one row             | `x`      | `m`      |

Upper-case letters work as well. A move is made only when the piece has room
for it. Upper-case rotation keys also check for room first, while lower-case
ones rotate at once. After every key, a piece that has gone past the side of
its board is moved back inside.

`Esc` pauses the game. The pause menu reads a number followed by Enter:

- `1`: start a new game.
- `2`: continue.
- `8`: show the instructions, then continue.
- `9`: exit.

Any other number continues the game.

### Scoring

Each line a player fills is cleared and scores 10 points. A player loses when
their pieces reach the top row of their board, and the other player wins. If
both players lose at the same time, both scores are shown. Player 1 is declared
the winner if their score is higher. Otherwise the round is announced as a tie.

When standard input is not a terminal, keys are read from it one character at
a time. The game stops when the input runs out.

## Using the pieces in code

The game logic does not depend on the terminal:

```python
import random
from duotetris.board import Board
from duotetris.shapes import Shape, ShapeKind
from duotetris.player import Player

board = Board()
player = Player.for_side(0)
piece = Shape(ShapeKind.SQUARE)
while piece.is_free_to_descend(board):
    piece.move_y(1)
board.place(piece, player.edge)
player.add_score(board.clear_full_rows() * 10)

another = Shape.random(random.Random(7))
```

The modules are:

- `duotetris.board`: `Board`, a walled grid. Its methods are `place`,
  `delete_line`, `clear_full_rows` and `is_topped_out`.
- `duotetris.shapes`: `ShapeKind` (the seven pieces) and `Shape`. `Shape`
  handles movement (`move_x`, `move_y`), rotation (`rotate_clockwise`,
  `rotate_counterclockwise`) and collision checks (`is_free_to_left`,
  `is_free_to_right`, `is_free_to_descend`).
- `duotetris.player`: `Player`, which holds a field origin (`edge`) and a
  score. `Player.for_side` takes side 0 or 1 and raises `ValueError` for any
  other value.
- `duotetris.console`: `Console` and `Color`. `Console` writes positioned,
  coloured text to any text stream and reads keys from a key source or from an
  iterable of strings. `open_terminal()` is a context manager that puts the
  real terminal in unbuffered key mode and restores it afterwards.
- `duotetris.menus`: `initial_menu`, `show_instructions`, `paused_menu` and
  `ask_for_colors`.
- `duotetris.game`: `Game`, with `play` and `main_menu`. Also `Outcome`,
  `choose_shape_color`, and `main`, which is what the `duotetris` command runs.

A `Game` can be driven without a terminal by giving it a `Console` over an
in-memory stream, a list of keys, a seeded `random.Random` and `delay=0`.

## Running the tests

```
pip install .[test]
pytest
```