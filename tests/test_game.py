import io

import pytest

from duotetris.board import Board
from duotetris.console import Color, Console
from duotetris.game import Game, Outcome, choose_shape_color
from duotetris.shapes import Point, Shape, ShapeKind


class FixedRandom:
    def __init__(self, values):
        self.values = list(values)
        self.index = 0

    def randrange(self, stop):
        value = self.values[self.index % len(self.values)]
        self.index += 1
        assert value < stop
        return value


class SilentKeys:
    """Never reports a key as waiting; reads from a queue when asked."""

    def __init__(self, keys):
        self.keys = list(keys)
        self.reads = 0

    def read_key(self):
        if not self.keys:
            raise EOFError
        self.reads += 1
        return self.keys.pop(0)

    def key_ready(self):
        return False


def make_game(keys=(), values=(1,)):
    output = io.StringIO()
    console = Console(output, keys)
    game = Game(console, FixedRandom(values), delay=0)
    return game, output


@pytest.mark.parametrize(
    "value, expected",
    [
        (0, Color.FOREGROUND_BLUE | Color.BACKGROUND_BLUE),
        (1, Color.FOREGROUND_RED | Color.BACKGROUND_RED),
        (2, Color.FOREGROUND_GREEN | Color.BACKGROUND_GREEN),
    ],
)
def test_choose_shape_color(value, expected):
    assert choose_shape_color(FixedRandom([value])) == expected


def test_players_sit_side_by_side():
    game, _ = make_game()
    assert game.player1.edge == Point(1, 1)
    assert game.player2.edge == Point(19, 1)


def test_generate_shape_for_first_player_uses_template():
    game, _ = make_game(values=[2])
    shape = game.generate_shape(game.player1.edge)
    assert shape.kind is ShapeKind.PLUS
    assert shape.coords == Shape(ShapeKind.PLUS).coords


def test_generate_shape_for_second_player_is_shifted():
    game, _ = make_game(values=[0])
    shape = game.generate_shape(game.player2.edge)
    template = Shape(ShapeKind.SQUARE).coords
    assert [(p.x - 18, p.y) for p in shape.coords] == [(p.x, p.y) for p in template]


def test_draw_shape_writes_hash_at_each_cell():
    game, output = make_game()
    shape = Shape(ShapeKind.RECTANGLE)
    game.draw_shape(shape)
    text = output.getvalue()
    assert text.count("#") == 4
    for point in shape.coords:
        assert f"\x1b[{point.y + 1};{point.x + 1}H#" in text


def test_erase_shape_blanks_each_cell():
    game, output = make_game()
    shape = Shape(ShapeKind.SQUARE)
    game.erase_shape(shape)
    text = output.getvalue()
    for point in shape.coords:
        assert f"\x1b[{point.y + 1};{point.x + 1}H " in text


def test_draw_frame_shows_settled_cells_and_scores():
    game, output = make_game()
    board1, board2 = Board(), Board()
    board1.place(Shape(ShapeKind.SQUARE), game.player1.edge)
    game.draw_frame(board1, board2, False)
    text = output.getvalue()
    assert text.count("&") == 4
    assert "Player 1 score : 0" in text
    assert "Player 2 score : 0" in text


def test_draw_frame_borders_are_symmetric():
    game, output = make_game()
    game.draw_frame(Board(), Board(), True)
    text = output.getvalue()
    assert text.count("-") == 4 * game.player1.frame_width
    assert text.count("|") == 4 * (game.player1.frame_height + 2)


def test_left_key_moves_first_brick_until_wall():
    game, _ = make_game()
    board1, board2 = Board(), Board()
    brick1 = Shape(ShapeKind.SQUARE)
    brick1.move_x(2)
    brick2 = game.generate_shape(game.player2.edge)
    before = [p.x for p in brick1.coords]
    game.handle_key("a", brick1, brick2, board1, board2)
    assert [p.x for p in brick1.coords] == [x - 1 for x in before]
    game.handle_key("A", brick1, brick2, board1, board2)
    game.handle_key("a", brick1, brick2, board1, board2)
    assert brick1.leftmost_point().x == game.player1.edge.x


def test_right_and_drop_keys_move_first_brick():
    game, _ = make_game()
    board1, board2 = Board(), Board()
    brick1 = Shape(ShapeKind.SQUARE)
    brick2 = game.generate_shape(game.player2.edge)
    game.handle_key("d", brick1, brick2, board1, board2)
    game.handle_key("x", brick1, brick2, board1, board2)
    expected = [Point(p.x + 1, p.y + 1) for p in Shape(ShapeKind.SQUARE).coords]
    assert brick1.coords == expected


def test_second_player_keys_move_second_brick():
    game, _ = make_game(values=[0])
    board1, board2 = Board(), Board()
    brick1 = Shape(ShapeKind.SQUARE)
    brick2 = game.generate_shape(game.player2.edge)
    start = list(brick2.coords)
    game.handle_key("l", brick1, brick2, board1, board2)
    game.handle_key("m", brick1, brick2, board1, board2)
    assert brick2.coords == [Point(p.x + 1, p.y + 1) for p in start]
    game.handle_key("j", brick1, brick2, board1, board2)
    assert brick2.coords == [Point(p.x, p.y + 1) for p in start]
    assert brick1.coords == Shape(ShapeKind.SQUARE).coords


def test_rotation_keys_rotate_relative_to_first_edge():
    game, _ = make_game(values=[1])
    board1, board2 = Board(), Board()
    brick1 = Shape(ShapeKind.RECTANGLE)
    brick2 = game.generate_shape(game.player2.edge)
    expected1 = Shape(ShapeKind.RECTANGLE)
    expected1.rotate_clockwise(game.player1.edge)
    expected2 = game.generate_shape(game.player2.edge)
    expected2.rotate_clockwise(game.player1.edge)
    game.handle_key("s", brick1, brick2, board1, board2)
    game.handle_key("k", brick1, brick2, board1, board2)
    assert brick1.coords == expected1.coords
    assert brick2.coords == expected2.coords


def test_counterclockwise_undoes_clockwise():
    game, _ = make_game()
    board1, board2 = Board(), Board()
    brick1 = Shape(ShapeKind.L)
    brick1.move_y(3)
    brick2 = game.generate_shape(game.player2.edge)
    before = sorted(brick1.coords)
    game.handle_key("s", brick1, brick2, board1, board2)
    game.handle_key("w", brick1, brick2, board1, board2)
    assert sorted(brick1.coords) == before


def test_out_of_bounds_brick_is_pushed_back():
    game, _ = make_game()
    board1, board2 = Board(), Board()
    brick1 = Shape(ShapeKind.SQUARE)
    brick1.move_x(-1)
    brick2 = game.generate_shape(game.player2.edge)
    game.handle_key("z", brick1, brick2, board1, board2)
    assert brick1.leftmost_point().x == game.player1.edge.x


def test_escape_then_exit_ends_play():
    game, output = make_game(keys=["\x1b", "9\n"])
    assert game.play(False) is Outcome.EXIT
    assert "*Game is paused*" in output.getvalue()


def test_escape_then_new_game_restarts():
    game, _ = make_game(keys=["\x1b", "1\n"])
    assert game.play(False) is Outcome.RESTART


def test_play_without_moves_ends_with_a_result():
    keys = SilentKeys(["q"])
    output = io.StringIO()
    game = Game(Console(output, keys), FixedRandom([1]), delay=0)
    assert game.play(False) is Outcome.FINISHED
    text = output.getvalue()
    assert "CONGRATULATIONS" in text or "THERE IS A TIE!!" in text
    assert "**Press any Key to go back to Main Menu**" in text
    assert keys.reads == 1


def test_main_menu_exit():
    game, output = make_game(keys=["9"])
    game.main_menu()
    assert "Hello ! welcome to Tetris" in output.getvalue()


def test_main_menu_instructions_then_exit():
    game, output = make_game(keys=["8", "x", "9"])
    game.main_menu()
    text = output.getvalue()
    assert "-GAME KEYS-" in text
    assert text.count("Hello ! welcome to Tetris") == 2


def test_main_menu_wrong_input_then_nine_exits():
    game, output = make_game(keys=["5", "9"])
    game.main_menu()
    text = output.getvalue()
    assert "Wrong input,please try again" in text
    assert text.count("Hello ! welcome to Tetris") == 1


def test_main_menu_wrong_input_discards_next_key():
    game, output = make_game(keys=["5", "3", "9"])
    game.main_menu()
    assert output.getvalue().count("Hello ! welcome to Tetris") == 2


def test_main_menu_game_exit_from_pause():
    game, output = make_game(keys=["1", "n", "\x1b", "9\n"])
    game.main_menu()
    text = output.getvalue()
    assert "Would you like to play with or without colors?" in text
    assert "*Game is paused*" in text


def test_main_menu_runs_out_of_input():
    game, _ = make_game(keys=["7"])
    with pytest.raises(EOFError):
        game.main_menu()