import io

import pytest

from duotetris.console import Console
from duotetris.menus import ask_for_colors, initial_menu, paused_menu, show_instructions


def make_console(keys):
    output = io.StringIO()
    return Console(output, keys), output


def clear_sequence():
    console, output = make_console("")
    console.clear()
    return output.getvalue()


def test_initial_menu_returns_pressed_key():
    console, output = make_console("8")
    assert initial_menu(console) == "8"
    assert "(1) Start a new game " in output.getvalue()
    assert "(9) EXIT" in output.getvalue()


def test_initial_menu_reads_one_key_only():
    console, _ = make_console("19")
    assert initial_menu(console) == "1"
    assert console.read_key() == "9"


def test_show_instructions_waits_for_one_key():
    console, output = make_console("zq")
    show_instructions(console)
    text = output.getvalue()
    assert "-GAME KEYS-" in text
    assert "**Press any key to continue**" in text
    assert text.endswith(clear_sequence())
    assert console.read_key() == "q"


def test_show_instructions_needs_a_key():
    console, _ = make_console("")
    with pytest.raises(EOFError):
        show_instructions(console)


@pytest.mark.parametrize("typed, expected", [("1\n", 1), ("8\n", 8), ("9\n", 9)])
def test_paused_menu_returns_choice(typed, expected):
    console, output = make_console(typed)
    assert paused_menu(console) == expected
    assert "*Game is paused* " in output.getvalue()
    assert clear_sequence() not in output.getvalue()


def test_paused_menu_continue_clears_screen():
    console, output = make_console("2\n")
    assert paused_menu(console) == 2
    assert output.getvalue().endswith(clear_sequence())


def test_paused_menu_non_number_gives_zero():
    console, _ = make_console("abc\n")
    assert paused_menu(console) == 0


def test_paused_menu_reads_leading_number():
    console, _ = make_console("  9x\n")
    assert paused_menu(console) == 9


@pytest.mark.parametrize("key, expected", [("y", True), ("Y", True), ("n", False), ("N", False)])
def test_ask_for_colors(key, expected):
    console, output = make_console(key)
    assert ask_for_colors(console) is expected
    assert "wrong color input" not in output.getvalue()


def test_ask_for_colors_repeats_on_wrong_input():
    console, output = make_console("q7n")
    assert ask_for_colors(console) is False
    assert output.getvalue().count("wrong color input, try again") == 2


def test_ask_for_colors_without_answer_raises():
    console, _ = make_console("x")
    with pytest.raises(EOFError):
        ask_for_colors(console)