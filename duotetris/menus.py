"""The text menus shown before and during a game."""

from __future__ import annotations

import re

from .console import Console

_INSTRUCTIONS = (
    "                                    **********************************                                           \n"
    "In Tetris, players complete lines by moving different tetrominoes which descend onto the playing field.\n"
    "The full lines disappear and grant the player points (10 per line), and the player can proceed to fill the free spaces.\n"
    "The game ends when the uncleared lines reach the top of the playing field.The longer the player can delay this outcome, the higher their score will be.\n"
    "In multiplayer mode, players must last longer than their opponents. \n"
    "(Unless the opponents lose at the same time, then the player with the most points will win).\n"
    "                                    **********************************                                           \n"
    "                                              -GAME KEYS-                                          \n"
    "                                  Player 1                       Player 2                              \n"
    "   LEFT :                          a or A                         j or J                                   \n"
    "   RIGHT :                         d or D                         l or L                                 \n"
    "   ROTATE CLOCKWISE :              s or S                         k or K                               \n"
    "   ROTATE COUNTERCLOCKWISE :       w or W                         i or I                                             \n"
    "   DROP :                          x or X                         m or M                                      \n"
    "\n                                 ************************************                                           \n"
    "**Press any key to continue**\n"
)

_LEADING_INTEGER = re.compile(r"\s*([+-]?\d+)")


def initial_menu(console: Console) -> str:
    """Show the start menu and return the key the user pressed."""
    console.write("Hello ! welcome to Tetris \n")
    console.write("(1) Start a new game \n")
    console.write("(8) Present instructions and keys\n")
    console.write("(9) EXIT\n")
    return console.read_key()


def show_instructions(console: Console) -> None:
    """Show the rules and keys, then wait for any key."""
    console.clear()
    console.write(_INSTRUCTIONS)
    console.read_key()
    console.clear()


def paused_menu(console: Console) -> int:
    """Show the pause menu and return the number typed; 0 if none was."""
    console.write("*Game is paused* \n")
    console.write("(1) Start a new game \n")
    console.write("(2) Continue a paused game\n")
    console.write("(8) Present instructions and keys\n")
    console.write("(9) EXIT\n")
    match = _LEADING_INTEGER.match(console.read_line())
    choice = int(match.group(1)) if match else 0
    if choice == 2:
        console.clear()
    return choice


def ask_for_colors(console: Console) -> bool:
    """Ask whether to play in colour, repeating until Y or N is pressed."""
    while True:
        console.write(
            "Would you like to play with or without colors? "
            "Press Y for Colors on or N for colors off\n"
        )
        answer = console.read_key()
        console.clear()
        if answer in ("y", "Y"):
            return True
        if answer in ("n", "N"):
            return False
        console.write("wrong color input, try again\n")