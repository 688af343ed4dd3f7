"""Two-player falling-block puzzle game for the terminal."""

__version__ = "0.1.0"
__all__ = ["board", "shapes", "player", "console", "menus", "game"]