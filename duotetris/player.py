"""A player: the origin of their field on screen and their score."""

from __future__ import annotations

from dataclasses import dataclass

from .shapes import Point

FRAME_HEIGHT = 18
FRAME_WIDTH = 12

_SIDE_EDGES = {
    0: Point(1, 1),
    1: Point(19, 1),
}


@dataclass
class Player:
    """One of the two players."""

    edge: Point = Point(1, 1)
    score: int = 0
    frame_height: int = FRAME_HEIGHT
    frame_width: int = FRAME_WIDTH

    @classmethod
    def for_side(cls, side: int) -> "Player":
        """Create the player whose field is on the left (0) or the right (1)."""
        try:
            edge = _SIDE_EDGES[side]
        except KeyError:
            raise ValueError(f"side must be 0 or 1, not {side!r}") from None
        return cls(edge=edge)

    def add_score(self, points: int) -> None:
        self.score += points