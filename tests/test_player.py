import pytest

from duotetris.player import Player
from duotetris.shapes import Point


def test_default_player():
    player = Player()
    assert player.edge == Point(1, 1)
    assert player.score == 0
    assert (player.frame_height, player.frame_width) == (18, 12)


@pytest.mark.parametrize("side, edge", [(0, Point(1, 1)), (1, Point(19, 1))])
def test_for_side_sets_edge(side, edge):
    player = Player.for_side(side)
    assert player.edge == edge
    assert player.score == 0


@pytest.mark.parametrize("side", [2, -1])
def test_for_side_rejects_unknown_side(side):
    with pytest.raises(ValueError):
        Player.for_side(side)


def test_add_score_accumulates():
    player = Player.for_side(1)
    player.add_score(10)
    player.add_score(20)
    assert player.score == 30


def test_add_zero_keeps_score():
    player = Player()
    player.add_score(0)
    assert player.score == 0