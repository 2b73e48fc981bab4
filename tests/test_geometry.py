from types import SimpleNamespace

import pytest

from geometry import first_collision, overlaps, snap, within_bounds
from models import Board, PlacedPiece


def _r(x, y, w, h):
    return SimpleNamespace(x=x, y=y, width=w, height=h)


def _placed(pid, x, y, w=10, h=10):
    return PlacedPiece(id=pid, template_id="t", name="p", width=w, height=h, x=x, y=y, color="c")


@pytest.mark.parametrize(
    "a, b, expected",
    [
        (_r(0, 0, 10, 10), _r(5, 5, 10, 10), True),
        (_r(0, 0, 10, 10), _r(0, 0, 10, 10), True),
        (_r(0, 0, 10, 10), _r(2, 2, 3, 3), True),
        (_r(0, 0, 10, 10), _r(10, 0, 10, 10), False),   # shared edge
        (_r(0, 0, 10, 10), _r(0, 10, 10, 10), False),
        (_r(0, 0, 10, 10), _r(10, 10, 5, 5), False),    # shared corner
        (_r(0, 0, 10, 10), _r(30, 30, 5, 5), False),
        (_r(0, 0, 10, 2), _r(5, 20, 2, 10), False),     # overlaps on x only
    ],
)
def test_overlaps_is_strict_and_symmetric(a, b, expected):
    assert overlaps(a, b) is expected
    assert overlaps(b, a) is expected


def test_overlaps_uses_y_extent_on_y_axis():
    # a wide-and-short piece must not be tested against its x origin on the y axis
    a = _r(100, 0, 50, 10)
    b = _r(0, 20, 200, 10)
    assert overlaps(a, b) is False


@pytest.mark.parametrize(
    "raw, expected",
    [(0, 0), (12.9, 12), ("7.5", 7), (-3.2, 0), (-0.1, 0), (99, 99), (None, 0), ("abc", 0)],
)
def test_snap_floors_and_clamps(raw, expected):
    assert snap(raw) == expected


def test_within_bounds_edges():
    board = Board("b", "B", 100, 100)
    assert within_bounds(90, 90, 10, 10, board)
    assert within_bounds(0, 0, 100, 100, board)
    assert not within_bounds(95, 95, 10, 10, board)
    assert not within_bounds(-1, 0, 10, 10, board)
    assert not within_bounds(0, 0, 101, 1, board)


def test_first_collision_skips_ignored_piece():
    placed = [_placed("a", 0, 0), _placed("b", 20, 0)]
    candidate = _r(5, 5, 10, 10)
    assert first_collision(candidate, placed).id == "a"
    assert first_collision(candidate, placed, ignore_id="a") is None
    assert first_collision(_r(10, 0, 10, 10), placed) is None
