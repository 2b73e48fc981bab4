import re

from models import Board, PlacedPiece
from render import color_from_string, render_board, template_color


def test_color_is_stable_hsl():
    c = template_color("Panel", 500, 300)
    assert c == template_color("Panel", 500, 300)
    assert re.fullmatch(r"hsl\(\d{1,3} 65% 60%\)", c)
    assert c == color_from_string("Panel-500-300")


def test_color_matches_known_hash_values():
    # h = c + ((h << 5) - h) over UTF-16 units; only the shift wraps to int32
    assert color_from_string("") == "hsl(0 65% 60%)"
    assert color_from_string("a") == "hsl(97 65% 60%)"
    assert color_from_string("ab") == f"hsl({(97 * 31 + 98) % 360} 65% 60%)"


def test_render_board_draws_pieces_and_legend():
    board = Board("b", "B", 400, 200)
    p = PlacedPiece("placed-1", "piece-1", "Top & Side", 100, 40, 10, 20, "hsl(10 65% 60%)")

    svg, legend = render_board(board, [p], selected_id="placed-1", scale=1.0)

    assert 'width="402" height="202"' in svg
    assert '<rect x="11" y="21" width="100" height="40"' in svg
    assert 'stroke-width="2" data-id="placed-1"' in svg
    assert "Top &amp; Side" in svg
    assert "hsl(10 65% 60%)" in legend


def test_render_board_without_board():
    assert render_board(None, []) == ("", "")
