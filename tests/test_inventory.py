from inventory import add_or_merge, adjust_quantity, bulk_add_or_merge, find_template, total_remaining
from models import PieceRequest
from render import template_color


def test_add_creates_template_with_derived_color():
    out = add_or_merge([], PieceRequest("Shelf", 500, 300, 2))
    assert len(out) == 1
    t = out[0]
    assert t.id.startswith("piece-")
    assert (t.name, t.width, t.height, t.quantity) == ("Shelf", 500, 300, 2)
    assert t.color == template_color("Shelf", 500, 300)


def test_merge_adds_quantity_and_is_case_insensitive():
    first = add_or_merge([], PieceRequest("Shelf", 500, 300, 2))
    second = add_or_merge(first, PieceRequest("shelf", 500, 300, 3))
    assert len(second) == 1
    assert second[0].quantity == 5
    assert second[0].id == first[0].id
    assert second[0].name == "Shelf"


def test_different_dimensions_do_not_merge():
    out = add_or_merge([], PieceRequest("Shelf", 500, 300, 1))
    out = add_or_merge(out, PieceRequest("Shelf", 300, 500, 1))
    assert len(out) == 2
    assert out[0].id != out[1].id


def test_add_never_mutates_input():
    before = add_or_merge([], PieceRequest("Leg", 50, 50, 1))
    snapshot = list(before)
    after = add_or_merge(before, PieceRequest("Leg", 50, 50, 4))
    assert before == snapshot
    assert before[0].quantity == 1
    assert after[0].quantity == 5


def test_bulk_merges_with_templates_created_in_same_batch():
    out = bulk_add_or_merge([], [
        PieceRequest("Leg", 50, 50, 4),
        PieceRequest("Top", 800, 600, 1),
        PieceRequest("LEG", 50, 50, 1),
    ])
    assert [(t.name, t.quantity) for t in out] == [("Leg", 5), ("Top", 1)]
    assert total_remaining(out) == 6


def test_adjust_quantity_floors_at_zero_and_ignores_unknown_ids():
    out = add_or_merge([], PieceRequest("Leg", 50, 50, 1))
    tid = out[0].id
    assert adjust_quantity(out, tid, -5)[0].quantity == 0
    assert adjust_quantity(out, tid, +2)[0].quantity == 3
    assert adjust_quantity(out, "missing", -1) == out
    assert find_template(out, tid) is out[0]
    assert find_template(out, "missing") is None
