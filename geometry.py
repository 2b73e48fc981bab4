# geometry.py — axis-aligned rectangle helpers on the integer board grid
from __future__ import annotations

import math
from typing import Any, Iterable, Optional

from models import Board, PlacedPiece


def overlaps(a: Any, b: Any) -> bool:
    """
    True when the open interiors of two rectangles intersect.

    Both arguments only need ``x``, ``y``, ``width`` and ``height``. Sharing an
    edge or a corner is not an overlap.
    """
    overlap_x = a.x < b.x + b.width and b.x < a.x + a.width
    overlap_y = a.y < b.y + b.height and b.y < a.y + a.height
    return overlap_x and overlap_y


def snap(value: Any) -> int:
    """Floor a raw pointer coordinate onto the non-negative integer grid."""
    try:
        v = float(value)
    except (TypeError, ValueError):
        return 0
    if math.isnan(v) or math.isinf(v):
        return 0
    return max(0, math.floor(v))


def within_bounds(x: int, y: int, width: int, height: int, board: Board) -> bool:
    return (
        x >= 0
        and y >= 0
        and x + width <= board.width
        and y + height <= board.height
    )


def first_collision(
    candidate: Any,
    placed: Iterable[PlacedPiece],
    ignore_id: Optional[str] = None,
) -> Optional[PlacedPiece]:
    for other in placed:
        if ignore_id is not None and other.id == ignore_id:
            continue
        if overlaps(other, candidate):
            return other
    return None


__all__ = ["overlaps", "snap", "within_bounds", "first_collision"]
