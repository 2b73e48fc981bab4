# engine.py — insert / move / remove of placed pieces on one board
"""
Placement rules for a single board.

Every call takes the current placed set (and, where stock moves, the template
list) and returns an ``Outcome``. A successful outcome carries new
collections; a failed one hands back the inputs unchanged together with the
reason, so callers can commit or discard without rollback.
"""
from __future__ import annotations

from dataclasses import replace
from typing import Any, Sequence

from geometry import first_collision, snap, within_bounds
from inventory import adjust_quantity, build_id, find_template
from models import Board, ErrorReason, Outcome, PieceTemplate, PlacedPiece


def _fail(reason: ErrorReason, placed, templates=()) -> Outcome:
    return Outcome(ok=False, reason=reason, placed=tuple(placed), templates=tuple(templates))


def _find_placed(placed: Sequence[PlacedPiece], placed_id: str):
    for p in placed:
        if p.id == placed_id:
            return p
    return None


def insert(
    board: Board,
    placed: Sequence[PlacedPiece],
    templates: Sequence[PieceTemplate],
    template_id: str,
    x: Any,
    y: Any,
) -> Outcome:
    template = find_template(templates, template_id)
    if template is None:
        return _fail(ErrorReason.UNKNOWN_TEMPLATE, placed, templates)
    if template.quantity <= 0:
        return _fail(ErrorReason.NO_STOCK_REMAINING, placed, templates)
    if template.width < 1 or template.height < 1:
        return _fail(ErrorReason.INVALID_DIMENSIONS, placed, templates)

    candidate = PlacedPiece(
        id=build_id("placed"),
        template_id=template.id,
        name=template.name,
        width=template.width,
        height=template.height,
        x=snap(x),
        y=snap(y),
        color=template.color,
    )
    if not within_bounds(candidate.x, candidate.y, candidate.width, candidate.height, board):
        return _fail(ErrorReason.OUT_OF_BOUNDS, placed, templates)
    if first_collision(candidate, placed) is not None:
        return _fail(ErrorReason.COLLISION, placed, templates)

    return Outcome(
        ok=True,
        placed=tuple(placed) + (candidate,),
        templates=tuple(adjust_quantity(templates, template.id, -1)),
        piece=candidate,
    )


def move(
    board: Board,
    placed: Sequence[PlacedPiece],
    placed_id: str,
    x: Any,
    y: Any,
) -> Outcome:
    piece = _find_placed(placed, placed_id)
    if piece is None:
        return _fail(ErrorReason.UNKNOWN_PLACEMENT, placed)
    if piece.width < 1 or piece.height < 1:
        return _fail(ErrorReason.INVALID_DIMENSIONS, placed)

    candidate = replace(piece, x=snap(x), y=snap(y))
    if not within_bounds(candidate.x, candidate.y, candidate.width, candidate.height, board):
        return _fail(ErrorReason.OUT_OF_BOUNDS, placed)
    # the piece never collides with its own previous position
    if first_collision(candidate, placed, ignore_id=piece.id) is not None:
        return _fail(ErrorReason.COLLISION, placed)

    return Outcome(
        ok=True,
        placed=tuple(candidate if p.id == piece.id else p for p in placed),
        piece=candidate,
    )


def remove(
    placed: Sequence[PlacedPiece],
    templates: Sequence[PieceTemplate],
    placed_id: str,
) -> Outcome:
    piece = _find_placed(placed, placed_id)
    if piece is None:
        return _fail(ErrorReason.UNKNOWN_PLACEMENT, placed, templates)

    return Outcome(
        ok=True,
        placed=tuple(p for p in placed if p.id != piece.id),
        templates=tuple(adjust_quantity(templates, piece.template_id, +1)),
        piece=piece,
    )


__all__ = ["insert", "move", "remove"]
