"""
Session controller — the single in-memory editing session.

Owns the board catalog, the active board, the piece templates, the placed
pieces for the active board, the selected placed piece and the most recent
validation failure. Requests from the input layer are routed into the
placement engine; results are committed here and echoed to the activity log.

Collections are only ever replaced, never mutated in place, so a caller that
kept an earlier ``templates`` or ``placed`` tuple still holds that version.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional, Tuple

import engine
from activity import emit
from inventory import add_or_merge, build_id, bulk_add_or_merge, total_remaining
from models import Board, ErrorReason, Outcome, PieceRequest, PieceTemplate, PlacedPiece
from pieces_parser import parse_piece_list, to_count


class Session:
    def __init__(self, boards: Iterable[Board] = ()) -> None:
        self.boards: Tuple[Board, ...] = tuple(boards)
        self.active_board_id: Optional[str] = self.boards[0].id if self.boards else None
        self.templates: Tuple[PieceTemplate, ...] = ()
        self.placed: Tuple[PlacedPiece, ...] = ()
        self.selected_id: Optional[str] = None
        self.last_error: Optional[ErrorReason] = None

    # ------------------------------------------------------------------
    # Boards
    # ------------------------------------------------------------------

    @property
    def active_board(self) -> Optional[Board]:
        for b in self.boards:
            if b.id == self.active_board_id:
                return b
        return None

    def _reset_layout(self) -> None:
        self.placed = ()
        self.selected_id = None
        self.last_error = None

    def load_catalog(self, boards: Iterable[Board]) -> None:
        """
        Replace the catalog. The first board becomes active when none is, or
        when the active board is missing from the new catalog.
        """
        self.boards = tuple(boards)
        emit("Catalog loaded", boards=len(self.boards))
        if self.active_board is not None:
            return
        if self.boards:
            self.select_board(self.boards[0].id)
        elif self.active_board_id is not None:
            self.select_board(None)

    def select_board(self, board_id: Optional[str]) -> Outcome:
        if not board_id:
            self.active_board_id = None
            self._reset_layout()
            emit("Board deselected")
            return Outcome(ok=True)
        if not any(b.id == board_id for b in self.boards):
            emit("Board select ignored", board=board_id, reason=ErrorReason.NOT_FOUND.value)
            return Outcome(ok=False, reason=ErrorReason.NOT_FOUND)

        discarded = len(self.placed)
        self.active_board_id = board_id
        self._reset_layout()
        emit("Board selected", board=board_id, discarded=discarded or None)
        return Outcome(ok=True)

    def create_board(self, name: Any, width: Any, height: Any) -> Tuple[Optional[Board], Optional[ErrorReason]]:
        w, h = to_count(width), to_count(height)
        if w is None or h is None:
            self.last_error = ErrorReason.INVALID_DIMENSIONS
            emit("Board rejected", name=name, width=width, height=height)
            return None, ErrorReason.INVALID_DIMENSIONS

        name = ("" if name is None else str(name)).strip() or f"{w} x {h}"
        board = Board(id=build_id("plate"), name=name, width=w, height=h)
        self.boards = self.boards + (board,)
        emit("Board created", board=board.id, name=name, size=f"{w}x{h}")
        self.select_board(board.id)
        return board, None

    # ------------------------------------------------------------------
    # Inventory
    # ------------------------------------------------------------------

    def add_piece(self, request: PieceRequest) -> None:
        self.templates = tuple(add_or_merge(self.templates, request))
        emit("Piece added", name=request.name,
             size=f"{request.width}x{request.height}", quantity=request.quantity)

    def bulk_add(self, requests: Iterable[PieceRequest]) -> None:
        requests = list(requests)
        self.templates = tuple(bulk_add_or_merge(self.templates, requests))
        emit("Pieces imported", rows=len(requests))

    def import_pieces(self, text: Any) -> Tuple[List[PieceRequest], Optional[ErrorReason]]:
        requests, err = parse_piece_list(text)
        if err is not None:
            self.last_error = err
            emit("Import rejected", reason=err.value)
            return [], err
        self.bulk_add(requests)
        return requests, None

    # ------------------------------------------------------------------
    # Placement
    # ------------------------------------------------------------------

    def _record(self, action: str, outcome: Outcome, **fields: Any) -> Outcome:
        if outcome.ok:
            emit(f"{action} applied", piece=outcome.piece.id if outcome.piece else None, **fields)
            return outcome
        if not outcome.reason.silent:
            self.last_error = outcome.reason
        emit(f"{action} rejected", reason=outcome.reason.value, **fields)
        return outcome

    def drop_piece(self, template_id: str, x: Any, y: Any) -> Outcome:
        board = self.active_board
        if board is None:
            return self._record("Drop", Outcome(ok=False, reason=ErrorReason.NO_BOARD_SELECTED),
                                template=template_id)

        outcome = engine.insert(board, self.placed, self.templates, template_id, x, y)
        if outcome.ok:
            self.placed = outcome.placed
            self.templates = outcome.templates
            self.selected_id = outcome.piece.id
            self.last_error = None
        return self._record("Drop", outcome, template=template_id, x=x, y=y)

    def move_piece(self, placed_id: str, x: Any, y: Any) -> Outcome:
        board = self.active_board
        if board is None:
            return self._record("Move", Outcome(ok=False, reason=ErrorReason.NO_BOARD_SELECTED),
                                placed=placed_id)

        outcome = engine.move(board, self.placed, placed_id, x, y)
        if outcome.ok:
            self.placed = outcome.placed
            self.last_error = None
        return self._record("Move", outcome, placed=placed_id, x=x, y=y)

    def remove_piece(self, placed_id: str) -> Outcome:
        if self.active_board is None:
            return self._record("Remove", Outcome(ok=False, reason=ErrorReason.NO_BOARD_SELECTED),
                                placed=placed_id)

        outcome = engine.remove(self.placed, self.templates, placed_id)
        if outcome.ok:
            self.placed = outcome.placed
            self.templates = outcome.templates
            self.selected_id = None
            self.last_error = None
        return self._record("Remove", outcome, placed=placed_id)

    def select_piece(self, placed_id: Optional[str]) -> Optional[PlacedPiece]:
        for p in self.placed:
            if p.id == placed_id:
                self.selected_id = p.id
                return p
        self.selected_id = None
        return None

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    def stats(self) -> Dict[str, Any]:
        board = self.active_board
        used = sum(p.area for p in self.placed)
        total = board.width * board.height if board else 0
        return {
            "placed_count": len(self.placed),
            "remaining": total_remaining(self.templates),
            "used_area": used,
            "board_area": total,
            "coverage_pct": round(100.0 * used / total, 2) if total else 0.0,
        }

    def snapshot(self) -> Dict[str, Any]:
        board = self.active_board
        return {
            "boards": [b.to_dict() for b in self.boards],
            "active_board_id": self.active_board_id,
            "board": board.to_dict() if board else None,
            "templates": [t.to_dict() for t in self.templates],
            "placed": [p.to_dict() for p in self.placed],
            "selected_id": self.selected_id,
            "last_error": self.last_error.value if self.last_error else None,
            "stats": self.stats(),
        }


__all__ = ["Session"]
