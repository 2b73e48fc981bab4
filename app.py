# app.py — JSON surface over the in-memory layout session
from __future__ import annotations
import math
import os
import threading
from typing import Any, Dict, Optional, Tuple

from flask import Flask, Response, request, jsonify, send_from_directory

from activity import emit
from catalog import fetch_boards_async, save_layout
from io_files import layout_view_html, write_coords, write_layout_view_html
from models import ErrorReason, Outcome
from pieces_parser import coerce_piece_form
from render import render_board
from session import Session

BASE_DIR = os.path.dirname(os.path.abspath(__file__))

# One session per process; the lock keeps each request's mutation atomic.
SESSION = Session()
SESSION_LOCK = threading.Lock()

_STATUS: Dict[ErrorReason, int] = {
    ErrorReason.COLLISION: 409,
    ErrorReason.NO_STOCK_REMAINING: 409,
    ErrorReason.NO_BOARD_SELECTED: 409,
    ErrorReason.OUT_OF_BOUNDS: 422,
    ErrorReason.INVALID_DIMENSIONS: 422,
    ErrorReason.INVALID_IMPORT_FORMAT: 422,
    ErrorReason.UNKNOWN_TEMPLATE: 404,
    ErrorReason.UNKNOWN_PLACEMENT: 404,
    ErrorReason.NOT_FOUND: 404,
}

app = Flask(__name__, static_folder=None)

_CATALOG_FETCH: Optional[threading.Thread] = None


@app.before_request
def _ensure_catalog():
    # `flask run` never reaches __main__, so the first request kicks off the fetch.
    with SESSION_LOCK:
        if _CATALOG_FETCH is None and not SESSION.boards:
            start_catalog_fetch()


@app.after_request
def _no_cache_state(resp):
    if request.path in ("/state", "/layout.svg"):
        resp.headers["Cache-Control"] = "no-store, max-age=0"
        resp.headers["Pragma"] = "no-cache"
        resp.headers["Expires"] = "0"
    return resp


def _merge_like_mapping() -> Dict[str, Any]:
    merged: Dict[str, Any] = {}
    payload = request.get_json(silent=True)
    if isinstance(payload, dict):
        merged.update(payload)

    for k, v in request.form.to_dict(flat=True).items():
        merged.setdefault(k, v)
    for k, v in request.args.to_dict(flat=True).items():
        merged.setdefault(k, v)
    return merged


def _to_float(x: Any) -> Optional[float]:
    try:
        v = float(x)
    except (TypeError, ValueError):
        return None
    return v if math.isfinite(v) else None


def _point(like: Dict[str, Any]) -> Optional[Tuple[float, float]]:
    x, y = _to_float(like.get("x")), _to_float(like.get("y"))
    if x is None or y is None:
        return None
    return x, y


def _reply(ok: bool, reason: Optional[ErrorReason] = None, status: Optional[int] = None, **extra: Any):
    body = {"ok": ok, "reason": reason.value if reason else None, **extra}
    body["state"] = SESSION.snapshot()
    if status is None:
        status = 200 if ok else _STATUS.get(reason, 400)
    return jsonify(body), status


def _reply_outcome(outcome: Outcome, status_ok: int = 200):
    piece = outcome.piece.to_dict() if outcome.piece else None
    return _reply(outcome.ok, outcome.reason, status_ok if outcome.ok else None, piece=piece)


def _bad_request(message: str):
    return jsonify({"ok": False, "reason": "badRequest", "message": message}), 400


@app.route("/")
def index():
    with SESSION_LOCK:
        board = SESSION.active_board
        svg, legend = render_board(board, SESSION.placed, SESSION.selected_id)
        title = f"{board.name} · {board.width} x {board.height}" if board else "Layout View"
    return layout_view_html(svg, legend, title)


@app.route("/state")
def state():
    with SESSION_LOCK:
        return jsonify(SESSION.snapshot())


@app.route("/boards", methods=["GET"])
def boards_list():
    with SESSION_LOCK:
        return jsonify([b.to_dict() for b in SESSION.boards])


@app.route("/boards", methods=["POST"])
def boards_create():
    like = _merge_like_mapping()
    with SESSION_LOCK:
        board, err = SESSION.create_board(like.get("name") or "", like.get("width"), like.get("height"))
        if err is not None:
            return _reply(False, err)
        return _reply(True, status=201, board=board.to_dict())


@app.route("/boards/<board_id>/select", methods=["POST"])
def boards_select(board_id: str):
    with SESSION_LOCK:
        return _reply_outcome(SESSION.select_board(board_id))


@app.route("/pieces", methods=["POST"])
def pieces_add():
    like = _merge_like_mapping()
    req, err = coerce_piece_form(like)
    with SESSION_LOCK:
        if err is not None:
            return _reply(False, err)
        SESSION.add_piece(req)
        return _reply(True, status=201)


@app.route("/pieces/import", methods=["POST"])
def pieces_import():
    upload = request.files.get("file")
    if upload is not None:
        text: Any = upload.read()
    else:
        like = _merge_like_mapping()
        text = like.get("text")
        if text is None:
            text = request.get_data(as_text=True)
    with SESSION_LOCK:
        requests, err = SESSION.import_pieces(text)
        if err is not None:
            return _reply(False, err)
        return _reply(True, imported=len(requests))


@app.route("/placements", methods=["POST"])
def placements_insert():
    like = _merge_like_mapping()
    template_id = like.get("template_id") or like.get("pieceId")
    pt = _point(like)
    if not template_id or pt is None:
        return _bad_request("template_id, x and y are required")
    with SESSION_LOCK:
        return _reply_outcome(SESSION.drop_piece(str(template_id), *pt), status_ok=201)


@app.route("/placements/<placed_id>/move", methods=["POST"])
def placements_move(placed_id: str):
    pt = _point(_merge_like_mapping())
    if pt is None:
        return _bad_request("x and y are required")
    with SESSION_LOCK:
        return _reply_outcome(SESSION.move_piece(placed_id, *pt))


@app.route("/placements/<placed_id>/select", methods=["POST"])
def placements_select(placed_id: str):
    with SESSION_LOCK:
        piece = SESSION.select_piece(placed_id)
        if piece is None:
            return _reply(False, ErrorReason.UNKNOWN_PLACEMENT)
        return _reply(True, piece=piece.to_dict())


@app.route("/placements/<placed_id>", methods=["DELETE"])
def placements_remove(placed_id: str):
    with SESSION_LOCK:
        return _reply_outcome(SESSION.remove_piece(placed_id))


@app.route("/layout/save", methods=["POST"])
def layout_save():
    with SESSION_LOCK:
        snap = SESSION.snapshot()
    result = save_layout(board=snap["board"], placed=snap["placed"])
    emit("Layout saved", board=snap["active_board_id"], pieces=len(snap["placed"]))
    return jsonify(result)


@app.route("/layout.svg")
def layout_svg():
    with SESSION_LOCK:
        svg, _legend = render_board(SESSION.active_board, SESSION.placed, SESSION.selected_id)
        if not svg:
            return _reply(False, ErrorReason.NO_BOARD_SELECTED)
    return Response(svg, mimetype="image/svg+xml")


@app.route("/download/coords")
def download_coords():
    with SESSION_LOCK:
        path = write_coords(SESSION.placed, SESSION.active_board, BASE_DIR)
    return send_from_directory(os.path.dirname(path), os.path.basename(path), as_attachment=True)


@app.route("/download/html")
def download_html():
    with SESSION_LOCK:
        board = SESSION.active_board
        svg, legend = render_board(board, SESSION.placed)
        path = write_layout_view_html(svg, legend, BASE_DIR, board.name if board else "Layout View")
    return send_from_directory(os.path.dirname(path), os.path.basename(path), as_attachment=True)


def _on_catalog(boards) -> None:
    with SESSION_LOCK:
        SESSION.load_catalog(boards)


def start_catalog_fetch() -> threading.Thread:
    global _CATALOG_FETCH
    _CATALOG_FETCH = fetch_boards_async(_on_catalog)
    return _CATALOG_FETCH


if __name__ == "__main__":
    start_catalog_fetch()
    app.run(debug=False)
