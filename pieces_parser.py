# pieces_parser.py — bulk piece-list import and add-form coercion
import math
import re
from typing import Any, List, Mapping, Optional, Tuple

from models import ErrorReason, PieceRequest

_LINE_RE = re.compile(r"\r?\n")
_FIELD_RE = re.compile(r"[;,]")


def _to_number(tok: Any) -> Optional[float]:
    if tok is None:
        return None
    if isinstance(tok, (list, tuple)):
        tok = tok[0] if tok else None
        if tok is None:
            return None
    try:
        v = float(str(tok).strip())
    except (TypeError, ValueError):
        return None
    if math.isnan(v) or math.isinf(v):
        return None
    return v


def to_count(tok: Any) -> Optional[int]:
    """Whole number >= 1, or None."""
    v = _to_number(tok)
    if v is None or v != int(v) or v < 1:
        return None
    return int(v)


def _first(val: Any) -> str:
    if isinstance(val, (list, tuple)):
        val = val[0] if val else ""
    return "" if val is None else str(val).strip()


def _parse_row(row: str) -> Optional[PieceRequest]:
    fields = [f.strip() for f in _FIELD_RE.split(row)]
    if len(fields) < 4:
        return None
    name = fields[0]
    if not name:
        return None
    if any(_to_number(tok) is None for tok in fields[1:4]):
        return None
    width, height, quantity = (to_count(tok) for tok in fields[1:4])
    if width is None or height is None or quantity is None:
        return None
    return PieceRequest(name=name, width=width, height=height, quantity=quantity)


def parse_piece_list(text: Any) -> Tuple[List[PieceRequest], Optional[ErrorReason]]:
    """
    Parse delimited piece rows (``name,width,height,quantity``; ``;`` also
    separates fields) into requests.

    Blank lines are skipped. One malformed row rejects the whole batch, so the
    caller never applies a partial import.
    """
    if text is None:
        return [], None
    if isinstance(text, bytes):
        text = text.decode("utf-8-sig", errors="replace")
    rows = [line.strip() for line in _LINE_RE.split(str(text))]

    out: List[PieceRequest] = []
    for row in rows:
        if not row:
            continue
        req = _parse_row(row)
        if req is None:
            return [], ErrorReason.INVALID_IMPORT_FORMAT
        out.append(req)
    return out, None


def coerce_piece_form(form: Mapping[str, Any]) -> Tuple[Optional[PieceRequest], Optional[ErrorReason]]:
    """Validate a single add-piece form (JSON body or posted fields)."""
    if not isinstance(form, Mapping):
        return None, ErrorReason.INVALID_IMPORT_FORMAT

    name = _first(form.get("name"))
    raw = [form.get(k) for k in ("width", "height", "quantity")]
    if not name or any(_to_number(v) is None for v in raw):
        return None, ErrorReason.INVALID_IMPORT_FORMAT

    width, height, quantity = (to_count(v) for v in raw)
    if width is None or height is None:
        return None, ErrorReason.INVALID_DIMENSIONS
    if quantity is None:
        return None, ErrorReason.INVALID_IMPORT_FORMAT
    return PieceRequest(name=name, width=width, height=height, quantity=quantity), None


__all__ = ["parse_piece_list", "coerce_piece_form", "to_count"]
