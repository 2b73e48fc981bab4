# inventory.py — piece templates and their remaining stock
from __future__ import annotations

import uuid
from dataclasses import replace
from typing import Iterable, List, Optional, Sequence

from models import PieceRequest, PieceTemplate
from render import template_color


def build_id(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4()}"


def find_template(templates: Iterable[PieceTemplate], template_id: str) -> Optional[PieceTemplate]:
    for t in templates:
        if t.id == template_id:
            return t
    return None


def add_or_merge(templates: Sequence[PieceTemplate], request: PieceRequest) -> List[PieceTemplate]:
    """
    Return a new template list with ``request`` folded in.

    A template with the same name (case-insensitive), width and height absorbs
    the requested quantity; otherwise a new template is appended.
    """
    out = list(templates)
    for i, t in enumerate(out):
        if request.same_template(t):
            out[i] = replace(t, quantity=t.quantity + request.quantity)
            return out

    out.append(PieceTemplate(
        id=build_id("piece"),
        name=request.name,
        width=request.width,
        height=request.height,
        quantity=request.quantity,
        color=template_color(request.name, request.width, request.height),
    ))
    return out


def bulk_add_or_merge(
    templates: Sequence[PieceTemplate],
    requests: Iterable[PieceRequest],
) -> List[PieceTemplate]:
    out = list(templates)
    for req in requests:
        out = add_or_merge(out, req)
    return out


def adjust_quantity(
    templates: Sequence[PieceTemplate],
    template_id: str,
    delta: int,
) -> List[PieceTemplate]:
    return [
        replace(t, quantity=max(t.quantity + delta, 0)) if t.id == template_id else t
        for t in templates
    ]


def total_remaining(templates: Iterable[PieceTemplate]) -> int:
    return sum(t.quantity for t in templates)


__all__ = [
    "build_id",
    "find_template",
    "add_or_merge",
    "bulk_add_or_merge",
    "adjust_quantity",
    "total_remaining",
]
