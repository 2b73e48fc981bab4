"""Helpers for exporting the current layout to disk."""

from __future__ import annotations

import os
from html import escape
from typing import Iterable, Optional

from config import CFG
from models import Board, PlacedPiece


def _resolve_output_path(base_dir: str, configured_name: str, fallback: str) -> str:
    """Return the absolute path where an output artifact should be written."""

    name = (configured_name or "").strip() or fallback
    if os.path.isabs(name):
        return name
    return os.path.join(base_dir, name)


def coords_text(placed: Iterable[PlacedPiece], board: Optional[Board]) -> str:
    placed = list(placed)
    lines = []
    if board is not None:
        lines.append(f"# {board.name} {board.width}x{board.height}")
    if not placed:
        lines.append("No pieces placed")
    for p in placed:
        lines.append(f"{p.name} @ ({p.x},{p.y}) size ({p.width}×{p.height})")
    return "\n".join(lines) + "\n"


def layout_view_html(svg: str, legend_html: str, title: str = "Layout View") -> str:
    return f"""<!doctype html>
<html><head><meta charset='utf-8'><title>{escape(title)}</title>
</head>
<body class='container'>
<h1>{escape(title)}</h1>
<section class='card'><div class='gridwrap'>{svg or '<p>No board selected</p>'}</div></section>
<section class='card'><h3>Legend</h3><ul>{legend_html}</ul></section>
</body></html>"""


def write_coords(placed: Iterable[PlacedPiece], board: Optional[Board], base_dir: str) -> str:
    """Write the placed piece coordinates to the configured text file."""

    path = _resolve_output_path(base_dir, CFG.COORDS_OUT, "coords.txt")
    os.makedirs(os.path.dirname(path), exist_ok=True)

    with open(path, "w", encoding="utf-8") as f:
        f.write(coords_text(placed, board))
    return path


def write_layout_view_html(svg: str, legend_html: str, base_dir: str, title: str = "Layout View") -> str:
    """Write the rendered SVG/legend preview to the configured HTML file."""

    path = _resolve_output_path(base_dir, CFG.LAYOUT_HTML, "layout_view.html")
    os.makedirs(os.path.dirname(path), exist_ok=True)

    with open(path, "w", encoding="utf-8") as vf:
        vf.write(layout_view_html(svg, legend_html, title))
    return path


__all__ = ["coords_text", "layout_view_html", "write_coords", "write_layout_view_html"]
