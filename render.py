from html import escape
from typing import Dict, Iterable, Optional, Tuple

from config import CFG
from models import Board, PlacedPiece


def _int32(v: int) -> int:
    v &= 0xFFFFFFFF
    return v - 0x100000000 if v & 0x80000000 else v


def color_from_string(value: str) -> str:
    # Hash over UTF-16 code units so a signature maps to the same hue everywhere.
    units = value.encode("utf-16-le")
    h = 0
    for i in range(0, len(units), 2):
        code = units[i] | (units[i + 1] << 8)
        h = code + (_int32(_int32(h) << 5) - h)
    hue = abs(h) % 360
    return f"hsl({hue} 65% 60%)"


def template_color(name: str, width: int, height: int) -> str:
    return color_from_string(f"{name}-{width}-{height}")


def render_board(
    board: Optional[Board],
    placed: Iterable[PlacedPiece],
    selected_id: Optional[str] = None,
    scale: Optional[float] = None,
) -> Tuple[str, str]:
    if board is None:
        return "", ""
    scale = CFG.SVG_SCALE if scale is None else scale

    palette: Dict[str, str] = {}
    svg_w = int(board.width * scale) + 2
    svg_h = int(board.height * scale) + 2

    rects = []
    for p in placed:
        palette.setdefault(p.name, p.color)
        x = int(p.x * scale) + 1
        y = int(p.y * scale) + 1
        w = max(1, int(p.width * scale))
        h = max(1, int(p.height * scale))
        stroke = "2" if p.id == selected_id else "1"
        rects.append(
            f'<rect x="{x}" y="{y}" width="{w}" height="{h}" fill="{p.color}" '
            f'stroke="black" stroke-width="{stroke}" data-id="{escape(p.id)}"/>'
            f'<text x="{x+4}" y="{y+14}" font-size="12" fill="black">{escape(p.name)}</text>'
        )
    outline = f'<rect x="1" y="1" width="{svg_w-2}" height="{svg_h-2}" fill="none" stroke="black" stroke-width="2"/>'
    svg = (
        f'<svg class="layout-svg" xmlns="http://www.w3.org/2000/svg" '
        f'width="{svg_w}" height="{svg_h}" '
        f'viewBox="0 0 {svg_w} {svg_h}" preserveAspectRatio="xMinYMin meet">'
        f'{outline}{"".join(rects)}</svg>'
    )

    legend = "".join(
        f"<li><span class='swatch' style='background:{c}'></span>{escape(n)}</li>"
        for n, c in palette.items()
    )
    return svg, legend


__all__ = ["color_from_string", "template_color", "render_board"]
