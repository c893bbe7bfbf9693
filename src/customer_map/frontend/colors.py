"""Colour helpers for the Folium layers."""

from __future__ import annotations

from typing import Dict


PROVINCE_COLORS: Dict[str, str] = {
    "Huelva": "#1f78b4",
    "Cádiz": "#e31a1c",
    "Ceuta": "#33a02c",
}
UNRESOLVED_COLOR = "#9e9e9e"
WARNING_COLOR = "#ff7f00"


def _hex_to_rgb(h: str) -> tuple[int, int, int]:
    h = h.lstrip("#")
    return tuple(int(h[i : i + 2], 16) for i in (0, 2, 4))


def _interp(c1: str, c2: str, t: float) -> str:
    r1, g1, b1 = _hex_to_rgb(c1)
    r2, g2, b2 = _hex_to_rgb(c2)
    r = int(r1 + (r2 - r1) * t)
    g = int(g1 + (g2 - g1) * t)
    b = int(b1 + (b2 - b1) * t)
    return f"#{r:02x}{g:02x}{b:02x}"


def province_color(province: str) -> str:
    return PROVINCE_COLORS.get(province, UNRESOLVED_COLOR)


def marker_colors(province: str, outside_province: bool = False) -> tuple[str, str]:
    """Fill and outline colours; misplaced markers get a warning outline."""
    fill = province_color(province)
    if outside_province:
        return _interp(fill, UNRESOLVED_COLOR, 0.5), WARNING_COLOR
    return fill, fill
