"""Frontend helpers for building the Folium map and HTML."""

from .layout import (
    zoom_for_bounds,
    popup_html,
    add_customer_layers,
    selection_label,
    sidebar_html,
    legend_html,
)
from .colors import PROVINCE_COLORS, province_color, marker_colors

__all__ = [
    "zoom_for_bounds",
    "popup_html",
    "add_customer_layers",
    "selection_label",
    "sidebar_html",
    "legend_html",
    "PROVINCE_COLORS",
    "province_color",
    "marker_colors",
]
