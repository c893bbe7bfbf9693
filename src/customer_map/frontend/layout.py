from __future__ import annotations

from html import escape
from importlib import resources
from string import Template

import folium
import pandas as pd

from ..core import as_text
from .colors import marker_colors, province_color


def _load_template(name: str) -> str:
    return resources.files(__package__).joinpath(f"templates/{name}").read_text(encoding="utf-8")


SIDEBAR_HTML_TEMPLATE = Template(_load_template("sidebar.html"))
LEGEND_PROVINCES_TEMPLATE = Template(_load_template("legend_provinces.html"))

UNRESOLVED_LAYER_NAME = "Sin provincia"


def zoom_for_bounds(bounds: dict | None) -> int:
    if not bounds:
        return 8
    lat_span = float(bounds.get("lat_max", 0.0)) - float(bounds.get("lat_min", 0.0))
    lon_span = float(bounds.get("lon_max", 0.0)) - float(bounds.get("lon_min", 0.0))
    extent = max(abs(lat_span), abs(lon_span))
    if extent > 1.5:
        return 8
    if extent > 0.6:
        return 9
    if extent > 0.25:
        return 10
    if extent > 0.12:
        return 11
    if extent > 0.06:
        return 12
    return 13


def popup_html(r) -> str:
    name = as_text(r["name"]) or "(Sin nombre)"
    lines = [f"<b>{escape(name)}</b>"]
    company = as_text(r.get("company"))
    if company:
        lines.append(escape(company))
    address = as_text(r.get("address"))
    if address:
        lines.append(escape(address))
    locality = " · ".join(v for v in (as_text(r["display_city"]), as_text(r["canonical_province"])) if v)
    if locality:
        lines.append(escape(locality))
    if bool(r.get("coords_outside_province")):
        lines.append('<span style="color:#e65100">Coordenadas fuera de la provincia</span>')
    maps_url = as_text(r.get("maps_url"))
    if maps_url:
        lines.append(f'<a href="{escape(maps_url)}" target="_blank" rel="noopener">Abrir en Google Maps</a>')
    return "<br>".join(lines)


def add_customer_layers(m: folium.Map, customers: pd.DataFrame) -> dict[str, folium.FeatureGroup]:
    """One toggleable layer per province; customers without coordinates are skipped."""
    layers: dict[str, folium.FeatureGroup] = {}
    placed = customers.dropna(subset=["lat", "lon"])

    for _, r in placed.iterrows():
        province = as_text(r["canonical_province"])
        layer_name = province or UNRESOLVED_LAYER_NAME
        layer = layers.get(layer_name)
        if layer is None:
            layer = folium.FeatureGroup(name=layer_name, show=True, overlay=True)
            layers[layer_name] = layer
        fill, outline = marker_colors(province, bool(r["coords_outside_province"]))
        tooltip = as_text(r["name"]) or None
        folium.CircleMarker(
            location=[float(r["lat"]), float(r["lon"])],
            radius=6,
            fill=True,
            fill_color=fill,
            fill_opacity=0.8,
            color=outline,
            weight=2 if outline != fill else 1,
            tooltip=tooltip,
        ).add_child(folium.Popup(popup_html(r), max_width=320)).add_to(layer)

    for layer in layers.values():
        layer.add_to(m)
    if layers:
        folium.LayerControl(collapsed=False).add_to(m)
    return layers


def selection_label(selection: dict | None) -> str:
    selection = selection or {}
    parts = [as_text(selection.get("province")), as_text(selection.get("city"))]
    parts = [p for p in parts if p]
    return escape(" / ".join(parts)) if parts else "Todas las provincias"


def sidebar_html(customers_rows: str, provinces_rows: str, sidebar_width: int, selection: dict | None, customer_count: int) -> str:
    return SIDEBAR_HTML_TEMPLATE.safe_substitute(
        sidebar_width=sidebar_width,
        customers_rows=customers_rows,
        provinces_rows=provinces_rows,
        selection_label=selection_label(selection),
        customer_count=format(int(customer_count), ","),
    )


def legend_html(filter_config: dict, sidebar_width: int) -> str:
    entries = []
    for item in filter_config.get("provinces") or []:
        name = str(item.get("name", ""))
        color = province_color(name)
        count = int(item.get("count", 0))
        entries.append(
            f'  <div><span style="display:inline-block;width:10px;height:10px;border-radius:50%;'
            f'background:{color};margin-right:6px;"></span>{escape(name)} ({format(count, ",")})</div>'
        )
    if not entries:
        entries.append('  <div><em>Sin datos</em></div>')
    try:
        sidebar_width_px = int(sidebar_width)
    except (TypeError, ValueError):
        sidebar_width_px = 0
    return LEGEND_PROVINCES_TEMPLATE.substitute(
        legend_left_offset=max(sidebar_width_px, 0) + 20,
        legend_entries="\n".join(entries),
    )
