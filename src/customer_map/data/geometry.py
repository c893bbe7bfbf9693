"""Rough province extents for sanity-checking customer coordinates."""

from __future__ import annotations

from typing import Dict, Optional, Tuple

from shapely.geometry import Point, box
from shapely.geometry.base import BaseGeometry


# lon_min, lat_min, lon_max, lat_max; padded a little past the coastline.
PROVINCE_BOUNDS: Dict[str, Tuple[float, float, float, float]] = {
    "Huelva": (-7.60, 36.95, -6.10, 38.30),
    "Cádiz": (-6.50, 35.95, -5.05, 37.10),
    "Ceuta": (-5.42, 35.85, -5.26, 35.94),
}

_PROVINCE_SHAPES: Dict[str, BaseGeometry] = {name: box(*bounds) for name, bounds in PROVINCE_BOUNDS.items()}


def province_geometry(province: str) -> Optional[BaseGeometry]:
    return _PROVINCE_SHAPES.get(province)


def coords_outside_province(lat: Optional[float], lon: Optional[float], province: str) -> bool:
    """True only when both coordinates and a known province disagree."""
    if lat is None or lon is None:
        return False
    shape = province_geometry(province)
    if shape is None:
        return False
    return not bool(shape.covers(Point(lon, lat)))
