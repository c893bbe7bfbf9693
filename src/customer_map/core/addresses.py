"""Address strings and map links for customers."""

from __future__ import annotations

import re
from typing import Any
from urllib.parse import quote

from .normalization import as_text
from .records import CustomerRecord
from .resolver import resolve_geography


COUNTRY = "España"
MAPS_SEARCH_URL = "https://www.google.com/maps/search/?api=1&query={query}"
MAPS_DIRECTIONS_URL = "https://www.google.com/maps/dir/?api=1&destination={query}"

_EMPTY_PARTS_RE = re.compile(r",\s*,")
_EDGE_COMMAS_RE = re.compile(r"^\s*,|,\s*$")


def address_for_maps(record: Any) -> str:
    rec = CustomerRecord.coerce(record)
    geo = resolve_geography(rec)
    province = as_text(rec.province).strip()
    locality = geo.display_city or as_text(rec.city).strip() or province
    parts = [
        as_text(rec.address).strip(),
        locality,
        province if province and locality != province else "",
        COUNTRY,
    ]
    return ", ".join(p for p in parts if p)


def _tidy_query(query: str) -> str:
    query = query.strip()
    while True:
        tidied = _EMPTY_PARTS_RE.sub(",", query)
        tidied = _EDGE_COMMAS_RE.sub("", tidied).strip()
        if tidied == query:
            return tidied
        query = tidied


def geocode_candidates(record: Any) -> list[str]:
    """Geocoder queries from most to least specific, without repeats."""
    rec = CustomerRecord.coerce(record)
    address = as_text(rec.address).strip()
    city = as_text(rec.city).strip()
    province = resolve_geography(rec).canonical_province or as_text(rec.province).strip()
    raw = [
        f"{address}, {city}, {province}, {COUNTRY}",
        f"{address}, {city}, {COUNTRY}",
        f"{city}, {province}, {COUNTRY}",
        f"{province}, {COUNTRY}",
        f"{city}, {COUNTRY}",
        address,
    ]
    candidates: list[str] = []
    for query in raw:
        query = _tidy_query(query)
        if len(query) > 2 and query != COUNTRY and query not in candidates:
            candidates.append(query)
    return candidates


def maps_search_url(record: Any) -> str:
    return MAPS_SEARCH_URL.format(query=quote(address_for_maps(record), safe=""))


def maps_directions_url(record: Any) -> str:
    return MAPS_DIRECTIONS_URL.format(query=quote(address_for_maps(record), safe=""))
