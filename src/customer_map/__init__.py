"""Customer geography resolution, filtering and map building."""

from .core import (
    CustomerRecord,
    ResolvedGeography,
    canonicalize_province,
    resolve_province,
    resolve_display_city,
    resolve_geography,
    matches,
    filter_customers,
)

__all__ = [
    "CustomerRecord",
    "ResolvedGeography",
    "canonicalize_province",
    "resolve_province",
    "resolve_display_city",
    "resolve_geography",
    "matches",
    "filter_customers",
]
