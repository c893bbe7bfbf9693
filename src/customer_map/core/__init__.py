"""Core utilities for the customer map project."""

from .logging import configure_logging, logger, ProgressReporter
from .io import setup_logging, read_any_csv, normalize_cols, require_columns
from .normalization import (
    PROVINCES,
    as_text,
    fold_text,
    canonicalize_province,
    is_province_name,
    extract_note_field,
    strip_location_tags,
    parse_lat_lon,
    sanitize_key,
)
from .records import CustomerRecord, ResolvedGeography
from .resolver import resolve_province, resolve_display_city, resolve_geography
from .filtering import matches, filter_customers, province_options, city_options
from .catalog import MUNICIPALITIES_BY_PROVINCE, standard_city_name, catalog_province
from .addresses import address_for_maps, geocode_candidates, maps_search_url, maps_directions_url

__all__ = [
    "configure_logging",
    "logger",
    "ProgressReporter",
    "setup_logging",
    "read_any_csv",
    "normalize_cols",
    "require_columns",
    "PROVINCES",
    "as_text",
    "fold_text",
    "canonicalize_province",
    "is_province_name",
    "extract_note_field",
    "strip_location_tags",
    "parse_lat_lon",
    "sanitize_key",
    "CustomerRecord",
    "ResolvedGeography",
    "resolve_province",
    "resolve_display_city",
    "resolve_geography",
    "matches",
    "filter_customers",
    "province_options",
    "city_options",
    "MUNICIPALITIES_BY_PROVINCE",
    "standard_city_name",
    "catalog_province",
    "address_for_maps",
    "geocode_candidates",
    "maps_search_url",
    "maps_directions_url",
]
