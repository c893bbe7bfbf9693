"""Utilities for normalising provinces, free-text notes, and coordinates."""

from __future__ import annotations

import re
import unicodedata
from typing import Any, Optional, Tuple

import pandas as pd
from pandas.api.types import is_scalar


PROVINCES: Tuple[str, ...] = ("Huelva", "Cádiz", "Ceuta")

_CANONICAL_BY_FOLDED = {
    "huelva": "Huelva",
    "cadiz": "Cádiz",
    "ceuta": "Ceuta",
}

_LAT_LON_RE = re.compile(r"\s*([\-0-9.]+)\s*,\s*([\-0-9.]+)\s*$")


def as_text(value: Any) -> str:
    """Coerce a loosely typed field to a string; null-likes become ''."""
    if value is None:
        return ""
    if is_scalar(value) and pd.isna(value):
        return ""
    return str(value)


def strip_accents(s: str) -> str:
    decomposed = unicodedata.normalize("NFKD", s)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def fold_text(value: Any) -> str:
    """Trim, lower-case and strip diacritics so spellings compare equal."""
    return strip_accents(as_text(value).strip().lower())


def canonicalize_province(raw: Any) -> str:
    """Map any spelling of a recognised province to its canonical name.

    Unrecognised input, including the empty string, yields ``""``.
    """
    return _CANONICAL_BY_FOLDED.get(fold_text(raw), "")


def is_province_name(value: Any) -> bool:
    """Exact match against the canonical province spellings."""
    return as_text(value) in PROVINCES


def _note_field_re(label: str) -> re.Pattern[str]:
    return re.compile(rf"{re.escape(label)}:[ \t]*([^\n]*)", re.IGNORECASE)


def extract_note_field(notes: Any, label: str) -> str:
    """Return the trimmed value after ``<label>:`` up to the end of its line."""
    text = as_text(notes)
    if not text:
        return ""
    m = _note_field_re(label).search(text)
    return m.group(1).strip() if m else ""


_PIPE_TAG_RE = re.compile(r"\s*\|\s*(?:Provincia|Ciudad):[^|\n]*", re.IGNORECASE)
_LINE_TAG_RE = re.compile(r"(^|\n)[ \t]*(?:Provincia|Ciudad):[^\n]*", re.IGNORECASE)
_PIPE_RE = re.compile(r"\s*\|\s*")
_EDGE_PIPES_RE = re.compile(r"^(\s*\|\s*)+|(\s*\|\s*)+$")


def strip_location_tags(notes: Any) -> str:
    """Remove ``Provincia:`` and ``Ciudad:`` tags from free-text notes."""
    s = as_text(notes)
    if not s:
        return ""
    s = _PIPE_TAG_RE.sub("", s)
    s = _LINE_TAG_RE.sub(r"\1", s)
    s = _PIPE_RE.sub(" | ", s)
    s = _EDGE_PIPES_RE.sub("", s)
    s = re.sub(r"\n{2,}", "\n", s)
    return s.strip()


def parse_lat_lon(s: Any) -> Tuple[Optional[float], Optional[float]]:
    text = as_text(s)
    if not text:
        return (None, None)
    m = _LAT_LON_RE.match(text)
    if not m:
        return (None, None)
    try:
        return (float(m.group(1)), float(m.group(2)))
    except ValueError:
        return (None, None)


def sanitize_key(name: Any) -> str:
    s = fold_text(name)
    s = re.sub(r"[^a-z0-9]+", "-", s).strip("-")
    return s or "unknown"
