"""Resolve a customer's canonical province and display city.

City and province are free-text fields filled in inconsistently at data
entry, so nothing here raises: an unresolvable value comes back as ``""``.

Province resolution tries, in order:

1. the ``province`` field, when it is non-blank (an unrecognised value
   resolves to ``""`` and still ends the search);
2. a ``Provincia: <value>`` line in the notes;
3. a ``city`` that is itself one of the province names, as left behind by
   records entered without a real city.
"""

from __future__ import annotations

from typing import Any

from .normalization import (
    as_text,
    canonicalize_province,
    extract_note_field,
    is_province_name,
)
from .records import CustomerRecord, ResolvedGeography


NOTES_PROVINCE_LABEL = "Provincia"


def resolve_province(record: Any) -> str:
    rec = CustomerRecord.coerce(record)

    province = as_text(rec.province).strip()
    if province:
        return canonicalize_province(province)

    from_notes = extract_note_field(rec.notes, NOTES_PROVINCE_LABEL)
    if from_notes:
        return canonicalize_province(from_notes)

    city = as_text(rec.city).strip()
    if is_province_name(city):
        return canonicalize_province(city)
    return ""


def resolve_display_city(record: Any) -> str:
    rec = CustomerRecord.coerce(record)
    city = as_text(rec.city).strip()
    if not city:
        return ""
    if not is_province_name(city):
        return city
    # Placeholder city: only trust it when it agrees with the province.
    return city if city == resolve_province(rec) else ""


def resolve_geography(record: Any) -> ResolvedGeography:
    rec = CustomerRecord.coerce(record)
    return ResolvedGeography(
        canonical_province=resolve_province(rec),
        display_city=resolve_display_city(rec),
    )
