"""Data-quality plans for the customer table.

These helpers only describe changes; applying them against the backend is
left to whoever reviews the generated CSVs.
"""

from __future__ import annotations

from collections import defaultdict
from typing import Any, Iterable

import pandas as pd

from ..core import (
    CustomerRecord,
    as_text,
    catalog_province,
    extract_note_field,
    fold_text,
    standard_city_name,
    strip_location_tags,
)


NOTES_PLAN_COLUMNS = ["id", "name", "notes", "clean_notes", "city", "province"]
CITY_CASE_COLUMNS = ["id", "name", "city", "standard_city", "catalog_province"]
VARIATION_COLUMNS = ["folded", "spelling", "customers"]


def notes_migration_plan(records: Iterable[Any]) -> pd.DataFrame:
    """Move ``Ciudad:``/``Provincia:`` note tags into empty city/province fields.

    A row is emitted when the notes would change or a field can be filled;
    ``city``/``province`` hold the value to write, or ``None`` to leave the
    field alone.
    """
    rows = []
    for record in records:
        rec = CustomerRecord.coerce(record)
        original = as_text(rec.notes)
        if not original:
            continue
        clean = strip_location_tags(original)
        city = extract_note_field(original, "Ciudad")
        province = extract_note_field(original, "Provincia")
        new_city = city if city and not as_text(rec.city).strip() else None
        new_province = province if province and not as_text(rec.province).strip() else None
        if clean == original and new_city is None and new_province is None:
            continue
        rows.append({
            "id": rec.id,
            "name": rec.name,
            "notes": original,
            "clean_notes": clean or None,
            "city": new_city,
            "province": new_province,
        })
    return pd.DataFrame(rows, columns=NOTES_PLAN_COLUMNS)


def city_case_plan(records: Iterable[Any]) -> tuple[pd.DataFrame, list[str]]:
    """Cities whose spelling differs from the catalog, plus unknown cities."""
    rows = []
    unmatched: set[str] = set()
    for record in records:
        rec = CustomerRecord.coerce(record)
        current = as_text(rec.city).strip()
        if not current:
            continue
        standard = standard_city_name(current)
        if not standard:
            unmatched.add(current)
            continue
        if standard != current:
            rows.append({
                "id": rec.id,
                "name": rec.name,
                "city": current,
                "standard_city": standard,
                "catalog_province": catalog_province(standard),
            })
    return pd.DataFrame(rows, columns=CITY_CASE_COLUMNS), sorted(unmatched, key=fold_text)


def city_case_variations(records: Iterable[Any]) -> pd.DataFrame:
    """City spellings that collapse onto the same folded form."""
    spellings: dict[str, dict[str, int]] = defaultdict(lambda: defaultdict(int))
    for record in records:
        city = as_text(CustomerRecord.coerce(record).city).strip()
        if city:
            spellings[fold_text(city)][city] += 1
    rows = [
        {"folded": folded, "spelling": spelling, "customers": count}
        for folded, variants in sorted(spellings.items())
        if len(variants) > 1
        for spelling, count in sorted(variants.items())
    ]
    return pd.DataFrame(rows, columns=VARIATION_COLUMNS)
