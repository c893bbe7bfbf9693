"""Province/city selectors applied to customer collections.

An empty, missing or whitespace-only selector places no constraint on its
dimension. Any other city selector is compared exactly as given. The city
selector is deliberately broad: it also matches the resolved province
and the raw ``city`` field, so picking "Huelva" as a city still finds
records that only carry the province as a placeholder city.
"""

from __future__ import annotations

from typing import Any, Iterable, Optional

from .normalization import as_text, canonicalize_province, fold_text
from .records import CustomerRecord
from .resolver import resolve_display_city, resolve_province


def matches(record: Any, selected_province: Optional[str] = None, selected_city: Optional[str] = None) -> bool:
    rec = CustomerRecord.coerce(record)
    province_sel = as_text(selected_province).strip()
    city_sel = as_text(selected_city)

    canonical = resolve_province(rec)
    if province_sel and canonicalize_province(canonical) != canonicalize_province(province_sel):
        return False
    if not city_sel.strip():
        return True

    display_city = resolve_display_city(rec)
    raw_city = as_text(rec.city).strip()
    return city_sel in (display_city, canonical, raw_city)


def filter_customers(
    records: Iterable[Any],
    selected_province: Optional[str] = None,
    selected_city: Optional[str] = None,
) -> list[Any]:
    """Keep the records matching both selectors, in their original order."""
    return [rec for rec in records if matches(rec, selected_province, selected_city)]


def province_options(records: Iterable[Any]) -> list[str]:
    provinces = {resolve_province(rec) for rec in records}
    provinces.discard("")
    return sorted(provinces, key=_sort_key)


def city_options(records: Iterable[Any], province: Optional[str] = None) -> list[str]:
    """Distinct display cities, limited to ``province`` when one is given."""
    wanted = canonicalize_province(province) if as_text(province).strip() else None
    cities = set()
    for rec in records:
        if wanted is not None and resolve_province(rec) != wanted:
            continue
        city = resolve_display_city(rec)
        if city:
            cities.add(city)
    return sorted(cities, key=_sort_key)


def _sort_key(name: str) -> tuple[str, str]:
    return (fold_text(name), name)
