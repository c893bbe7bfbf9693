"""Typed customer records, validated once where rows enter the package."""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass, fields
from typing import Any, Mapping, NamedTuple, Optional

from .normalization import as_text, parse_lat_lon


@dataclass(frozen=True)
class CustomerRecord:
    """A customer row as stored by the backend.

    Only ``city``, ``province`` and ``notes`` feed geography resolution; the
    remaining fields are carried along for tables, popups and exports.
    """

    city: Optional[str] = None
    province: Optional[str] = None
    notes: Optional[str] = None
    id: Optional[str] = None
    name: Optional[str] = None
    company: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    postal_code: Optional[str] = None
    contract: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    @classmethod
    def from_mapping(cls, row: Mapping[str, Any]) -> "CustomerRecord":
        values: dict[str, Any] = {}
        for f in fields(cls):
            if f.name in ("latitude", "longitude"):
                continue
            values[f.name] = _optional_text(row.get(f.name))
        if values["phone"] is None:
            values["phone"] = _optional_text(row.get("mobile_phone"))
        if values["postal_code"] is None:
            values["postal_code"] = _optional_text(row.get("cp"))
        if values["contract"] is None:
            values["contract"] = _optional_text(row.get("contrato"))

        lat = _optional_float(row.get("latitude"))
        lon = _optional_float(row.get("longitude"))
        if lat is None or lon is None:
            lat, lon = parse_lat_lon(row.get("coordinates"))
        values["latitude"] = lat
        values["longitude"] = lon
        return cls(**values)

    @classmethod
    def coerce(cls, record: Any) -> "CustomerRecord":
        if isinstance(record, cls):
            return record
        if record is None:
            return cls()
        if isinstance(record, Mapping):
            return cls.from_mapping(record)
        return cls.from_mapping({f.name: getattr(record, f.name, None) for f in fields(cls)})

    @property
    def has_coordinates(self) -> bool:
        return self.latitude is not None and self.longitude is not None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


class ResolvedGeography(NamedTuple):
    canonical_province: str
    display_city: str


def _optional_text(value: Any) -> Optional[str]:
    s = as_text(value)
    return s if s.strip() else None


def _optional_float(value: Any) -> Optional[float]:
    s = as_text(value).strip().replace(",", ".")
    if not s:
        return None
    try:
        number = float(s)
    except ValueError:
        return None
    return None if math.isnan(number) else number
