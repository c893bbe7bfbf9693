"""Data pipeline orchestration for the customer map."""

from __future__ import annotations

import json
import math
import numbers
from pathlib import Path
from typing import Any, Iterable, Optional

import numpy as np
import pandas as pd

from ..core import (
    CustomerRecord,
    ProgressReporter,
    as_text,
    city_options,
    logger,
    maps_search_url,
    matches,
    province_options,
    resolve_geography,
    sanitize_key,
)
from .geometry import coords_outside_province
from .sources import CustomerSource


PIPELINE_CACHE_FILES = {
    "customers": "customers.json",
    "filters": "filter_config.json",
}

UNRESOLVED_LABEL = "(Sin provincia)"

CUSTOMER_COLUMNS = [
    "id",
    "name",
    "company",
    "email",
    "phone",
    "address",
    "postal_code",
    "city",
    "province",
    "notes",
    "contract",
    "lat",
    "lon",
    "canonical_province",
    "display_city",
    "province_key",
    "has_coords",
    "coords_outside_province",
    "maps_url",
]


def _customer_row(rec: CustomerRecord) -> dict[str, Any]:
    geo = resolve_geography(rec)
    return {
        "id": rec.id,
        "name": rec.name,
        "company": rec.company,
        "email": rec.email,
        "phone": rec.phone,
        "address": rec.address,
        "postal_code": rec.postal_code,
        "city": rec.city,
        "province": rec.province,
        "notes": rec.notes,
        "contract": rec.contract,
        "lat": rec.latitude,
        "lon": rec.longitude,
        "canonical_province": geo.canonical_province,
        "display_city": geo.display_city,
        "province_key": sanitize_key(geo.canonical_province) if geo.canonical_province else "unresolved",
        "has_coords": rec.has_coordinates,
        "coords_outside_province": coords_outside_province(rec.latitude, rec.longitude, geo.canonical_province),
        "maps_url": maps_search_url(rec),
    }


def resolve_customers(records: Iterable[CustomerRecord]) -> pd.DataFrame:
    rows = [_customer_row(CustomerRecord.coerce(rec)) for rec in records]
    df = pd.DataFrame(rows, columns=CUSTOMER_COLUMNS)
    df["lat"] = pd.to_numeric(df["lat"], errors="coerce")
    df["lon"] = pd.to_numeric(df["lon"], errors="coerce")
    return df


def frame_records(df: pd.DataFrame) -> list[CustomerRecord]:
    """Rebuild records from a resolved frame (e.g. one loaded from cache)."""
    renamed = df.rename(columns={"lat": "latitude", "lon": "longitude"})
    return [CustomerRecord.from_mapping(row) for row in renamed.to_dict(orient="records")]


def select_customers(
    df: pd.DataFrame,
    selected_province: Optional[str] = None,
    selected_city: Optional[str] = None,
) -> pd.DataFrame:
    """Rows matching the selectors, in their original order."""
    if df.empty:
        return df.copy()
    mask = [matches(rec, selected_province, selected_city) for rec in frame_records(df)]
    return df.loc[mask].reset_index(drop=True)


def _bounds(df: pd.DataFrame) -> dict[str, float] | None:
    valid = df.dropna(subset=["lat", "lon"])
    if valid.empty:
        return None
    return {
        "lat_min": float(valid["lat"].min()),
        "lat_max": float(valid["lat"].max()),
        "lon_min": float(valid["lon"].min()),
        "lon_max": float(valid["lon"].max()),
        "center_lat": float(valid["lat"].mean()),
        "center_lon": float(valid["lon"].mean()),
    }


def _province_counts(df: pd.DataFrame) -> list[dict[str, Any]]:
    labels = df["canonical_province"].replace("", UNRESOLVED_LABEL)
    counts = labels.value_counts()
    return [
        {
            "name": name,
            "count": int(count),
            "resolved": name != UNRESOLVED_LABEL,
            "key": sanitize_key(name) if name != UNRESOLVED_LABEL else "unresolved",
        }
        for name, count in counts.items()
    ]


def selection_config(
    df: pd.DataFrame,
    selected: pd.DataFrame,
    selected_province: Optional[str] = None,
    selected_city: Optional[str] = None,
) -> dict[str, Any]:
    records = frame_records(df)
    return {
        "selection": {
            "province": as_text(selected_province).strip(),
            "city": as_text(selected_city).strip(),
        },
        "city_options": city_options(records, selected_province),
        "bounds": _bounds(selected),
        "selected_totals": {
            "customers": int(len(selected)),
            "with_coords": int(selected["has_coords"].sum()) if not selected.empty else 0,
        },
    }


def run_data_pipeline(source: CustomerSource, *, progress: bool = True) -> dict[str, Any]:
    logger.info("Starting data pipeline")
    with ProgressReporter(4, label="Data stage", enabled=progress) as reporter:
        records = source.fetch_customers()
        reporter.step("Fetched customers")

        customers = resolve_customers(records)
        reporter.step("Resolved geography")

        total = len(customers)
        unresolved = int((customers["canonical_province"] == "").sum())
        no_city = int((customers["display_city"] == "").sum())
        missing_coords = int((~customers["has_coords"]).sum()) if total else 0
        outside = int(customers["coords_outside_province"].sum()) if total else 0
        if unresolved:
            logger.warning(
                "Province unresolved for %d of %d customers (%.1f%%)",
                unresolved,
                total,
                unresolved / total * 100.0,
            )
        if outside:
            sample = customers.loc[customers["coords_outside_province"], "name"].dropna().astype(str).head(10).tolist()
            logger.warning("Coordinates outside resolved province for %d customers, e.g. %s", outside, sample)
        logger.info(
            "Resolved %d customers (%d without display city, %d without coordinates)",
            total,
            no_city,
            missing_coords,
        )
        reporter.step("Checked data quality")

        filter_cfg = {
            "provinces": _province_counts(customers),
            "province_options": province_options(records),
            "bounds": _bounds(customers),
            "dataset_totals": {
                "customers": int(total),
                "with_coords": int(total - missing_coords),
                "provinces": int(customers.loc[customers["canonical_province"] != "", "canonical_province"].nunique()),
            },
        }
        reporter.step("Prepared filter metadata")
        reporter.finish("Data stage complete")

    data_quality = {
        "customers_total": int(total),
        "province_unresolved": unresolved,
        "display_city_missing": no_city,
        "coordinates_missing": missing_coords,
        "coordinates_outside_province": outside,
    }
    return {
        "customers": customers,
        "filter_config": filter_cfg,
        "metadata": {"data_quality": data_quality},
    }


def _write_cache(path: Path, payload: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as handle:
        json.dump(payload, handle, indent=2, ensure_ascii=False)


def _sanitize_value(value: Any) -> Any:
    if value is None:
        return None
    if isinstance(value, (np.ndarray, pd.Series, pd.Index)):
        return [_sanitize_value(v) for v in value.tolist()]
    if isinstance(value, (list, tuple, set)):
        return [_sanitize_value(v) for v in list(value)]
    if isinstance(value, dict):
        return {k: _sanitize_value(v) for k, v in value.items()}
    if isinstance(value, (np.bool_, bool)):
        return bool(value)
    if isinstance(value, numbers.Integral):
        return int(value)
    if isinstance(value, numbers.Real):
        if math.isnan(float(value)):
            return None
        return float(value)
    try:
        if pd.isna(value):  # type: ignore[arg-type]
            return None
    except (TypeError, ValueError):
        pass
    return value


def _sanitize_records(records: list[dict[str, Any]]) -> list[dict[str, Any]]:
    return [{k: _sanitize_value(v) for k, v in record.items()} for record in records]


def write_cached_data(data: dict[str, Any], data_dir: Path) -> None:
    data_dir = Path(data_dir)
    logger.info("Writing preprocessed artifacts to %s", data_dir)
    customer_records = _sanitize_records(data["customers"].to_dict(orient="records"))
    _write_cache(data_dir / PIPELINE_CACHE_FILES["customers"], customer_records)
    _write_cache(data_dir / PIPELINE_CACHE_FILES["filters"], _sanitize_value(data["filter_config"]))


def load_cached_data(data_dir: Path) -> dict[str, Any]:
    data_dir = Path(data_dir)
    logger.info("Loading preprocessed artifacts from %s", data_dir)

    with (data_dir / PIPELINE_CACHE_FILES["customers"]).open("r", encoding="utf-8") as handle:
        customer_records = json.load(handle)
    customers = pd.DataFrame(customer_records, columns=CUSTOMER_COLUMNS)
    customers["lat"] = pd.to_numeric(customers["lat"], errors="coerce")
    customers["lon"] = pd.to_numeric(customers["lon"], errors="coerce")
    for col in ("canonical_province", "display_city"):
        customers[col] = customers[col].fillna("")
    for col in ("has_coords", "coords_outside_province"):
        customers[col] = customers[col].fillna(False).astype(bool)

    with (data_dir / PIPELINE_CACHE_FILES["filters"]).open("r", encoding="utf-8") as handle:
        filter_cfg = json.load(handle)

    return {"customers": customers, "filter_config": filter_cfg}


def cached_data_exists(data_dir: Path) -> bool:
    data_dir = Path(data_dir)
    return all((data_dir / filename).exists() for filename in PIPELINE_CACHE_FILES.values())
