"""Table builders and exports for the customer map UI."""

from __future__ import annotations

import csv
from html import escape
from pathlib import Path

import pandas as pd

from ..core import as_text, logger


EXPORT_HEADER = ["nombre", "empresa", "teléfono", "email", "dirección", "ciudad", "provincia", "contrato", "notas"]


def customers_table(customers: pd.DataFrame) -> pd.DataFrame:
    tbl = customers[[
        "id",
        "name",
        "company",
        "display_city",
        "canonical_province",
        "province_key",
        "address",
        "has_coords",
        "coords_outside_province",
        "maps_url",
    ]].copy()
    tbl["name"] = tbl["name"].fillna("(Sin nombre)")
    return tbl


def provinces_table(customers: pd.DataFrame) -> pd.DataFrame:
    if customers.empty:
        return pd.DataFrame(columns=["province_label", "customers", "cities", "with_coords", "outside", "coords_pct"])
    df = customers.copy()
    df["province_label"] = df["canonical_province"].replace("", "(Sin provincia)")
    df["city_label"] = df["display_city"].replace("", pd.NA)
    tbl = df.groupby("province_label").agg(
        customers=("province_label", "size"),
        cities=("city_label", "nunique"),
        with_coords=("has_coords", "sum"),
        outside=("coords_outside_province", "sum"),
    ).reset_index()
    tbl["coords_pct"] = (tbl["with_coords"] / tbl["customers"] * 100).round(0).astype(int)
    return tbl.sort_values(["customers", "province_label"], ascending=[False, True])


def rows_customers(df: pd.DataFrame) -> str:
    rows = []
    for r in df.itertuples(index=False):
        name = as_text(r.name)
        company = as_text(r.company)
        city = as_text(r.display_city)
        province = as_text(r.canonical_province)
        search_terms = " ".join(val.lower() for val in (name, company, city, province) if val)
        flag = ' class="coords-warning"' if bool(r.coords_outside_province) else ""
        coords_cell = "✓" if bool(r.has_coords) else ""
        rows.append(
            f'<tr data-id="{escape(as_text(r.id))}" data-province="{escape(as_text(r.province_key))}" '
            f'data-search="{escape(search_terms)}"{flag}>'
            f'<td>{escape(name)}</td>'
            f'<td>{escape(company)}</td>'
            f'<td data-sort-value="{escape(city)}">{escape(city)}</td>'
            f'<td data-sort-value="{escape(province)}">{escape(province)}</td>'
            f'<td>{coords_cell}</td>'
            f'<td><a href="{escape(as_text(r.maps_url))}" target="_blank" rel="noopener">Mapa</a></td>'
            f'</tr>'
        )
    return "\n".join(rows)


def rows_provinces(df: pd.DataFrame) -> str:
    rows = []
    for r in df.itertuples(index=False):
        rows.append(
            f'<tr>'
            f'<td>{escape(str(r.province_label))}</td>'
            f'<td data-sort-value="{int(r.customers)}">{int(r.customers)}</td>'
            f'<td data-sort-value="{int(r.cities)}">{int(r.cities)}</td>'
            f'<td data-sort-value="{int(r.coords_pct)}">{int(r.coords_pct)}%</td>'
            f'<td data-sort-value="{int(r.outside)}">{int(r.outside)}</td>'
            f'</tr>'
        )
    return "\n".join(rows)


def export_customers_csv(customers: pd.DataFrame, path: str | Path) -> Path:
    """Write the Spanish customer export using resolved city/province."""
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    export = pd.DataFrame(
        {
            "nombre": customers["name"],
            "empresa": customers["company"],
            "teléfono": customers["phone"],
            "email": customers["email"],
            "dirección": customers["address"],
            "ciudad": customers["display_city"],
            "provincia": customers["canonical_province"],
            "contrato": customers["contract"],
            "notas": customers["notes"],
        },
        columns=EXPORT_HEADER,
    )
    export.fillna("").to_csv(target, index=False, quoting=csv.QUOTE_ALL, encoding="utf-8")
    logger.info("Exported %d customers to %s", len(customers), target)
    return target
