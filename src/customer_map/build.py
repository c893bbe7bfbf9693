"""High-level orchestration of the map build process."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import folium
import pandas as pd

from .core import setup_logging, logger
from .data import (
    CsvCustomerSource,
    CustomerSource,
    SupabaseSettings,
    cached_data_exists,
    city_case_plan,
    city_case_variations,
    create_supabase_source,
    customers_table,
    export_customers_csv,
    load_cached_data,
    notes_migration_plan,
    provinces_table,
    rows_customers,
    rows_provinces,
    run_data_pipeline,
    select_customers,
    selection_config,
    write_cached_data,
)
from .frontend import add_customer_layers, legend_html, sidebar_html, zoom_for_bounds


DEFAULT_CENTER = (36.9, -6.4)


def _ensure_output_path(path: Path) -> Path:
    """Relative outputs land under ``html/``; absolute ones are kept."""
    original = Path(path)
    if original.is_absolute():
        target = original
    else:
        target = original if original.parts and original.parts[0] == "html" else Path("html") / original
    target.parent.mkdir(parents=True, exist_ok=True)
    return target


def make_source(args) -> CustomerSource:
    if args.source == "supabase":
        settings = SupabaseSettings.from_env(dotenv_path=args.env_file)
        return create_supabase_source(settings)
    if not args.customers:
        raise RuntimeError("No customers CSV given; pass --customers or use --source supabase")
    return CsvCustomerSource(args.customers)


def render_map(
    customers: pd.DataFrame,
    filter_cfg: dict[str, Any],
    *,
    province: str = "",
    city: str = "",
    tiles: str = "cartodbpositron",
    sidebar_width: int = 480,
) -> tuple[folium.Map, pd.DataFrame]:
    selected = select_customers(customers, province, city)
    cfg = {**filter_cfg, **selection_config(customers, selected, province, city)}
    logger.info("Selected %d of %d customers (province=%r, city=%r)", len(selected), len(customers), province, city)

    bounds = cfg.get("bounds")
    if bounds:
        center = (bounds["center_lat"], bounds["center_lon"])
    else:
        center = DEFAULT_CENTER
    m = folium.Map(location=list(center), zoom_start=zoom_for_bounds(bounds), tiles=tiles)
    add_customer_layers(m, selected)
    if bounds and (bounds["lat_max"] > bounds["lat_min"] or bounds["lon_max"] > bounds["lon_min"]):
        m.fit_bounds([[bounds["lat_min"], bounds["lon_min"]], [bounds["lat_max"], bounds["lon_max"]]])

    c_tbl = customers_table(selected)
    p_tbl = provinces_table(selected)
    m.get_root().html.add_child(folium.Element(
        sidebar_html(rows_customers(c_tbl), rows_provinces(p_tbl), sidebar_width, cfg["selection"], len(selected))
    ))
    m.get_root().html.add_child(folium.Element(legend_html(cfg, sidebar_width)))
    return m, selected


def run_audit(source: CustomerSource, audit_dir: Path) -> dict[str, Path]:
    audit_dir = Path(audit_dir)
    audit_dir.mkdir(parents=True, exist_ok=True)
    records = source.fetch_customers()

    notes_plan = notes_migration_plan(records)
    case_plan, unmatched = city_case_plan(records)
    variations = city_case_variations(records)

    outputs = {
        "notes_migration": audit_dir / "notes_migration.csv",
        "city_case": audit_dir / "city_case.csv",
        "city_unmatched": audit_dir / "city_unmatched.csv",
        "city_variations": audit_dir / "city_variations.csv",
    }
    notes_plan.to_csv(outputs["notes_migration"], index=False)
    case_plan.to_csv(outputs["city_case"], index=False)
    pd.DataFrame({"city": unmatched}).to_csv(outputs["city_unmatched"], index=False)
    variations.to_csv(outputs["city_variations"], index=False)

    logger.info(
        "Audit of %d customers: %d notes to clean, %d cities to respell, %d cities outside the catalog, %d spelling groups",
        len(records),
        len(notes_plan),
        len(case_plan),
        len(unmatched),
        variations["folded"].nunique() if not variations.empty else 0,
    )
    return outputs


def build_map(args) -> None:
    setup_logging(args.verbose)

    if args.stage == "audit":
        run_audit(make_source(args), Path(args.audit_dir))
        return

    data_dir = Path(args.data_dir) if args.data_dir else None
    pipeline_data: dict[str, Any] | None = None

    if args.stage in {"data", "all"}:
        pipeline_data = run_data_pipeline(make_source(args))
        if data_dir:
            write_cached_data(pipeline_data, data_dir)
        else:
            logger.warning("Data stage requested but no data directory specified; skipping cache write")
        if args.stage == "data":
            return

    if pipeline_data is None:
        if data_dir and cached_data_exists(data_dir):
            pipeline_data = load_cached_data(data_dir)
        else:
            pipeline_data = run_data_pipeline(make_source(args))
            if data_dir:
                write_cached_data(pipeline_data, data_dir)

    m, selected = render_map(
        pipeline_data["customers"],
        pipeline_data["filter_config"],
        province=args.province,
        city=args.city,
        tiles=args.tiles,
        sidebar_width=args.sidebar_width,
    )
    output_path = _ensure_output_path(Path(args.out))
    m.save(str(output_path))
    logger.info("Wrote %s", output_path)

    if args.export:
        export_customers_csv(selected, args.export)
