from __future__ import annotations
import argparse
import json
import tomllib
from pathlib import Path
from typing import Sequence

DEFAULT_OUT = "html/index.html"
DEFAULT_TILES = "cartodbpositron"
DEFAULT_SIDEBAR_WIDTH = 480
DEFAULT_STAGE = "all"
DEFAULT_SOURCE = "csv"
DEFAULT_DATA_DIR = ".preprocessed"
DEFAULT_AUDIT_DIR = "audit"
STAGES = ("frontend", "data", "all", "audit")
SOURCES = ("csv", "supabase")

def _load_config(path: str) -> dict[str, object]:
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")
    suffix = config_path.suffix.lower()
    if suffix in {".toml", ".tml"}:
        return tomllib.loads(config_path.read_text(encoding="utf-8"))
    if suffix == ".json":
        return json.loads(config_path.read_text(encoding="utf-8"))
    raise ValueError(f"Unsupported config format: {config_path.suffix}")

def _merge_config(args: argparse.Namespace, config: dict[str, object]) -> None:
    # Allow optional grouping inside the config (e.g. {"paths": {...}}).
    flat = {}
    if config:
        flat.update(config)
        for key in ("paths", "options", "filters"):
            section = config.get(key)
            if isinstance(section, dict):
                flat.update(section)

    defaults = {
        "customers": None,
        "source": DEFAULT_SOURCE,
        "province": None,
        "city": None,
        "out": DEFAULT_OUT,
        "export": None,
        "tiles": DEFAULT_TILES,
        "sidebar_width": DEFAULT_SIDEBAR_WIDTH,
        "stage": DEFAULT_STAGE,
        "data_dir": DEFAULT_DATA_DIR,
        "audit_dir": DEFAULT_AUDIT_DIR,
        "env_file": None,
    }

    for field, default in defaults.items():
        current = getattr(args, field)
        if current is None:
            value = flat.get(field, default)
            setattr(args, field, value)
    if not args.verbose and isinstance(flat.get("verbose"), bool):
        args.verbose = flat["verbose"]

    # Type coercion for numeric fields after merging
    if args.sidebar_width is not None:
        try:
            args.sidebar_width = int(args.sidebar_width)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"sidebar_width must be an integer (got {args.sidebar_width!r})") from exc

    args.stage = args.stage.lower() if isinstance(args.stage, str) else DEFAULT_STAGE
    args.source = args.source.lower() if isinstance(args.source, str) else DEFAULT_SOURCE
    args.data_dir = DEFAULT_DATA_DIR if args.data_dir is None else str(args.data_dir)
    for field in ("province", "city"):
        value = getattr(args, field)
        setattr(args, field, str(value).strip() if value is not None else "")

def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Build the customer map")
    ap.add_argument("--config", help="Optional TOML/JSON config file with argument defaults")
    ap.add_argument("--customers", help="Customers CSV (city, province, notes, ...)")
    ap.add_argument("--source", help=f"Where customers come from: {', '.join(SOURCES)} (default: {DEFAULT_SOURCE})")
    ap.add_argument("--env-file", help="Optional .env file with Supabase settings")
    ap.add_argument("--province", help="Only show customers in this province")
    ap.add_argument("--city", help="Only show customers in this city")
    ap.add_argument("--out", help=f"Output HTML; relative paths are placed under html/ (default: {DEFAULT_OUT})")
    ap.add_argument("--export", help="Also write the selected customers to this CSV")
    ap.add_argument("--tiles", help=f"Folium tile set (default: {DEFAULT_TILES})")
    ap.add_argument("--sidebar-width", type=int, help=f"Sidebar width in px (default: {DEFAULT_SIDEBAR_WIDTH})")
    ap.add_argument("--stage", default=None, help="Which stage to run: data, frontend, all, or audit")
    ap.add_argument("--data-dir", default=None, help=f"Directory to read/write preprocessed data (default: {DEFAULT_DATA_DIR})")
    ap.add_argument("--audit-dir", default=None, help=f"Directory for audit CSVs (default: {DEFAULT_AUDIT_DIR})")
    ap.add_argument("-v", "--verbose", action="store_true", help="Verbose logging")
    return ap

def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    ap = build_parser()
    args = ap.parse_args(argv)

    if args.config:
        config = _load_config(args.config)
        _merge_config(args, config)
    else:
        # Apply defaults even without config
        _merge_config(args, {})

    if args.stage not in STAGES:
        ap.error(f"stage must be one of: {', '.join(STAGES)}")
    if args.source not in SOURCES:
        ap.error(f"source must be one of: {', '.join(SOURCES)}")
    if args.source == "csv" and args.customers is None and args.stage != "frontend":
        ap.error("the following arguments are required (supply via CLI or config): customers")

    return args
