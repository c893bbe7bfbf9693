import json

import pandas as pd
import pytest

from customer_map.build import _ensure_output_path, build_map, run_audit
from customer_map.cli import parse_args
from customer_map.data import InMemoryCustomerSource


CSV_TEXT = (
    "nombre,ciudad,provincia,notas,latitud,longitud\n"
    "Ana,Bonares,Huelva,,37.32,-6.68\n"
    "Luis,JEREZ DE LA FRONTERA,,Provincia: Cádiz,36.68,-6.13\n"
    "Rosa,Huelva,Cádiz,,36.53,-6.29\n"
)


def test_defaults():
    args = parse_args(["--customers", "clientes.csv"])
    assert args.stage == "all"
    assert args.source == "csv"
    assert args.province == ""
    assert args.city == ""
    assert args.sidebar_width == 480
    assert args.data_dir == ".preprocessed"


def test_customers_required_for_csv_source():
    with pytest.raises(SystemExit):
        parse_args([])


def test_frontend_stage_does_not_require_customers():
    args = parse_args(["--stage", "frontend"])
    assert args.customers is None


def test_supabase_source_does_not_require_customers():
    assert parse_args(["--source", "SUPABASE"]).source == "supabase"


def test_invalid_stage():
    with pytest.raises(SystemExit):
        parse_args(["--customers", "c.csv", "--stage", "deploy"])


def test_toml_config_sections(tmp_path):
    config = tmp_path / "map.toml"
    config.write_text(
        '[paths]\ncustomers = "clientes.csv"\nout = "clientes.html"\n'
        '[filters]\nprovince = " Huelva "\n'
        '[options]\nsidebar_width = "360"\nverbose = true\n',
        encoding="utf-8",
    )
    args = parse_args(["--config", str(config), "--city", "Lepe"])
    assert args.customers == "clientes.csv"
    assert args.out == "clientes.html"
    assert args.province == "Huelva"
    assert args.city == "Lepe"
    assert args.sidebar_width == 360
    assert args.verbose is True


def test_cli_flags_override_config(tmp_path):
    config = tmp_path / "map.json"
    config.write_text(json.dumps({"customers": "a.csv", "province": "Cádiz"}), encoding="utf-8")
    args = parse_args(["--config", str(config), "--customers", "b.csv"])
    assert args.customers == "b.csv"
    assert args.province == "Cádiz"


def test_bad_sidebar_width(tmp_path):
    config = tmp_path / "map.json"
    config.write_text(json.dumps({"customers": "a.csv", "sidebar_width": "wide"}), encoding="utf-8")
    with pytest.raises(ValueError):
        parse_args(["--config", str(config)])


def test_missing_and_unsupported_config(tmp_path):
    with pytest.raises(FileNotFoundError):
        parse_args(["--config", str(tmp_path / "nope.toml")])
    other = tmp_path / "map.yaml"
    other.write_text("customers: a.csv\n", encoding="utf-8")
    with pytest.raises(ValueError):
        parse_args(["--config", str(other)])


def test_build_map_end_to_end(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "clientes.csv").write_text(CSV_TEXT, encoding="utf-8")
    args = parse_args([
        "--customers", "clientes.csv",
        "--province", "cadiz",
        "--out", "map.html",
        "--export", "export/seleccion.csv",
        "--data-dir", "cache",
    ])
    build_map(args)

    assert (tmp_path / "html" / "map.html").exists()
    assert (tmp_path / "cache" / "customers.json").exists()
    exported = pd.read_csv(tmp_path / "export" / "seleccion.csv", dtype=str, keep_default_na=False)
    assert list(exported.columns) == [
        "nombre", "empresa", "teléfono", "email", "dirección", "ciudad", "provincia", "contrato", "notas",
    ]
    assert exported["nombre"].tolist() == ["Luis", "Rosa"]
    assert exported["ciudad"].tolist() == ["JEREZ DE LA FRONTERA", ""]
    assert exported["provincia"].tolist() == ["Cádiz", "Cádiz"]


def test_frontend_stage_reads_cache(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "clientes.csv").write_text(CSV_TEXT, encoding="utf-8")
    build_map(parse_args(["--customers", "clientes.csv", "--stage", "data", "--data-dir", "cache"]))
    assert not (tmp_path / "html").exists()

    (tmp_path / "clientes.csv").unlink()
    build_map(parse_args(["--stage", "frontend", "--data-dir", "cache", "--city", "Bonares"]))
    html = (tmp_path / "html" / "index.html").read_text(encoding="utf-8")
    assert "Ana" in html


def test_run_audit_writes_plans(tmp_path):
    source = InMemoryCustomerSource([
        {"id": "1", "city": "JEREZ DE LA FRONTERA", "notes": "Provincia: Cádiz"},
        {"id": "2", "city": "Jerez de la Frontera"},
        {"id": "3", "city": "Sevilla"},
    ])
    outputs = run_audit(source, tmp_path / "audit")
    assert all(path.exists() for path in outputs.values())
    notes = pd.read_csv(outputs["notes_migration"], dtype=str)
    assert notes["id"].tolist() == ["1"]
    case = pd.read_csv(outputs["city_case"], dtype=str)
    assert case["standard_city"].tolist() == ["Jerez de la Frontera"]
    unmatched = pd.read_csv(outputs["city_unmatched"], dtype=str)
    assert unmatched["city"].tolist() == ["Sevilla"]
    variations = pd.read_csv(outputs["city_variations"], dtype=str)
    assert set(variations["spelling"]) == {"JEREZ DE LA FRONTERA", "Jerez de la Frontera"}


def test_output_path_placement(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert _ensure_output_path("map.html").as_posix() == "html/map.html"
    assert _ensure_output_path("html/sub/map.html").as_posix() == "html/sub/map.html"
    absolute = tmp_path / "elsewhere" / "map.html"
    assert _ensure_output_path(absolute) == absolute
    assert absolute.parent.is_dir()


def test_build_map_respects_absolute_out(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "clientes.csv").write_text(CSV_TEXT, encoding="utf-8")
    target = tmp_path / "public" / "clientes.html"
    build_map(parse_args(["--customers", "clientes.csv", "--out", str(target), "--data-dir", "cache"]))
    assert target.exists()
    assert not (tmp_path / "html").exists()
