import math

import pandas as pd
import pytest

from customer_map.core import (
    as_text,
    canonicalize_province,
    extract_note_field,
    fold_text,
    is_province_name,
    parse_lat_lon,
    sanitize_key,
    strip_location_tags,
)


@pytest.mark.parametrize("raw", ["Cádiz", "CADIZ", "cádiz ", "  Cadiz", "CÁDIZ"])
def test_canonicalize_province_ignores_case_and_accents(raw):
    assert canonicalize_province(raw) == "Cádiz"


@pytest.mark.parametrize("raw, expected", [
    ("huelva", "Huelva"),
    (" HUELVA ", "Huelva"),
    ("ceuta", "Ceuta"),
    ("", ""),
    ("Sevilla", ""),
    (None, ""),
    (42, ""),
])
def test_canonicalize_province_known_and_unknown(raw, expected):
    assert canonicalize_province(raw) == expected


def test_as_text_treats_null_likes_as_empty():
    assert as_text(None) == ""
    assert as_text(math.nan) == ""
    assert as_text(pd.NA) == ""
    assert as_text(12) == "12"


def test_fold_text():
    assert fold_text("  Alcalá del Valle ") == "alcala del valle"


def test_is_province_name_is_exact():
    assert is_province_name("Huelva")
    assert is_province_name("Cádiz")
    assert not is_province_name("cadiz")
    assert not is_province_name("Bonares")
    assert not is_province_name(None)


def test_extract_note_field_reads_to_end_of_line():
    notes = "Cliente habitual\nCIUDAD:  Bonares \nProvincia: Huelva"
    assert extract_note_field(notes, "Ciudad") == "Bonares"
    assert extract_note_field(notes, "Provincia") == "Huelva"
    assert extract_note_field(notes, "Contrato") == ""
    assert extract_note_field(None, "Provincia") == ""


def test_extract_note_field_blank_value():
    assert extract_note_field("Provincia:   \nHuelva", "Provincia") == ""


@pytest.mark.parametrize("notes, expected", [
    ("Cliente VIP | Provincia: Huelva | Ciudad: Bonares", "Cliente VIP"),
    ("Provincia: Huelva\nLlamar por la tarde", "Llamar por la tarde"),
    ("Llamar por la tarde\nProvincia: Cádiz\nCiudad: Rota\nPedido mensual", "Llamar por la tarde\nPedido mensual"),
    ("Provincia: Huelva", ""),
    ("Sin etiquetas", "Sin etiquetas"),
    (None, ""),
])
def test_strip_location_tags(notes, expected):
    assert strip_location_tags(notes) == expected


def test_parse_lat_lon():
    assert parse_lat_lon("37.25, -6.95") == (37.25, -6.95)
    assert parse_lat_lon("not a point") == (None, None)
    assert parse_lat_lon(None) == (None, None)


def test_sanitize_key():
    assert sanitize_key("Cádiz") == "cadiz"
    assert sanitize_key("La Línea de la Concepción") == "la-linea-de-la-concepcion"
    assert sanitize_key("") == "unknown"
