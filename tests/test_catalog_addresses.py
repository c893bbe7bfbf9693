from customer_map.core import (
    MUNICIPALITIES_BY_PROVINCE,
    address_for_maps,
    catalog_province,
    geocode_candidates,
    maps_directions_url,
    maps_search_url,
    standard_city_name,
)


def test_catalog_covers_provinces():
    assert set(MUNICIPALITIES_BY_PROVINCE) == {"Cádiz", "Huelva", "Ceuta"}
    assert "Bonares" in MUNICIPALITIES_BY_PROVINCE["Huelva"]


def test_standard_city_name():
    assert standard_city_name("alcala del valle") == "Alcalá del Valle"
    assert standard_city_name("  JEREZ DE LA FRONTERA ") == "Jerez de la Frontera"
    assert standard_city_name("Sevilla") == ""
    assert standard_city_name(None) == ""


def test_catalog_province():
    assert catalog_province("punta umbria") == "Huelva"
    assert catalog_province("Rota") == "Cádiz"
    assert catalog_province("Madrid") == ""


def test_address_for_maps_with_real_city():
    rec = {"address": "Calle Mayor 1", "city": "Bonares", "province": "Huelva"}
    assert address_for_maps(rec) == "Calle Mayor 1, Bonares, Huelva, España"


def test_address_for_maps_skips_repeated_province():
    rec = {"address": "Plaza de las Monjas 2", "city": "Huelva", "province": "Huelva"}
    assert address_for_maps(rec) == "Plaza de las Monjas 2, Huelva, España"


def test_address_for_maps_province_only():
    assert address_for_maps({"province": "Cádiz"}) == "Cádiz, España"


def test_geocode_candidates_without_address():
    rec = {"city": "Bonares", "province": "Huelva"}
    assert geocode_candidates(rec) == ["Bonares, Huelva, España", "Bonares, España", "Huelva, España"]


def test_geocode_candidates_full_record():
    rec = {"address": "Calle Real 5", "city": "Rota", "notes": "Provincia: cadiz"}
    assert geocode_candidates(rec)[0] == "Calle Real 5, Rota, Cádiz, España"
    assert geocode_candidates(rec)[-1] == "Calle Real 5"


def test_geocode_candidates_empty_record():
    assert geocode_candidates({}) == []


def test_maps_urls():
    rec = {"city": "Bonares", "province": "Huelva"}
    assert maps_search_url(rec) == (
        "https://www.google.com/maps/search/?api=1&query=Bonares%2C%20Huelva%2C%20Espa%C3%B1a"
    )
    assert maps_directions_url(rec).startswith("https://www.google.com/maps/dir/?api=1&destination=Bonares")
