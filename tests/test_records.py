from customer_map.core import CustomerRecord


def test_from_mapping_blanks_become_none():
    rec = CustomerRecord.from_mapping({"city": "  ", "province": "", "notes": None, "name": "Ana"})
    assert rec.city is None
    assert rec.province is None
    assert rec.notes is None
    assert rec.name == "Ana"


def test_from_mapping_coerces_non_strings():
    rec = CustomerRecord.from_mapping({"city": 123, "id": 7})
    assert rec.city == "123"
    assert rec.id == "7"


def test_from_mapping_coordinates():
    rec = CustomerRecord.from_mapping({"latitude": "37,25", "longitude": "-6.95"})
    assert rec.latitude == 37.25
    assert rec.longitude == -6.95
    assert rec.has_coordinates


def test_from_mapping_coordinates_column_fallback():
    rec = CustomerRecord.from_mapping({"coordinates": "36.53, -6.29"})
    assert (rec.latitude, rec.longitude) == (36.53, -6.29)


def test_from_mapping_bad_coordinates():
    rec = CustomerRecord.from_mapping({"latitude": "n/a", "longitude": float("nan")})
    assert rec.latitude is None
    assert not rec.has_coordinates


def test_from_mapping_alternate_field_names():
    rec = CustomerRecord.from_mapping({"mobile_phone": "600000000", "cp": "21001", "contrato": "Anual"})
    assert rec.phone == "600000000"
    assert rec.postal_code == "21001"
    assert rec.contract == "Anual"


def test_coerce():
    rec = CustomerRecord(city="Rota")
    assert CustomerRecord.coerce(rec) is rec
    assert CustomerRecord.coerce(None) == CustomerRecord()
    assert CustomerRecord.coerce({"city": "Rota"}).city == "Rota"
