"""Standard municipality names for the provinces the CRM covers."""

from __future__ import annotations

from typing import Any, Dict, Tuple

from .normalization import fold_text


MUNICIPALITIES_BY_PROVINCE: Dict[str, Tuple[str, ...]] = {
    "Cádiz": (
        "Alcalá de los Gazules", "Alcalá del Valle", "Algar", "Algeciras", "Algodonales",
        "Arcos de la Frontera", "Barbate", "Benalup-Casas Viejas", "Benaocaz", "Bornos",
        "El Bosque", "Cádiz", "Castellar de la Frontera", "Chiclana de la Frontera", "Chipiona",
        "Conil de la Frontera", "Espera", "El Gastor", "Grazalema", "Jerez de la Frontera",
        "Jimena de la Frontera", "La Línea de la Concepción", "Los Barrios", "Medina-Sidonia",
        "Olvera", "Paterna de Rivera", "Prado del Rey", "El Puerto de Santa María", "Puerto Real",
        "Puerto Serrano", "Rota", "San Fernando", "San José del Valle", "San Roque",
        "Sanlúcar de Barrameda", "Setenil de las Bodegas", "Tarifa", "Torre Alháquime",
        "Trebujena", "Ubrique", "Vejer de la Frontera", "Villaluenga del Rosario", "Villamartín",
        "Zahara",
    ),
    "Huelva": (
        "Alájar", "Aljaraque", "Almendro", "Almonaster la Real", "Almonte", "Alosno", "Aracena",
        "Aroche", "Arroyomolinos de León", "Ayamonte", "Beas", "Berrocal",
        "Bollullos Par del Condado", "Bonares", "Cabezas Rubias", "Cala", "Calañas", "El Campillo",
        "Campofrío", "Cañaveral de León", "Cartaya", "Castaño del Robledo", "El Cerro de Andévalo",
        "Corteconcepción", "Cortegana", "Cortelazor", "Cumbres de Enmedio",
        "Cumbres de San Bartolomé", "Cumbres Mayores", "Encinasola", "Escacena del Campo",
        "Fuenteheridos", "Galaroza", "El Granado", "La Granada de Río-Tinto", "Gibraleón",
        "Higuera de la Sierra", "Hinojales", "Hinojos", "Huelva", "Isla Cristina", "Jabugo", "Lepe",
        "Linares de la Sierra", "Lucena del Puerto", "Manzanilla", "Marines", "Minas de Riotinto",
        "Moguer", "La Nava", "Nerva", "Niebla", "Palos de la Frontera", "La Palma del Condado",
        "Paterna del Campo", "Paymogo", "Puebla de Guzmán", "Puerto Moral", "Punta Umbría",
        "Rociana del Condado", "Rosal de la Frontera", "San Bartolomé de la Torre",
        "San Juan del Puerto", "San Silvestre de Guzmán", "Sanlúcar de Guadiana",
        "Santa Ana la Real", "Santa Bárbara de Casa", "Santa Olalla del Cala", "Trigueros",
        "Valdelarco", "Valverde del Camino", "Villablanca", "Villalba del Alcor",
        "Villanueva de las Cruces", "Villanueva de los Castillejos", "Villarrasa",
        "Zalamea la Real", "Zufre",
    ),
    "Ceuta": ("Ceuta",),
}

_STANDARD_BY_FOLDED = {
    fold_text(city): city
    for cities in MUNICIPALITIES_BY_PROVINCE.values()
    for city in cities
}
_PROVINCE_BY_CITY = {
    city: province
    for province, cities in MUNICIPALITIES_BY_PROVINCE.items()
    for city in cities
}


def standard_city_name(raw: Any) -> str:
    """Catalog spelling of ``raw`` ignoring case and accents, or ''."""
    return _STANDARD_BY_FOLDED.get(fold_text(raw), "")


def catalog_province(city: Any) -> str:
    return _PROVINCE_BY_CITY.get(standard_city_name(city), "")
