"""IO helper utilities."""

from __future__ import annotations

import pandas as pd

from .logging import configure_logging, logger
from .normalization import strip_accents


# Spanish export headers and a few legacy spellings, keyed by their folded form.
COLUMN_ALIASES = {
    "nombre": "name",
    "cliente": "name",
    "empresa": "company",
    "telefono": "phone",
    "movil": "mobile_phone",
    "mobile": "mobile_phone",
    "correo": "email",
    "direccion": "address",
    "ciudad": "city",
    "municipio": "city",
    "localidad": "city",
    "provincia": "province",
    "notas": "notes",
    "observaciones": "notes",
    "cp": "postal_code",
    "codigo_postal": "postal_code",
    "latitud": "latitude",
    "lat": "latitude",
    "longitud": "longitude",
    "lng": "longitude",
    "lon": "longitude",
    "coordenadas": "coordinates",
    "contrato": "contract",
}


def setup_logging(verbose: bool) -> None:
    """Initialise project logging."""
    configure_logging(verbose)


def read_any_csv(path: str) -> pd.DataFrame:
    """Read a CSV file, trying a few delimiter heuristics."""
    for kwargs in (dict(sep=None, engine="python"), dict(sep=";"), dict()):
        try:
            df = pd.read_csv(path, dtype=str, keep_default_na=False, **kwargs)
            logger.debug("Loaded CSV %s with %s", path, kwargs)
            return df
        except Exception as exc:  # pragma: no cover - error handling is simple logging
            logger.debug("CSV read failed for %s with %s: %s", path, kwargs, exc)
    raise RuntimeError(f"Failed to read CSV: {path}")


def normalize_cols(df: pd.DataFrame) -> pd.DataFrame:
    """Return a copy with normalised column names."""
    df = df.copy()

    def _clean(col: object) -> str:
        s = str(col).replace("\ufeff", "")
        s = strip_accents(s.strip().lower()).replace(" ", "_")
        return COLUMN_ALIASES.get(s, s)

    cleaned = [_clean(c) for c in df.columns]
    # Keep the first of any columns that collapse onto the same name.
    keep = [i for i, name in enumerate(cleaned) if name not in cleaned[:i]]
    df = df.iloc[:, keep]
    df.columns = [cleaned[i] for i in keep]
    return df


def require_columns(df: pd.DataFrame, cols: set[str], label: str) -> None:
    """Ensure the expected columns are available."""
    missing = set(cols) - set(df.columns)
    if missing:
        raise RuntimeError(f"{label} missing columns: {sorted(missing)}")
