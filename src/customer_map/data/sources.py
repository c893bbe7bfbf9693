"""Where customer rows come from.

Every source hands back validated :class:`CustomerRecord` objects. Sources
are built explicitly and passed to the pipeline; the Supabase source takes
a ready-made client so tests can hand it a fake.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Mapping, Optional, Protocol

from dotenv import load_dotenv
from supabase import create_client

from ..core import CustomerRecord, logger, normalize_cols, read_any_csv, require_columns


CSV_REQUIRED_COLUMNS = {"city", "province"}
CSV_OPTIONAL_COLUMNS = ("notes",)
SUPABASE_PAGE_SIZE = 1000


class DataSourceError(RuntimeError):
    """Raised when customer rows cannot be fetched."""


class CustomerSource(Protocol):
    def fetch_customers(self) -> list[CustomerRecord]:
        ...


class InMemoryCustomerSource:
    def __init__(self, records: Iterable[Any]) -> None:
        self._records = [CustomerRecord.coerce(rec) for rec in records]

    def fetch_customers(self) -> list[CustomerRecord]:
        return list(self._records)


class CsvCustomerSource:
    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def fetch_customers(self) -> list[CustomerRecord]:
        df = normalize_cols(read_any_csv(str(self.path)))
        require_columns(df, CSV_REQUIRED_COLUMNS, "Customers CSV")
        for col in CSV_OPTIONAL_COLUMNS:
            if col not in df.columns:
                logger.debug("Customers CSV has no %s column; treating it as empty", col)
                df[col] = None
        records = [CustomerRecord.from_mapping(row) for row in df.to_dict(orient="records")]
        logger.info("Loaded %d customers from %s", len(records), self.path)
        return records


@dataclass(frozen=True)
class SupabaseSettings:
    url: str
    key: str
    table: str = "customers"
    owner_id: Optional[str] = None

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None, *, dotenv_path: Optional[str] = None) -> "SupabaseSettings":
        if env is None:
            load_dotenv(dotenv_path)
            env = os.environ
        url = env.get("SUPABASE_URL") or env.get("VITE_SUPABASE_URL")
        key = env.get("SUPABASE_SERVICE_ROLE_KEY") or env.get("SUPABASE_KEY")
        if not url or not key:
            raise DataSourceError(
                "Supabase settings missing: set SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY (or SUPABASE_KEY)"
            )
        return cls(
            url=url,
            key=key,
            table=env.get("SUPABASE_CUSTOMERS_TABLE") or "customers",
            owner_id=env.get("SUPABASE_OWNER_ID") or None,
        )


class SupabaseCustomerSource:
    def __init__(
        self,
        client: Any,
        table: str = "customers",
        owner_id: Optional[str] = None,
        page_size: int = SUPABASE_PAGE_SIZE,
    ) -> None:
        self.client = client
        self.table = table
        self.owner_id = owner_id
        self.page_size = max(int(page_size), 1)

    def _query(self, start: int):
        query = self.client.table(self.table).select("*")
        if self.owner_id:
            query = query.eq("created_by", self.owner_id)
        return query.order("name").order("id").range(start, start + self.page_size - 1)

    def fetch_customers(self) -> list[CustomerRecord]:
        rows: list[dict[str, Any]] = []
        start = 0
        while True:
            try:
                response = self._query(start).execute()
            except Exception as exc:
                raise DataSourceError(f"Supabase query on {self.table!r} failed: {exc}") from exc
            page = response.data or []
            rows.extend(page)
            logger.debug("Fetched %d rows from %s (offset %d)", len(page), self.table, start)
            if len(page) < self.page_size:
                break
            start += self.page_size
        logger.info("Loaded %d customers from Supabase table %s", len(rows), self.table)
        return [CustomerRecord.from_mapping(row) for row in rows]


def create_supabase_source(settings: SupabaseSettings) -> SupabaseCustomerSource:
    client = create_client(settings.url, settings.key)
    return SupabaseCustomerSource(client, table=settings.table, owner_id=settings.owner_id)
