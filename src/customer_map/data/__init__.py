"""Data processing helpers for the customer map."""

from .sources import (
    CustomerSource,
    DataSourceError,
    InMemoryCustomerSource,
    CsvCustomerSource,
    SupabaseSettings,
    SupabaseCustomerSource,
    create_supabase_source,
)
from .pipeline import (
    PIPELINE_CACHE_FILES,
    UNRESOLVED_LABEL,
    resolve_customers,
    select_customers,
    selection_config,
    run_data_pipeline,
    write_cached_data,
    load_cached_data,
    cached_data_exists,
)
from .geometry import PROVINCE_BOUNDS, province_geometry, coords_outside_province
from .tables import (
    customers_table,
    provinces_table,
    rows_customers,
    rows_provinces,
    export_customers_csv,
)
from .cleanup import notes_migration_plan, city_case_plan, city_case_variations

__all__ = [
    "CustomerSource",
    "DataSourceError",
    "InMemoryCustomerSource",
    "CsvCustomerSource",
    "SupabaseSettings",
    "SupabaseCustomerSource",
    "create_supabase_source",
    "PIPELINE_CACHE_FILES",
    "UNRESOLVED_LABEL",
    "resolve_customers",
    "select_customers",
    "selection_config",
    "run_data_pipeline",
    "write_cached_data",
    "load_cached_data",
    "cached_data_exists",
    "PROVINCE_BOUNDS",
    "province_geometry",
    "coords_outside_province",
    "customers_table",
    "provinces_table",
    "rows_customers",
    "rows_provinces",
    "export_customers_csv",
    "notes_migration_plan",
    "city_case_plan",
    "city_case_variations",
]
