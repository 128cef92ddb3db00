"""Brand catalog module for the lens pricing engine.

This module handles:
- Replacement schedule to boxes-per-year lookup
- Validating brands, pricing and catalog files
- Loading catalog files (CSV/Excel) into Brand records
- Fuzzy brand name search
"""

from lens_pricing.catalog.defaults import default_brands
from lens_pricing.catalog.loaders import (
    catalog_to_brands,
    detect_file_type,
    load_catalog_file,
    load_csv_to_polars,
    load_excel_to_polars,
    load_file_auto,
    normalize_catalog,
)
from lens_pricing.catalog.schedules import (
    BOXES_PER_YEAR_BY_SCHEDULE,
    boxes_for_schedule,
    resolve_boxes_per_year,
)
from lens_pricing.catalog.search import find_brand, search_brands
from lens_pricing.catalog.validators import (
    ValidationResult,
    validate_brand,
    validate_catalog_schema,
    validate_pricing_update,
    validate_quarterly_settings,
)

__all__ = [
    # Schedules
    "BOXES_PER_YEAR_BY_SCHEDULE",
    "boxes_for_schedule",
    "resolve_boxes_per_year",
    # Loaders
    "load_excel_to_polars",
    "load_csv_to_polars",
    "load_file_auto",
    "detect_file_type",
    "normalize_catalog",
    "catalog_to_brands",
    "load_catalog_file",
    # Validators
    "ValidationResult",
    "validate_brand",
    "validate_pricing_update",
    "validate_quarterly_settings",
    "validate_catalog_schema",
    # Search
    "find_brand",
    "search_brands",
    # Seed data
    "default_brands",
]
