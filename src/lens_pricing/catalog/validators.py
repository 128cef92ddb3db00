"""Validation for catalog brands, practice pricing and catalog files."""

import logging
from dataclasses import dataclass, field, fields
from decimal import Decimal

import polars as pl

from lens_pricing.catalog.schedules import (
    BOXES_PER_YEAR_BY_SCHEDULE,
    normalize_schedule,
)
from lens_pricing.exceptions import ValidationError
from lens_pricing.models import Brand, PracticeQuarterlySettings, PricingUpdate

logger = logging.getLogger(__name__)


# Required columns for a brand catalog file (after column mapping)
# Boxes can come from "Boxes Per Year" OR "Replacement Schedule"
CATALOG_REQUIRED_COLUMNS = {"Brand Name"}
CATALOG_BOXES_COLUMNS = {"Boxes Per Year", "Replacement Schedule"}  # At least one
CATALOG_OPTIONAL_COLUMNS = {
    "Competitor Price Per Box",
    "Competitor Annual Rebate",
    "Competitor Semiannual Rebate",
    "Competitor First Time Discount %",
}

BRAND_MONEY_FIELDS = (
    "competitor_price_per_box",
    "competitor_annual_rebate",
    "competitor_semiannual_rebate",
    "competitor_first_time_discount_percent",
)


@dataclass
class ValidationResult:
    """Result of a validation check.

    Attributes:
        is_valid: Whether the validation passed.
        message: Human-readable description of the result.
        errors: Field-level problems that make the record invalid.
        missing_columns: Required columns that are missing (file checks).
        row_count: Number of rows in the validated DataFrame.
        warnings: Non-fatal issues detected.
    """

    is_valid: bool
    message: str
    errors: list[str] = field(default_factory=list)
    missing_columns: list[str] = field(default_factory=list)
    row_count: int = 0
    warnings: list[str] = field(default_factory=list)

    def raise_if_invalid(self) -> None:
        """Raise ValidationError carrying the message if invalid."""
        if not self.is_valid:
            raise ValidationError(self.message)


def _negative(value: Decimal | None) -> bool:
    return value is not None and value < 0


def validate_brand(brand: Brand) -> ValidationResult:
    """Validate a catalog brand before it is saved.

    Checks:
    - Brand name is present
    - Boxes per year is a positive integer
    - Competitor amounts are non-negative
    - Replacement schedule (if set) is known

    Args:
        brand: Brand to validate.

    Returns:
        ValidationResult with status and details.
    """
    errors = []

    if not brand.name or not brand.name.strip():
        errors.append("Brand name is required")

    if (
        isinstance(brand.boxes_per_year, bool)
        or not isinstance(brand.boxes_per_year, int)
        or brand.boxes_per_year < 1
    ):
        errors.append(
            f"Boxes per year must be a positive integer, got {brand.boxes_per_year!r}"
        )

    for name in BRAND_MONEY_FIELDS:
        if _negative(getattr(brand, name)):
            errors.append(f"{name} must be non-negative")

    if (
        brand.replacement_schedule
        and normalize_schedule(brand.replacement_schedule)
        not in BOXES_PER_YEAR_BY_SCHEDULE
    ):
        errors.append(f"Unknown replacement schedule: {brand.replacement_schedule}")

    if errors:
        return ValidationResult(
            is_valid=False,
            message=f"Invalid brand '{brand.name}': {'; '.join(errors)}",
            errors=errors,
        )

    return ValidationResult(is_valid=True, message=f"Brand '{brand.name}' is valid")


def validate_pricing_update(update: PricingUpdate) -> ValidationResult:
    """Validate the provided fields of a pricing update.

    Args:
        update: Partial pricing update.

    Returns:
        ValidationResult with status and details.
    """
    errors = [
        f"{name} must be non-negative"
        for name, value in update.changes().items()
        if name != "active" and _negative(value)
    ]

    if errors:
        return ValidationResult(
            is_valid=False,
            message=f"Invalid pricing: {'; '.join(errors)}",
            errors=errors,
        )

    warnings = []
    if not update.changes():
        warnings.append("Pricing update has no fields set")

    return ValidationResult(
        is_valid=True,
        message="Pricing update is valid",
        warnings=warnings,
    )


def validate_quarterly_settings(settings: PracticeQuarterlySettings) -> ValidationResult:
    """Validate that every quarterly rebate is non-negative.

    Args:
        settings: Quarterly settings to validate.

    Returns:
        ValidationResult with status and details.
    """
    errors = [
        f"{f.name} must be non-negative"
        for f in fields(settings)
        if _negative(getattr(settings, f.name))
    ]

    if errors:
        return ValidationResult(
            is_valid=False,
            message=f"Invalid quarterly settings: {'; '.join(errors)}",
            errors=errors,
        )

    return ValidationResult(is_valid=True, message="Quarterly settings are valid")


def validate_catalog_schema(df: pl.DataFrame) -> ValidationResult:
    """Validate brand catalog file schema.

    - Must contain a Brand Name column
    - Must contain at least one of Boxes Per Year or Replacement Schedule

    Args:
        df: DataFrame to validate (after column mapping).

    Returns:
        ValidationResult with status and details.
    """
    columns = set(df.columns)
    missing = CATALOG_REQUIRED_COLUMNS - columns

    if missing:
        return ValidationResult(
            is_valid=False,
            message=f"Catalog missing required columns: {sorted(missing)}",
            missing_columns=sorted(missing),
            row_count=df.height,
        )

    if not CATALOG_BOXES_COLUMNS & columns:
        return ValidationResult(
            is_valid=False,
            message=(
                "Catalog missing boxes column. "
                f"Need one of: {sorted(CATALOG_BOXES_COLUMNS)}"
            ),
            missing_columns=sorted(CATALOG_BOXES_COLUMNS),
            row_count=df.height,
        )

    warnings = []
    missing_optional = CATALOG_OPTIONAL_COLUMNS - columns
    if missing_optional:
        warnings.append(
            f"Catalog missing competitor columns (defaulting to 0): "
            f"{sorted(missing_optional)}"
        )

    if df.height == 0:
        warnings.append("Catalog has no rows")

    return ValidationResult(
        is_valid=True,
        message=f"Catalog schema valid with {df.height} rows",
        row_count=df.height,
        warnings=warnings,
    )
