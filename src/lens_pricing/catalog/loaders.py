"""File loading utilities for brand catalog imports."""

import logging
from decimal import Decimal, InvalidOperation
from io import BytesIO
from pathlib import Path
from typing import BinaryIO

import pandas as pd
import polars as pl

from lens_pricing.catalog.schedules import normalize_schedule, resolve_boxes_per_year
from lens_pricing.catalog.validators import validate_brand, validate_catalog_schema
from lens_pricing.exceptions import ValidationError
from lens_pricing.models import ZERO, Brand

logger = logging.getLogger(__name__)

# Maps raw column names to standardized names
CATALOG_COLUMN_MAP = {
    "brand_name": "Brand Name",
    "Brand": "Brand Name",
    "boxes_per_annual": "Boxes Per Year",
    "boxes_per_year": "Boxes Per Year",
    "Boxes/Year": "Boxes Per Year",
    "replacement_schedule": "Replacement Schedule",
    "Schedule": "Replacement Schedule",
    "competitor_price_per_box": "Competitor Price Per Box",
    "competitor_annual_rebate": "Competitor Annual Rebate",
    "competitor_semiannual_rebate": "Competitor Semiannual Rebate",
    "competitor_first_time_discount_percent": "Competitor First Time Discount %",
    "is_active": "Active",
    "active": "Active",
}

MONEY_COLUMNS = {
    "Competitor Price Per Box": "competitor_price_per_box",
    "Competitor Annual Rebate": "competitor_annual_rebate",
    "Competitor Semiannual Rebate": "competitor_semiannual_rebate",
    "Competitor First Time Discount %": "competitor_first_time_discount_percent",
}


def load_excel_to_polars(
    file: BinaryIO | Path | str,
    sheet_name: str | int = 0,
) -> pl.DataFrame:
    """Load Excel file into Polars DataFrame.

    Uses pandas as intermediate step for Excel parsing (openpyxl backend).

    Args:
        file: File path, path string, or file-like object.
        sheet_name: Sheet name or index to load. Defaults to first sheet.

    Returns:
        Polars DataFrame with loaded data.

    Raises:
        ValueError: If file cannot be parsed as Excel.
    """
    logger.info(f"Loading Excel catalog, sheet: {sheet_name}")

    try:
        if isinstance(file, str):
            file = Path(file)

        pdf = pd.read_excel(file, sheet_name=sheet_name, engine="openpyxl")
        df = pl.from_pandas(pdf)

        logger.info(f"Loaded {df.height} rows, {df.width} columns")
        return df

    except Exception as e:
        logger.error(f"Failed to load Excel file: {e}")
        raise ValueError(f"Cannot parse Excel file: {e}") from e


def load_csv_to_polars(
    file: BinaryIO | Path | str,
    encoding: str = "utf8",
) -> pl.DataFrame:
    """Load CSV file into Polars DataFrame.

    Args:
        file: File path, path string, or file-like object.
        encoding: Character encoding.

    Returns:
        Polars DataFrame with loaded data.

    Raises:
        ValueError: If file cannot be parsed as CSV.
    """
    logger.info(f"Loading CSV catalog with encoding: {encoding}")

    try:
        if isinstance(file, str):
            file = Path(file)

        if not isinstance(file, Path):
            content = file.read()
            if isinstance(content, str):
                content = content.encode("utf-8")
            file = BytesIO(content)

        df = pl.read_csv(file, encoding=encoding, truncate_ragged_lines=True)

        logger.info(f"Loaded {df.height} rows, {df.width} columns")
        return df

    except Exception as e:
        logger.error(f"Failed to load CSV file: {e}")
        raise ValueError(f"Cannot parse CSV file: {e}") from e


def detect_file_type(filename: str) -> str:
    """Detect file type from filename extension.

    Args:
        filename: Name of the file (with extension).

    Returns:
        File type string: "excel" or "csv".

    Raises:
        ValueError: If file type is not supported.
    """
    lower_name = filename.lower()

    if lower_name.endswith((".xlsx", ".xls")):
        return "excel"
    elif lower_name.endswith(".csv"):
        return "csv"
    else:
        raise ValueError(
            f"Unsupported file type: {filename}. Supported types: .xlsx, .xls, .csv"
        )


def load_file_auto(
    file: BinaryIO | Path | str,
    filename: str | None = None,
    sheet_name: str | int = 0,
) -> pl.DataFrame:
    """Auto-detect file type and load appropriately.

    Args:
        file: File path, path string, or file-like object.
        filename: Filename for type detection (required if file is BinaryIO).
        sheet_name: Sheet name for Excel files.

    Returns:
        Polars DataFrame with loaded data.

    Raises:
        ValueError: If file type cannot be determined or file cannot be loaded.
    """
    if filename is None:
        if isinstance(file, Path):
            filename = file.name
        elif isinstance(file, str):
            filename = Path(file).name
        else:
            raise ValueError("filename must be provided for file-like objects")

    if detect_file_type(filename) == "excel":
        return load_excel_to_polars(file, sheet_name=sheet_name)
    return load_csv_to_polars(file)


def normalize_catalog(df: pl.DataFrame) -> pl.DataFrame:
    """Rename known column aliases to the standard catalog schema.

    Args:
        df: Raw catalog DataFrame.

    Returns:
        DataFrame with standard column names.
    """
    renames = {
        old: new
        for old, new in CATALOG_COLUMN_MAP.items()
        if old in df.columns and new not in df.columns
    }
    if renames:
        logger.debug(f"Renaming catalog columns: {renames}")
        df = df.rename(renames)
    return df


def _to_decimal(value: object, column: str, row_number: int) -> Decimal:
    if value is None or value == "":
        return ZERO
    try:
        result = Decimal(str(value).replace("$", "").replace(",", "").strip())
    except InvalidOperation as e:
        raise ValidationError(
            f"Row {row_number}: '{column}' is not a number: {value!r}"
        ) from e
    if not result.is_finite():
        raise ValidationError(
            f"Row {row_number}: '{column}' is not a finite number: {value!r}"
        )
    return result


def _to_boxes(value: object, row_number: int) -> int | None:
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise ValidationError(
            f"Row {row_number}: 'Boxes Per Year' is not a whole number: {value!r}"
        ) from e


def _to_bool(value: object) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip().lower() not in {"false", "no", "0", "n", ""}
    return bool(value)


def catalog_to_brands(df: pl.DataFrame) -> list[Brand]:
    """Convert a catalog DataFrame to validated Brand records.

    Boxes per year come from the Boxes Per Year column when present,
    otherwise from the replacement schedule table.

    Args:
        df: Catalog DataFrame (raw or normalized).

    Returns:
        List of brands in file order, without ids.

    Raises:
        ValidationError: If the schema or any row is invalid.
    """
    df = normalize_catalog(df)
    validate_catalog_schema(df).raise_if_invalid()

    brands = []
    for row_number, row in enumerate(df.iter_rows(named=True), start=1):
        schedule = row.get("Replacement Schedule") or None
        boxes = resolve_boxes_per_year(
            _to_boxes(row.get("Boxes Per Year"), row_number), schedule
        )
        brand = Brand(
            name=str(row["Brand Name"] or "").strip(),
            boxes_per_year=boxes if boxes is not None else 0,
            replacement_schedule=normalize_schedule(schedule) if schedule else None,
            active=_to_bool(row.get("Active")),
            **{
                attr: _to_decimal(row.get(column), column, row_number)
                for column, attr in MONEY_COLUMNS.items()
            },
        )

        result = validate_brand(brand)
        if not result.is_valid:
            raise ValidationError(f"Row {row_number}: {result.message}")
        brands.append(brand)

    logger.info(f"Parsed {len(brands)} brands from catalog")
    return brands


def load_catalog_file(
    file: BinaryIO | Path | str,
    filename: str | None = None,
) -> list[Brand]:
    """Load a brand catalog file (CSV or Excel) into Brand records.

    Args:
        file: File path, path string, or file-like object.
        filename: Filename for type detection (required if file is BinaryIO).

    Returns:
        List of validated brands.
    """
    return catalog_to_brands(load_file_auto(file, filename=filename))
