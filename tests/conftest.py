"""Shared pytest fixtures for lens pricing tests."""

import os
from collections.abc import Generator
from datetime import date
from decimal import Decimal
from unittest.mock import patch

import polars as pl
import pytest

from lens_pricing.config import Settings
from lens_pricing.models import (
    Brand,
    ComparisonRequest,
    Practice,
    PracticeBrandPricing,
    PracticeQuarterlySettings,
    PricingUpdate,
    Role,
)
from lens_pricing.store import CatalogStore


@pytest.fixture
def mock_env_vars() -> Generator[dict[str, str], None, None]:
    """Set up mock environment variables for testing.

    Yields:
        Dictionary of mock environment variables.
    """
    env_vars = {
        "LOG_LEVEL": "DEBUG",
        "DATA_DIR": "/tmp/test_data",
        "COMPETITOR_NAME": "Lens Depot",
        "APPLY_PRACTICE_REBATE": "true",
        "CATALOG_PATH": "/tmp/test_data/catalog.csv",
    }
    with patch.dict(os.environ, env_vars, clear=False):
        yield env_vars


@pytest.fixture
def test_settings(mock_env_vars: dict[str, str]) -> Settings:
    """Create test settings with mock values."""
    return Settings.from_env()


@pytest.fixture
def sample_brand() -> Brand:
    """Monthly lens brand, Air Optix-like profile.

    Returns:
        Brand with 4 boxes/year at $38.99 and a $20 competitor rebate.
    """
    return Brand(
        id=3,
        name="Air Optix Aqua",
        boxes_per_year=4,
        competitor_price_per_box=Decimal("38.99"),
        competitor_annual_rebate=Decimal("20"),
        competitor_semiannual_rebate=Decimal("12"),
        competitor_first_time_discount_percent=Decimal("8"),
        replacement_schedule="monthly",
    )


@pytest.fixture
def sample_pricing() -> PracticeBrandPricing:
    """Practice pricing for the sample brand.

    Returns:
        $35.99/box, $20 new-wearer rebate, $10 existing-wearer rebate.
    """
    return PracticeBrandPricing(
        practice_id=2,
        brand_id=3,
        price_per_box=Decimal("35.99"),
        manufacturer_rebate_new=Decimal("20"),
        manufacturer_rebate_existing=Decimal("10"),
    )


@pytest.fixture
def sample_quarterly_settings() -> PracticeQuarterlySettings:
    """Quarterly rebates with distinct values per quarter and status."""
    return PracticeQuarterlySettings(
        new_wearer_rebate_q1=Decimal("15"),
        new_wearer_rebate_q2=Decimal("25"),
        new_wearer_rebate_q3=Decimal("35"),
        new_wearer_rebate_q4=Decimal("45"),
        existing_wearer_rebate_q1=Decimal("5"),
        existing_wearer_rebate_q2=Decimal("6"),
        existing_wearer_rebate_q3=Decimal("7"),
        existing_wearer_rebate_q4=Decimal("8"),
    )


@pytest.fixture
def new_wearer_request() -> ComparisonRequest:
    """New wearer request for the sample brand, no insurance."""
    return ComparisonRequest(brand_id=3, is_new_wearer=True)


@pytest.fixture
def store() -> CatalogStore:
    """Store seeded with the admin account and default catalog."""
    catalog = CatalogStore()
    catalog.seed_defaults()
    return catalog


@pytest.fixture
def admin(store: CatalogStore) -> Practice:
    """Seeded admin account."""
    return store.get_practice(1)


@pytest.fixture
def practice(store: CatalogStore) -> Practice:
    """Regular practice account."""
    return store.register_practice("Bright Eyes Optometry", "front@brighteyes.test")


@pytest.fixture
def priced_practice(store: CatalogStore, practice: Practice) -> Practice:
    """Practice that has priced Air Optix Aqua and Biofinity."""
    brands = {entry.brand.name: entry.brand for entry in store.available_brands(practice.id)}
    store.update_pricing(
        practice.id,
        brands["Air Optix Aqua"].id,
        PricingUpdate(
            price_per_box=Decimal("35.99"),
            manufacturer_rebate_new=Decimal("20"),
            manufacturer_rebate_existing=Decimal("10"),
        ),
    )
    store.update_pricing(
        practice.id,
        brands["Biofinity"].id,
        PricingUpdate(price_per_box=Decimal("40.00")),
    )
    return practice


@pytest.fixture
def fixed_clock():
    """Clock pinned to August 2026 (Q3)."""
    return lambda: date(2026, 8, 15)


@pytest.fixture
def sample_catalog_df() -> pl.DataFrame:
    """Sample brand catalog file contents."""
    return pl.DataFrame(
        {
            "Brand Name": ["Precision1", "Total30", "Clariti 1 Day"],
            "Boxes Per Year": [None, 4, None],
            "Replacement Schedule": ["daily", "monthly", "Daily"],
            "Competitor Price Per Box": [32.99, 44.50, 29.99],
            "Competitor Annual Rebate": [30.0, 20.0, None],
        }
    )


@pytest.fixture
def non_admin_actor() -> Practice:
    """Practice account using the admin email but with the practice role."""
    return Practice(id=99, name="Imposter", email="admin@contactlenstool.com", role=Role.PRACTICE)
