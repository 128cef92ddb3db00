"""Seed data for an empty catalog."""

from decimal import Decimal

from lens_pricing.models import Brand

DEFAULT_ADMIN_NAME = "Master Admin"
DEFAULT_ADMIN_EMAIL = "admin@contactlenstool.com"


def default_brands() -> list[Brand]:
    """Return the starter brand catalog.

    Returns:
        Fresh Brand instances (no ids) on every call.
    """
    return [
        Brand(
            name="Acuvue Oasys",
            boxes_per_year=4,
            competitor_price_per_box=Decimal("52.99"),
            competitor_annual_rebate=Decimal("25.00"),
            competitor_semiannual_rebate=Decimal("15.00"),
            competitor_first_time_discount_percent=Decimal("10.0"),
        ),
        Brand(
            name="Dailies Total1",
            boxes_per_year=12,
            competitor_price_per_box=Decimal("49.99"),
            competitor_annual_rebate=Decimal("30.00"),
            competitor_semiannual_rebate=Decimal("20.00"),
            competitor_first_time_discount_percent=Decimal("15.0"),
            replacement_schedule="daily",
        ),
        Brand(
            name="Air Optix Aqua",
            boxes_per_year=4,
            competitor_price_per_box=Decimal("38.99"),
            competitor_annual_rebate=Decimal("20.00"),
            competitor_semiannual_rebate=Decimal("12.00"),
            competitor_first_time_discount_percent=Decimal("8.0"),
            replacement_schedule="monthly",
        ),
        Brand(
            name="Biofinity",
            boxes_per_year=4,
            competitor_price_per_box=Decimal("35.99"),
            competitor_annual_rebate=Decimal("18.00"),
            competitor_semiannual_rebate=Decimal("10.00"),
            competitor_first_time_discount_percent=Decimal("5.0"),
            replacement_schedule="monthly",
        ),
        Brand(
            name="Acuvue Moist",
            boxes_per_year=12,
            competitor_price_per_box=Decimal("45.99"),
            competitor_annual_rebate=Decimal("25.00"),
            competitor_semiannual_rebate=Decimal("15.00"),
            competitor_first_time_discount_percent=Decimal("10.0"),
            replacement_schedule="daily",
        ),
    ]
