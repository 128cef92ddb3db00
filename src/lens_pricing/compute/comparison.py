"""Practice vs online competitor cost comparison.

Formulas (all amounts annual):
- Practice Subtotal = Practice Price/Box × Boxes/Year
- In Office Today = max(0, Practice Subtotal - Insurance Benefit)
- Practice Final = max(0, In Office Today - Manufacturer Rebate)
- Competitor Subtotal = Competitor Price/Box × Boxes/Year
- Competitor Final = max(0, Competitor Subtotal - Competitor Annual Rebate)
- Savings = Competitor Final - Practice Final
- Savings % = Savings / Competitor Final × 100 (0 when Competitor Final is 0)

The quarterly practice rebate is reported but only subtracted when
apply_practice_rebate is set.
"""

import logging
from decimal import Decimal

from lens_pricing.config import DEFAULT_COMPETITOR_NAME
from lens_pricing.exceptions import NotFoundError, ValidationError
from lens_pricing.models import (
    ZERO,
    Brand,
    ComparisonRequest,
    ComparisonResult,
    CompetitorCost,
    PracticeBrandPricing,
    PracticeCost,
    PracticeQuarterlySettings,
    Quarter,
    Savings,
    WearerStatus,
)

logger = logging.getLogger(__name__)

HUNDRED = Decimal("100")


def _clamp(amount: Decimal) -> Decimal:
    return max(ZERO, amount)


def calculate_subtotal(price_per_box: Decimal | None, boxes_per_year: int) -> Decimal:
    """Calculate the annual supply cost before any deductions.

    Args:
        price_per_box: Price of one box (None is treated as zero).
        boxes_per_year: Boxes in an annual supply.

    Returns:
        Annual subtotal.
    """
    return (price_per_box or ZERO) * boxes_per_year


def calculate_practice_cost(
    brand: Brand,
    pricing: PracticeBrandPricing,
    practice_rebate: Decimal,
    is_new_wearer: bool,
    insurance_benefit: Decimal,
    apply_practice_rebate: bool = False,
) -> PracticeCost:
    """Calculate what the patient pays the practice.

    Args:
        brand: Catalog brand supplying boxes per year.
        pricing: Practice's price and manufacturer rebates for the brand.
        practice_rebate: Quarterly practice rebate for this wearer status.
        is_new_wearer: Selects the new or existing manufacturer rebate.
        insurance_benefit: Insurance amount applied in office.
        apply_practice_rebate: Subtract the practice rebate from the final amount.

    Returns:
        PracticeCost breakdown.
    """
    price_per_box = pricing.price_per_box or ZERO
    manufacturer_rebate = pricing.manufacturer_rebate(is_new_wearer)

    subtotal = calculate_subtotal(price_per_box, brand.boxes_per_year)
    in_office_today = _clamp(subtotal - insurance_benefit)
    final_amount = _clamp(in_office_today - manufacturer_rebate)

    if apply_practice_rebate:
        final_amount = _clamp(final_amount - practice_rebate)

    logger.debug(
        f"Practice cost for {brand.name}: ${price_per_box} × {brand.boxes_per_year} "
        f"= ${subtotal}, - ${insurance_benefit} insurance = ${in_office_today}, "
        f"- ${manufacturer_rebate} rebate = ${final_amount}"
    )

    return PracticeCost(
        price_per_box=price_per_box,
        subtotal=subtotal,
        practice_rebate=practice_rebate,
        manufacturer_rebate=manufacturer_rebate,
        insurance_applied=insurance_benefit,
        in_office_today=in_office_today,
        final_amount=final_amount,
    )


def calculate_competitor_cost(
    brand: Brand,
    competitor_name: str = DEFAULT_COMPETITOR_NAME,
) -> CompetitorCost:
    """Calculate what the patient would pay the online competitor.

    No insurance benefit applies; the competitor is out of network.

    Args:
        brand: Catalog brand with competitor pricing.
        competitor_name: Name shown for the competitor.

    Returns:
        CompetitorCost breakdown.
    """
    price_per_box = brand.competitor_price_per_box or ZERO
    annual_rebate = brand.competitor_annual_rebate or ZERO

    subtotal = calculate_subtotal(price_per_box, brand.boxes_per_year)
    final_amount = _clamp(subtotal - annual_rebate)

    logger.debug(
        f"Competitor cost for {brand.name}: ${price_per_box} × "
        f"{brand.boxes_per_year} = ${subtotal}, - ${annual_rebate} rebate "
        f"= ${final_amount}"
    )

    return CompetitorCost(
        name=competitor_name,
        price_per_box=price_per_box,
        subtotal=subtotal,
        annual_rebate=annual_rebate,
        final_amount=final_amount,
    )


def calculate_savings(
    competitor_final: Decimal,
    practice_final: Decimal,
) -> Savings:
    """Calculate savings of buying from the practice.

    Savings may be negative when the competitor is cheaper.

    Args:
        competitor_final: Competitor amount after rebates.
        practice_final: Practice amount after insurance and rebates.

    Returns:
        Savings with absolute and percentage values.
    """
    total = competitor_final - practice_final
    percentage = total / competitor_final * HUNDRED if competitor_final > 0 else ZERO
    return Savings(total_savings=total, percentage_savings=percentage)


def compute_comparison(
    brand: Brand | None,
    pricing: PracticeBrandPricing | None,
    quarterly_settings: PracticeQuarterlySettings | None,
    request: ComparisonRequest,
    current_quarter: Quarter,
    competitor_name: str = DEFAULT_COMPETITOR_NAME,
    apply_practice_rebate: bool = False,
) -> ComparisonResult:
    """Compare a practice's annual supply cost against the online competitor.

    Pure function: the same inputs always give the same result.

    Args:
        brand: Catalog brand (None when the lookup found nothing).
        pricing: Practice pricing for the brand (None when not set).
        quarterly_settings: Practice quarterly rebates (None means all zero).
        request: Brand reference, wearer status and insurance benefit.
        current_quarter: Quarter selecting the practice rebate column.
        competitor_name: Name shown for the competitor.
        apply_practice_rebate: Subtract the quarterly practice rebate.

    Returns:
        ComparisonResult with practice, competitor and savings blocks.

    Raises:
        ValidationError: If the brand reference is missing, the insurance
            benefit is negative or the quarter is unknown.
        NotFoundError: If brand or pricing is missing.
    """
    if request.brand_id is None:
        raise ValidationError("Brand ID is required")

    if brand is None or pricing is None:
        raise NotFoundError("brand not found or no pricing set")

    insurance_benefit = (
        request.insurance_benefit if request.insurance_benefit is not None else ZERO
    )
    if insurance_benefit < 0:
        raise ValidationError(
            f"Insurance benefit must be non-negative, got {insurance_benefit}"
        )

    settings = quarterly_settings or PracticeQuarterlySettings()
    try:
        quarter = Quarter(current_quarter)
    except ValueError as e:
        raise ValidationError(f"Unknown quarter: {current_quarter!r}") from e
    practice_rebate = settings.rebate_for(quarter, request.is_new_wearer)

    practice = calculate_practice_cost(
        brand,
        pricing,
        practice_rebate,
        request.is_new_wearer,
        insurance_benefit,
        apply_practice_rebate=apply_practice_rebate,
    )
    competitor = calculate_competitor_cost(brand, competitor_name)
    savings = calculate_savings(competitor.final_amount, practice.final_amount)

    return ComparisonResult(
        brand_id=brand.id,
        brand_name=brand.name,
        boxes_per_year=brand.boxes_per_year,
        practice=practice,
        competitor=competitor,
        savings=savings,
        wearer_status=WearerStatus.from_flag(request.is_new_wearer),
        current_quarter=quarter,
        insurance_benefit=insurance_benefit,
        practice_rebate_applied=apply_practice_rebate,
    )
