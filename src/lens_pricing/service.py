"""Comparison service wiring the store, the clock and the calculator."""

import logging
from decimal import Decimal

from lens_pricing.compute.comparison import compute_comparison
from lens_pricing.compute.quarters import Clock, current_quarter
from lens_pricing.config import DEFAULT_COMPETITOR_NAME, Settings
from lens_pricing.exceptions import ValidationError
from lens_pricing.models import ComparisonRequest, ComparisonResult
from lens_pricing.store import CatalogStore

logger = logging.getLogger(__name__)


class ComparisonService:
    """Runs price comparisons for a practice against the online competitor."""

    def __init__(
        self,
        store: CatalogStore,
        clock: Clock | None = None,
        competitor_name: str = DEFAULT_COMPETITOR_NAME,
        apply_practice_rebate: bool = False,
    ) -> None:
        self.store = store
        self.clock = clock
        self.competitor_name = competitor_name
        self.apply_practice_rebate = apply_practice_rebate

    @classmethod
    def from_settings(
        cls,
        store: CatalogStore,
        settings: Settings,
        clock: Clock | None = None,
    ) -> "ComparisonService":
        """Build a service configured from Settings."""
        return cls(
            store,
            clock=clock,
            competitor_name=settings.competitor_name,
            apply_practice_rebate=settings.apply_practice_rebate,
        )

    def compare(self, practice_id: int, request: ComparisonRequest) -> ComparisonResult:
        """Compare the practice's price for one brand against the competitor.

        Args:
            practice_id: Requesting practice.
            request: Brand reference, wearer status and insurance benefit.

        Returns:
            ComparisonResult for the current quarter.

        Raises:
            ValidationError: If the brand reference is missing.
            NotFoundError: If the practice has no active pricing for the brand.
        """
        if request.brand_id is None:
            raise ValidationError("Brand ID is required")

        joined = self.store.lookup(practice_id, request.brand_id)
        quarter = current_quarter(self.clock)

        result = compute_comparison(
            joined.brand,
            joined.pricing,
            joined.quarterly_settings,
            request,
            quarter,
            competitor_name=self.competitor_name,
            apply_practice_rebate=self.apply_practice_rebate,
        )

        logger.info(
            f"Compared {result.brand_name} for practice {practice_id} "
            f"({result.wearer_status.value}, {quarter.value}): "
            f"savings=${result.savings.total_savings:.2f}"
        )
        return result

    def compare_all(
        self,
        practice_id: int,
        is_new_wearer: bool = True,
        insurance_benefit: Decimal | None = None,
    ) -> list[ComparisonResult]:
        """Run the comparison for every brand the practice has priced.

        Args:
            practice_id: Requesting practice.
            is_new_wearer: Wearer status applied to every brand.
            insurance_benefit: Insurance benefit applied to every brand.

        Returns:
            One ComparisonResult per priced brand, ordered by brand name.
        """
        return [
            self.compare(
                practice_id,
                ComparisonRequest(
                    brand_id=entry.brand.id,
                    is_new_wearer=is_new_wearer,
                    insurance_benefit=insurance_benefit,
                ),
            )
            for entry in self.store.comparison_brands(practice_id)
        ]
