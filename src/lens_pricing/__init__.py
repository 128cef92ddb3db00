"""Contact Lens Practice Pricing Engine.

Compares what a patient pays for an annual lens supply at their practice
against a named online competitor.
"""

from lens_pricing.config import Settings
from lens_pricing.models import (
    Brand,
    ComparisonRequest,
    ComparisonResult,
    PracticeBrandPricing,
    PracticeQuarterlySettings,
)

__version__ = "0.1.0"
__all__ = [
    "Settings",
    "Brand",
    "PracticeBrandPricing",
    "PracticeQuarterlySettings",
    "ComparisonRequest",
    "ComparisonResult",
]
