"""Computation module for the lens pricing engine.

This module handles:
- Practice and competitor annual cost calculations
- Savings and percentage savings
- Calendar quarter selection for practice rebates
"""

from lens_pricing.compute.comparison import (
    calculate_competitor_cost,
    calculate_practice_cost,
    calculate_savings,
    calculate_subtotal,
    compute_comparison,
)
from lens_pricing.compute.quarters import current_quarter, quarter_for_month

__all__ = [
    # Comparison
    "calculate_subtotal",
    "calculate_practice_cost",
    "calculate_competitor_cost",
    "calculate_savings",
    "compute_comparison",
    # Quarters
    "quarter_for_month",
    "current_quarter",
]
