"""Tabular summaries of comparison results."""

import logging

import polars as pl

from lens_pricing.models import ComparisonResult

logger = logging.getLogger(__name__)

SUMMARY_COLUMNS = [
    "Brand",
    "Boxes/Year",
    "Practice Subtotal",
    "Practice Final",
    "Competitor Subtotal",
    "Competitor Final",
    "Savings",
    "Savings %",
]


def build_comparison_table(results: list[ComparisonResult]) -> pl.DataFrame:
    """Build a summary table of comparisons, best savings first.

    Amounts are rounded to cents here, not in the calculator.

    Args:
        results: Comparison results, typically one per brand.

    Returns:
        Polars DataFrame with one row per result.
    """
    if not results:
        return pl.DataFrame(
            schema={
                "Brand": pl.String,
                "Boxes/Year": pl.Int64,
                **{col: pl.Float64 for col in SUMMARY_COLUMNS[2:]},
            }
        )

    rows = [
        {
            "Brand": r.brand_name,
            "Boxes/Year": r.boxes_per_year,
            "Practice Subtotal": float(r.practice.subtotal),
            "Practice Final": float(r.practice.final_amount),
            "Competitor Subtotal": float(r.competitor.subtotal),
            "Competitor Final": float(r.competitor.final_amount),
            "Savings": float(r.savings.total_savings),
            "Savings %": float(r.savings.percentage_savings),
        }
        for r in results
    ]

    df = (
        pl.DataFrame(rows)
        .select(SUMMARY_COLUMNS)
        .with_columns(pl.col(SUMMARY_COLUMNS[2:]).round(2))
        .sort(["Savings", "Brand"], descending=[True, False])
    )

    logger.debug(f"Built comparison table with {df.height} rows")
    return df


def summarize_savings(results: list[ComparisonResult]) -> dict[str, object]:
    """Summarize a batch of comparisons.

    Returns:
        Dictionary with brand count, brands cheaper at the practice, and
        the best brand by savings (None when empty).
    """
    if not results:
        return {"brands": 0, "practice_cheaper": 0, "best_brand": None, "best_savings": 0.0}

    best = max(results, key=lambda r: r.savings.total_savings)
    return {
        "brands": len(results),
        "practice_cheaper": sum(1 for r in results if r.savings.total_savings > 0),
        "best_brand": best.brand_name,
        "best_savings": round(float(best.savings.total_savings), 2),
    }
