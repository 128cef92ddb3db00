"""Calendar quarter selection for quarterly practice rebates."""

import logging
from collections.abc import Callable
from datetime import date, datetime

from lens_pricing.exceptions import ValidationError
from lens_pricing.models import Quarter

logger = logging.getLogger(__name__)

Clock = Callable[[], date]


def quarter_for_month(month: int) -> Quarter:
    """Map a calendar month to its quarter.

    Months 1-3 are Q1, 4-6 Q2, 7-9 Q3 and 10-12 Q4.

    Args:
        month: Calendar month (1-12).

    Returns:
        Quarter containing the month.

    Raises:
        ValidationError: If month is outside 1-12.
    """
    if not 1 <= month <= 12:
        raise ValidationError(f"Month must be between 1 and 12, got {month}")

    return list(Quarter)[(month - 1) // 3]


def current_quarter(clock: Clock | None = None) -> Quarter:
    """Return the quarter for today's date.

    Args:
        clock: Zero-argument callable returning a date or datetime.
            Defaults to the local wall clock.

    Returns:
        Current calendar quarter.
    """
    today = clock() if clock is not None else datetime.now()
    quarter = quarter_for_month(today.month)
    logger.debug(f"Current quarter for {today:%Y-%m-%d}: {quarter.value}")
    return quarter
