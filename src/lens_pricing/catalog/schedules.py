"""Replacement schedule lookup shared by validation and persistence."""

from lens_pricing.exceptions import ValidationError

# Boxes needed for an annual supply, by how often lenses are replaced
BOXES_PER_YEAR_BY_SCHEDULE: dict[str, int] = {
    "daily": 12,
    "weekly": 9,
    "biweekly": 4,
    "monthly": 4,
}


def normalize_schedule(schedule: str) -> str:
    """Normalize a schedule name ("Bi-Weekly" -> "biweekly")."""
    return schedule.strip().lower().replace("-", "").replace(" ", "")


def boxes_for_schedule(schedule: str) -> int:
    """Return the annual box count for a replacement schedule.

    Args:
        schedule: Schedule name, case and hyphen insensitive.

    Returns:
        Boxes per year for the schedule.

    Raises:
        ValidationError: If the schedule is unknown.
    """
    key = normalize_schedule(schedule)
    if key not in BOXES_PER_YEAR_BY_SCHEDULE:
        raise ValidationError(
            f"Unknown replacement schedule: {schedule}. "
            f"Supported: {sorted(BOXES_PER_YEAR_BY_SCHEDULE)}"
        )
    return BOXES_PER_YEAR_BY_SCHEDULE[key]


def resolve_boxes_per_year(
    boxes_per_year: int | None,
    schedule: str | None,
) -> int | None:
    """Resolve boxes per year, falling back to the schedule table.

    An explicit box count wins over the schedule.

    Args:
        boxes_per_year: Explicit count, if given.
        schedule: Replacement schedule, if given.

    Returns:
        Boxes per year, or None if neither is provided.
    """
    if boxes_per_year is not None:
        return boxes_per_year
    if schedule:
        return boxes_for_schedule(schedule)
    return None
