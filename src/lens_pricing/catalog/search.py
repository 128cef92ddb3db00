"""Brand name lookup for the comparison brand picker."""

import logging

from thefuzz import fuzz  # type: ignore[import-untyped]

from lens_pricing.models import Brand

logger = logging.getLogger(__name__)

DEFAULT_MATCH_THRESHOLD = 70


def find_brand(
    name: str,
    brands: list[Brand],
    threshold: int = DEFAULT_MATCH_THRESHOLD,
) -> Brand | None:
    """Find the catalog brand whose name best matches the query.

    An exact case-insensitive match always wins. Otherwise uses partial
    ratio, which handles queries like "oasys" against "Acuvue Oasys".

    Args:
        name: Brand name typed by the user.
        brands: Brands to search.
        threshold: Minimum similarity score (0-100).

    Returns:
        Best matching brand, or None if no match above threshold.
    """
    query = name.strip().upper() if name else ""
    if not query or not brands:
        return None

    for brand in brands:
        if brand.name.upper() == query:
            return brand

    best_match = None
    best_score = 0

    for brand in brands:
        score = fuzz.partial_ratio(query, brand.name.upper())
        if score > best_score and score >= threshold:
            best_score = score
            best_match = brand

    if best_match:
        logger.debug(f"Fuzzy match '{name}' -> '{best_match.name}' (score: {best_score})")

    return best_match


def search_brands(
    query: str,
    brands: list[Brand],
    limit: int = 5,
    threshold: int = DEFAULT_MATCH_THRESHOLD,
) -> list[Brand]:
    """Return brands ranked by similarity to the query.

    Args:
        query: Search text.
        brands: Brands to search.
        limit: Maximum number of results.
        threshold: Minimum similarity score (0-100).

    Returns:
        Matching brands, best first.
    """
    if not query or not query.strip():
        return []

    query_upper = query.strip().upper()
    scored = [
        (fuzz.partial_ratio(query_upper, brand.name.upper()), brand)
        for brand in brands
    ]
    scored = [(score, brand) for score, brand in scored if score >= threshold]
    scored.sort(key=lambda x: (-x[0], x[1].name))

    return [brand for _, brand in scored[:limit]]
