"""Tests for brand name search."""

import pytest

from lens_pricing.catalog.defaults import default_brands
from lens_pricing.catalog.search import find_brand, search_brands
from lens_pricing.models import Brand


@pytest.fixture
def brands() -> list[Brand]:
    """Default catalog brands."""
    return default_brands()


class TestFindBrand:
    """Tests for single best match lookup."""

    def test_exact_match_case_insensitive(self, brands: list[Brand]) -> None:
        """Exact names match regardless of case."""
        match = find_brand("biofinity", brands)
        assert match is not None
        assert match.name == "Biofinity"

    def test_partial_match(self, brands: list[Brand]) -> None:
        """Partial names match the containing brand."""
        match = find_brand("Oasys", brands)
        assert match is not None
        assert match.name == "Acuvue Oasys"

    def test_no_match_below_threshold(self, brands: list[Brand]) -> None:
        """Unrelated text returns None."""
        assert find_brand("zzzzqqq", brands) is None

    @pytest.mark.parametrize("name", ["", "   "])
    def test_empty_query(self, brands: list[Brand], name: str) -> None:
        """Blank queries return None."""
        assert find_brand(name, brands) is None

    def test_empty_catalog(self) -> None:
        """No brands means no match."""
        assert find_brand("Biofinity", []) is None


class TestSearchBrands:
    """Tests for ranked search."""

    def test_ranked_results(self, brands: list[Brand]) -> None:
        """Both Acuvue brands are returned for 'acuvue'."""
        names = [b.name for b in search_brands("acuvue", brands)]
        assert names[:2] == ["Acuvue Moist", "Acuvue Oasys"]

    def test_limit(self, brands: list[Brand]) -> None:
        """Results are capped at limit."""
        assert len(search_brands("acuvue", brands, limit=1)) == 1

    def test_blank_query(self, brands: list[Brand]) -> None:
        """Blank queries return nothing."""
        assert search_brands(" ", brands) == []
