"""In-memory catalog store: practices, brands, pricing and quarterly settings.

Serves as the lookup collaborator for comparisons. Records handed out are
copies, so callers cannot mutate stored state without going through the
store.
"""

import logging
from dataclasses import dataclass, replace
from itertools import count

from lens_pricing.catalog.defaults import (
    DEFAULT_ADMIN_EMAIL,
    DEFAULT_ADMIN_NAME,
    default_brands,
)
from lens_pricing.catalog.loaders import load_catalog_file
from lens_pricing.catalog.schedules import resolve_boxes_per_year
from lens_pricing.catalog.validators import (
    validate_brand,
    validate_pricing_update,
    validate_quarterly_settings,
)
from lens_pricing.config import Settings
from lens_pricing.exceptions import (
    ConflictError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)
from lens_pricing.models import (
    ZERO,
    Brand,
    Practice,
    PracticeBrandPricing,
    PracticeQuarterlySettings,
    PricingUpdate,
    Role,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PricingLookup:
    """Joined inputs for one (practice, brand) comparison."""

    brand: Brand
    pricing: PracticeBrandPricing
    quarterly_settings: PracticeQuarterlySettings


@dataclass(frozen=True)
class AvailableBrand:
    """An active catalog brand with the practice's pricing, if any."""

    brand: Brand
    pricing: PracticeBrandPricing | None


class CatalogStore:
    """In-memory persistence for the multi-tenant catalog."""

    def __init__(self) -> None:
        self._practices: dict[int, Practice] = {}
        self._brands: dict[int, Brand] = {}
        self._pricing: dict[tuple[int, int], PracticeBrandPricing] = {}
        self._settings: dict[int, PracticeQuarterlySettings] = {}
        self._practice_ids = count(1)
        self._brand_ids = count(1)

    # ------------------------------------------------------------------
    # Practices
    # ------------------------------------------------------------------

    def register_practice(
        self,
        name: str,
        email: str,
        role: Role = Role.PRACTICE,
    ) -> Practice:
        """Create a practice account.

        Args:
            name: Practice display name.
            email: Login email (unique, case-insensitive).
            role: Account role.

        Returns:
            The created practice.

        Raises:
            ValidationError: If name or email is missing.
            ConflictError: If the email is already registered.
        """
        if not (name or "").strip() or not (email or "").strip():
            raise ValidationError("Name and email are required")

        normalized_email = email.strip().lower()
        if any(p.email == normalized_email for p in self._practices.values()):
            raise ConflictError("Email already exists")

        practice = Practice(
            id=next(self._practice_ids),
            name=name.strip(),
            email=normalized_email,
            role=Role(role),
        )
        self._practices[practice.id] = practice
        self._settings[practice.id] = PracticeQuarterlySettings()

        logger.info(f"Registered practice {practice.id} ({practice.role.value})")
        return replace(practice)

    def get_practice(self, practice_id: int) -> Practice:
        """Return a practice by id.

        Raises:
            NotFoundError: If the practice does not exist.
        """
        if practice_id not in self._practices:
            raise NotFoundError(f"Practice {practice_id} not found")
        return replace(self._practices[practice_id])

    def _require_admin(self, actor: Practice) -> None:
        if actor.role != Role.ADMIN:
            logger.warning(f"Practice {actor.id} denied catalog access")
            raise PermissionDeniedError("Access denied. Master admin only.")

    # ------------------------------------------------------------------
    # Brand catalog (admin)
    # ------------------------------------------------------------------

    def list_brands(self, actor: Practice, include_inactive: bool = True) -> list[Brand]:
        """Return every catalog brand ordered by name (admin only)."""
        self._require_admin(actor)
        brands = [
            b for b in self._brands.values() if include_inactive or b.active
        ]
        return [replace(b) for b in sorted(brands, key=lambda b: b.name.lower())]

    def get_brand(self, brand_id: int) -> Brand:
        """Return a brand by id.

        Raises:
            NotFoundError: If the brand does not exist.
        """
        if brand_id not in self._brands:
            raise NotFoundError(f"Brand {brand_id} not found")
        return replace(self._brands[brand_id])

    def save_brand(self, actor: Practice, brand: Brand) -> Brand:
        """Create or update a catalog brand (admin only).

        Creates when brand.id is None, otherwise replaces the stored brand.
        When boxes_per_year is not positive but a replacement schedule is
        set, boxes come from the schedule table.

        Args:
            actor: Account performing the change.
            brand: Brand to save.

        Returns:
            The stored brand with its id.

        Raises:
            PermissionDeniedError: If actor is not an admin.
            ValidationError: If the brand is invalid.
            NotFoundError: If updating an unknown id.
            ConflictError: If another brand has the same name.
        """
        self._require_admin(actor)
        return self._commit_brand(self._prepare_brand(brand))

    def _prepare_brand(self, brand: Brand) -> Brand:
        boxes = brand.boxes_per_year
        if (not boxes or boxes < 1) and brand.replacement_schedule:
            boxes = resolve_boxes_per_year(None, brand.replacement_schedule)
        brand = replace(brand, name=(brand.name or "").strip(), boxes_per_year=boxes)

        validate_brand(brand).raise_if_invalid()

        if brand.id is not None and brand.id not in self._brands:
            raise NotFoundError(f"Brand {brand.id} not found")

        for existing in self._brands.values():
            if existing.id != brand.id and existing.name.lower() == brand.name.lower():
                raise ConflictError(f"Brand '{brand.name}' already exists")

        return brand

    def _commit_brand(self, brand: Brand) -> Brand:
        if brand.id is None:
            brand = replace(brand, id=next(self._brand_ids))
            logger.info(f"Created brand {brand.id}: {brand.name}")
        else:
            logger.info(f"Updated brand {brand.id}: {brand.name}")

        self._brands[brand.id] = brand
        return replace(brand)

    def load_catalog(self, actor: Practice, brands: list[Brand]) -> list[Brand]:
        """Bulk-load brands, e.g. from a catalog file (admin only).

        Brands whose name already exists update that record. The load is
        all or nothing: every brand is checked before any is stored.

        Args:
            actor: Account performing the load.
            brands: Brands to insert or update.

        Returns:
            The stored brands.

        Raises:
            PermissionDeniedError: If actor is not an admin.
            ValidationError: If any brand is invalid.
            ConflictError: If a brand name appears twice in the batch.
        """
        self._require_admin(actor)
        return self._load_catalog(brands)

    def _load_catalog(self, brands: list[Brand]) -> list[Brand]:
        by_name = {b.name.lower(): b.id for b in self._brands.values()}

        prepared = []
        seen: set[str] = set()
        for brand in brands:
            key = (brand.name or "").strip().lower()
            if key in seen:
                raise ConflictError(f"Brand '{key}' appears more than once")
            seen.add(key)
            prepared.append(self._prepare_brand(replace(brand, id=by_name.get(key))))

        stored = [self._commit_brand(brand) for brand in prepared]
        logger.info(f"Loaded {len(stored)} brands into catalog")
        return stored

    def seed_defaults(self) -> None:
        """Seed the admin account and starter catalog when empty."""
        if not any(p.role == Role.ADMIN for p in self._practices.values()):
            self.register_practice(DEFAULT_ADMIN_NAME, DEFAULT_ADMIN_EMAIL, Role.ADMIN)
        if not self._brands:
            self._load_catalog(default_brands())

    @classmethod
    def from_settings(cls, settings: Settings) -> "CatalogStore":
        """Build a seeded store, loading settings.catalog_path when set.

        Brands in the catalog file update defaults of the same name and
        add the rest.

        Raises:
            ValueError: If the catalog file cannot be read or parsed.
        """
        store = cls()
        store.seed_defaults()
        if settings.catalog_path is not None:
            brands = load_catalog_file(settings.catalog_path)
            store._load_catalog(brands)
            logger.info(f"Loaded catalog from {settings.catalog_path}")
        return store

    # ------------------------------------------------------------------
    # Practice configuration
    # ------------------------------------------------------------------

    def available_brands(self, practice_id: int) -> list[AvailableBrand]:
        """Return active brands joined with the practice's pricing, by name."""
        self.get_practice(practice_id)
        active = sorted(
            (b for b in self._brands.values() if b.active),
            key=lambda b: b.name.lower(),
        )
        return [
            AvailableBrand(
                brand=replace(b),
                pricing=self._copy_pricing(practice_id, b.id),
            )
            for b in active
        ]

    def _copy_pricing(
        self, practice_id: int, brand_id: int | None
    ) -> PracticeBrandPricing | None:
        pricing = self._pricing.get((practice_id, brand_id))
        return replace(pricing) if pricing is not None else None

    def get_pricing(self, practice_id: int, brand_id: int) -> PracticeBrandPricing | None:
        """Return the practice's pricing for a brand, or None."""
        return self._copy_pricing(practice_id, brand_id)

    def update_pricing(
        self,
        practice_id: int,
        brand_id: int | None,
        update: PricingUpdate,
    ) -> PracticeBrandPricing:
        """Apply a partial pricing update, creating the record if needed.

        Fields left as None in the update keep their stored value. A new
        record starts with zero for every omitted amount.

        Args:
            practice_id: Practice making the change.
            brand_id: Catalog brand being priced.
            update: Fields to change.

        Returns:
            The stored pricing record.

        Raises:
            ValidationError: If brand_id is missing or amounts are negative.
            NotFoundError: If the practice or brand does not exist.
        """
        if brand_id is None:
            raise ValidationError("Brand ID is required")

        self.get_practice(practice_id)
        self.get_brand(brand_id)
        validate_pricing_update(update).raise_if_invalid()

        key = (practice_id, brand_id)
        current = self._pricing.get(key)
        if current is None:
            current = PracticeBrandPricing(
                practice_id=practice_id,
                brand_id=brand_id,
                price_per_box=ZERO,
                manufacturer_rebate_new=ZERO,
                manufacturer_rebate_existing=ZERO,
                active=True,
            )
            logger.info(f"Created pricing for practice {practice_id}, brand {brand_id}")

        changes = update.changes()
        self._pricing[key] = replace(current, **changes)
        logger.debug(
            f"Pricing for practice {practice_id}, brand {brand_id} updated: "
            f"{sorted(changes)}"
        )
        return replace(self._pricing[key])

    def get_quarterly_settings(self, practice_id: int) -> PracticeQuarterlySettings:
        """Return the practice's quarterly rebates (zeros if never set)."""
        self.get_practice(practice_id)
        return replace(self._settings.get(practice_id, PracticeQuarterlySettings()))

    def update_quarterly_settings(
        self,
        practice_id: int,
        settings: PracticeQuarterlySettings,
    ) -> PracticeQuarterlySettings:
        """Replace the practice's quarterly rebates.

        Raises:
            NotFoundError: If the practice does not exist.
            ValidationError: If any rebate is negative.
        """
        self.get_practice(practice_id)
        validate_quarterly_settings(settings).raise_if_invalid()
        self._settings[practice_id] = replace(settings)
        logger.info(f"Updated quarterly settings for practice {practice_id}")
        return replace(settings)

    # ------------------------------------------------------------------
    # Comparison lookups
    # ------------------------------------------------------------------

    def comparison_brands(self, practice_id: int) -> list[AvailableBrand]:
        """Return active brands the practice has active pricing for."""
        return [
            entry
            for entry in self.available_brands(practice_id)
            if entry.pricing is not None and entry.pricing.active
        ]

    def lookup(self, practice_id: int, brand_id: int) -> PricingLookup:
        """Join brand, practice pricing and quarterly settings.

        Raises:
            NotFoundError: If the brand is missing or inactive, or the
                practice has no active pricing for it.
        """
        brand = self._brands.get(brand_id)
        pricing = self._pricing.get((practice_id, brand_id))

        if brand is None or not brand.active or pricing is None or not pricing.active:
            raise NotFoundError("brand not found or no pricing set")

        return PricingLookup(
            brand=replace(brand),
            pricing=replace(pricing),
            quarterly_settings=replace(
                self._settings.get(practice_id, PracticeQuarterlySettings())
            ),
        )
