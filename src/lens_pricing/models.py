"""Data models for the lens pricing engine."""

from dataclasses import dataclass, fields
from decimal import Decimal, InvalidOperation
from enum import Enum

from lens_pricing.exceptions import ValidationError

ZERO = Decimal("0")


def to_decimal(value: object, field_name: str = "amount") -> Decimal | None:
    """Convert a monetary input to Decimal via its string form.

    Floats go through str() so 35.99 stays 35.99 rather than its binary
    expansion.

    Args:
        value: Decimal, int, float or numeric string (None passes through).
        field_name: Name used in the error message.

    Returns:
        Decimal value, or None if value is None.

    Raises:
        ValidationError: If the value is not a finite number.
    """
    if value is None or (isinstance(value, Decimal) and value.is_finite()):
        return value  # type: ignore[return-value]
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a number, got {value!r}")
    try:
        result = Decimal(str(value).strip())
    except InvalidOperation as e:
        raise ValidationError(f"{field_name} must be a number, got {value!r}") from e
    if not result.is_finite():
        raise ValidationError(f"{field_name} must be a finite number, got {value!r}")
    return result


def _coerce_amounts(record: object, names: tuple[str, ...], default: Decimal | None) -> None:
    for name in names:
        value = to_decimal(getattr(record, name), name)
        setattr(record, name, default if value is None else value)


class Role(str, Enum):
    """Account role, fixed when the account is created."""

    PRACTICE = "practice"
    ADMIN = "admin"


class Quarter(str, Enum):
    """Calendar quarter used to select practice rebates."""

    Q1 = "q1"
    Q2 = "q2"
    Q3 = "q3"
    Q4 = "q4"


class WearerStatus(str, Enum):
    """Whether a comparison is run for a new or an existing lens wearer."""

    NEW = "new"
    EXISTING = "existing"

    @classmethod
    def from_flag(cls, is_new_wearer: bool) -> "WearerStatus":
        return cls.NEW if is_new_wearer else cls.EXISTING


@dataclass
class Practice:
    """A tenant account.

    Attributes:
        id: Practice identifier.
        name: Display name of the practice.
        email: Login email, unique across accounts.
        role: Account role. Only ADMIN may edit the shared brand catalog.
    """

    id: int
    name: str
    email: str
    role: Role = Role.PRACTICE

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN


@dataclass
class Brand:
    """A lens product line in the shared catalog.

    Attributes:
        id: Catalog identifier (None until saved).
        name: Brand name, unique across the catalog.
        boxes_per_year: Boxes needed for an annual supply (>= 1).
        competitor_price_per_box: Online competitor's price per box.
        competitor_annual_rebate: Rebate the competitor gives on an annual supply.
        competitor_semiannual_rebate: Rebate on a six-month supply (catalog only).
        competitor_first_time_discount_percent: First order discount (catalog only).
        replacement_schedule: daily/weekly/biweekly/monthly, if known.
        active: Whether the brand is offered to practices.
    """

    name: str
    boxes_per_year: int
    competitor_price_per_box: Decimal = ZERO
    competitor_annual_rebate: Decimal = ZERO
    competitor_semiannual_rebate: Decimal = ZERO
    competitor_first_time_discount_percent: Decimal = ZERO
    replacement_schedule: str | None = None
    active: bool = True
    id: int | None = None

    def __post_init__(self) -> None:
        _coerce_amounts(
            self,
            (
                "competitor_price_per_box",
                "competitor_annual_rebate",
                "competitor_semiannual_rebate",
                "competitor_first_time_discount_percent",
            ),
            ZERO,
        )


PRICING_AMOUNT_FIELDS = (
    "price_per_box",
    "manufacturer_rebate_new",
    "manufacturer_rebate_existing",
)


@dataclass
class PracticeBrandPricing:
    """A practice's own pricing for one brand.

    Missing monetary fields are treated as zero by the calculator.
    """

    practice_id: int
    brand_id: int
    price_per_box: Decimal | None = None
    manufacturer_rebate_new: Decimal | None = None
    manufacturer_rebate_existing: Decimal | None = None
    active: bool = True

    def __post_init__(self) -> None:
        _coerce_amounts(self, PRICING_AMOUNT_FIELDS, None)

    def manufacturer_rebate(self, is_new_wearer: bool) -> Decimal:
        """Return the manufacturer rebate for the given wearer status."""
        rebate = (
            self.manufacturer_rebate_new
            if is_new_wearer
            else self.manufacturer_rebate_existing
        )
        return rebate if rebate is not None else ZERO


@dataclass
class PricingUpdate:
    """Partial update for a practice's brand pricing.

    Only fields that are not None are written.
    """

    price_per_box: Decimal | None = None
    manufacturer_rebate_new: Decimal | None = None
    manufacturer_rebate_existing: Decimal | None = None
    active: bool | None = None

    def __post_init__(self) -> None:
        _coerce_amounts(self, PRICING_AMOUNT_FIELDS, None)

    def changes(self) -> dict[str, Decimal | bool]:
        """Return the provided fields as a name -> value mapping."""
        return {
            name: value
            for name, value in (
                ("price_per_box", self.price_per_box),
                ("manufacturer_rebate_new", self.manufacturer_rebate_new),
                ("manufacturer_rebate_existing", self.manufacturer_rebate_existing),
                ("active", self.active),
            )
            if value is not None
        }


@dataclass
class PracticeQuarterlySettings:
    """A practice's own promotional rebates for each calendar quarter."""

    new_wearer_rebate_q1: Decimal = ZERO
    new_wearer_rebate_q2: Decimal = ZERO
    new_wearer_rebate_q3: Decimal = ZERO
    new_wearer_rebate_q4: Decimal = ZERO
    existing_wearer_rebate_q1: Decimal = ZERO
    existing_wearer_rebate_q2: Decimal = ZERO
    existing_wearer_rebate_q3: Decimal = ZERO
    existing_wearer_rebate_q4: Decimal = ZERO

    def __post_init__(self) -> None:
        _coerce_amounts(self, tuple(f.name for f in fields(self)), ZERO)

    def rebate_for(self, quarter: Quarter, is_new_wearer: bool) -> Decimal:
        """Return the practice rebate for a quarter and wearer status.

        Args:
            quarter: Calendar quarter.
            is_new_wearer: Selects the new-wearer or existing-wearer column.

        Returns:
            Rebate amount (zero when unset).
        """
        status = WearerStatus.from_flag(is_new_wearer).value
        value = getattr(self, f"{status}_wearer_rebate_{Quarter(quarter).value}")
        return value if value is not None else ZERO


@dataclass
class ComparisonRequest:
    """Inputs supplied by the caller for one comparison."""

    brand_id: int | None
    is_new_wearer: bool = True
    insurance_benefit: Decimal | None = None

    def __post_init__(self) -> None:
        self.insurance_benefit = to_decimal(self.insurance_benefit, "insurance_benefit")


@dataclass(frozen=True)
class PracticeCost:
    """Practice side of a comparison."""

    price_per_box: Decimal
    subtotal: Decimal
    practice_rebate: Decimal
    manufacturer_rebate: Decimal
    insurance_applied: Decimal
    in_office_today: Decimal
    final_amount: Decimal


@dataclass(frozen=True)
class CompetitorCost:
    """Online competitor side of a comparison."""

    name: str
    price_per_box: Decimal
    subtotal: Decimal
    annual_rebate: Decimal
    final_amount: Decimal
    note: str = "Out of network - no insurance benefits apply"


@dataclass(frozen=True)
class Savings:
    """What the patient saves by buying from the practice."""

    total_savings: Decimal
    percentage_savings: Decimal


@dataclass(frozen=True)
class ComparisonResult:
    """Complete practice vs competitor cost comparison for one brand.

    Values are unrounded; round to cents when presenting.
    """

    brand_id: int | None
    brand_name: str
    boxes_per_year: int
    practice: PracticeCost
    competitor: CompetitorCost
    savings: Savings
    wearer_status: WearerStatus
    current_quarter: Quarter
    insurance_benefit: Decimal = ZERO
    practice_rebate_applied: bool = False

    def to_dict(self) -> dict[str, object]:
        """Convert to the nested response shape with numeric leaves.

        Keys follow the published comparison response: the brand block
        carries boxes_per_annual and the practice total is
        final_amount_after_rebates.

        Returns:
            Dictionary with brand, practice, competitor and savings blocks.
        """
        return {
            "brand": {
                "id": self.brand_id,
                "name": self.brand_name,
                "boxes_per_annual": self.boxes_per_year,
            },
            "practice": {
                "price_per_box": float(self.practice.price_per_box),
                "subtotal": float(self.practice.subtotal),
                "practice_rebate": float(self.practice.practice_rebate),
                "manufacturer_rebate": float(self.practice.manufacturer_rebate),
                "insurance_applied": float(self.practice.insurance_applied),
                "in_office_today": float(self.practice.in_office_today),
                "final_amount_after_rebates": float(self.practice.final_amount),
            },
            "competitor": {
                "name": self.competitor.name,
                "price_per_box": float(self.competitor.price_per_box),
                "subtotal": float(self.competitor.subtotal),
                "annual_rebate": float(self.competitor.annual_rebate),
                "note": self.competitor.note,
                "final_amount": float(self.competitor.final_amount),
            },
            "savings": {
                "total_savings": float(self.savings.total_savings),
                "percentage_savings": float(self.savings.percentage_savings),
            },
            "wearer_status": self.wearer_status.value,
            "current_quarter": self.current_quarter.value,
            "insurance_benefit": float(self.insurance_benefit),
        }
