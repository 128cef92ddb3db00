"""Error types raised by the lens pricing engine."""


class LensPricingError(Exception):
    """Base class for all lens pricing errors."""


class ValidationError(LensPricingError, ValueError):
    """A required field is missing or a value is out of range."""


class NotFoundError(LensPricingError, LookupError):
    """A practice, brand or pricing record does not exist."""


class ConflictError(LensPricingError):
    """A record would violate a uniqueness rule (duplicate email or brand)."""


class PermissionDeniedError(LensPricingError):
    """The acting account lacks the role required for the operation."""
