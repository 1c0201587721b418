"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the outer layers (CLI, scheduler) can catch them uniformly and map each
kind to a user-visible outcome.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


# --- NotFound -----------------------------------------------------------------


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class UserNotFoundError(EntityNotFoundError):
    pass


class ProductNotFoundError(EntityNotFoundError):
    pass


class MerchantNotFoundError(EntityNotFoundError):
    pass


class OrderNotFoundError(EntityNotFoundError):
    pass


# --- BusinessRule -------------------------------------------------------------


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class InvalidAmountError(ValidationError):
    pass


class InvalidQuantityError(ValidationError):
    pass


class QuantityOverflowError(ValidationError):
    pass


class InsufficientStockError(ValidationError):
    pass


class InsufficientBalanceError(ValidationError):
    pass


class IllegalOrderTransitionError(ValidationError):
    pass


class ProductBelongsToAnotherMerchantError(ValidationError):
    pass


# --- Concurrency / Integrity --------------------------------------------------


class ConcurrencyConflictError(DomainException):
    """An optimistic version check failed. The caller may retry."""


class IntegrityViolationError(DomainException):
    """Stored data contradicts an invariant (e.g. an orphan foreign key)."""


NOT_FOUND = "not_found"
BUSINESS_RULE = "business_rule"
CONCURRENCY = "concurrency"
INTEGRITY = "integrity"


def error_kind(exc: BaseException) -> str:
    """Classify *exc* into one of the four error kinds.

    Anything that is not a known domain error counts as an integrity failure.
    """
    if isinstance(exc, EntityNotFoundError):
        return NOT_FOUND
    if isinstance(exc, ValidationError):
        return BUSINESS_RULE
    if isinstance(exc, ConcurrencyConflictError):
        return CONCURRENCY
    return INTEGRITY
