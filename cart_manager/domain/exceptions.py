"""Domain-specific exceptions.

Cart business failures (unknown product, out of stock, max quantity) are not
exceptions; they are returned as ``CartFailure`` values. The classes here cover
invalid domain data only.
"""


class DomainError(Exception):
    """Base exception for domain errors."""

    pass


class ValidationError(DomainError):
    """Raised when domain validation fails."""

    pass
