"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated.

    ``fields`` maps an input field name to its message when the error comes
    from a form-style validation (checkout, admin product form).
    """

    def __init__(self, message: str, fields: dict[str, str] | None = None) -> None:
        super().__init__(message)
        self.fields = dict(fields or {})


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class StockConflictError(DomainException):
    """Selected quantities exceeded live stock at submission time.

    The offending cart lines have already been clamped when this is raised;
    ``adjustments`` lists what changed.
    """

    def __init__(self, adjustments: list) -> None:
        names = ", ".join(a.product_name for a in adjustments)
        super().__init__(f"Stock changed for: {names}")
        self.adjustments = list(adjustments)


class LocationUnavailableError(DomainException):
    """The shopper's position could not be determined."""

    PERMISSION_DENIED = "PERMISSION_DENIED"
    POSITION_UNAVAILABLE = "POSITION_UNAVAILABLE"
    TIMEOUT = "TIMEOUT"
    UNSUPPORTED = "UNSUPPORTED"

    def __init__(self, reason: str, message: str | None = None) -> None:
        super().__init__(message or _LOCATION_MESSAGES.get(reason, "Could not get your location."))
        self.reason = reason


_LOCATION_MESSAGES = {
    LocationUnavailableError.PERMISSION_DENIED: (
        "Location permission denied. Enable location access and try again."
    ),
    LocationUnavailableError.POSITION_UNAVAILABLE: "Location information is unavailable.",
    LocationUnavailableError.TIMEOUT: "Location request timed out. Please try again.",
    LocationUnavailableError.UNSUPPORTED: "Geolocation is not supported here.",
}


class RemoteUnavailableError(DomainException):
    """The remote catalog could not be reached or read."""


class PersistenceFailedError(DomainException):
    """A durable write that must succeed did not."""
