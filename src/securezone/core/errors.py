"""Domain errors raised by the SecureZone services.

Services raise these instead of HTTP exceptions; ``main`` maps each ``kind``
to a status code so every endpoint reports failures the same way.
"""

from __future__ import annotations


class SecureZoneError(Exception):
    """Base class for all domain failures surfaced to API callers."""

    kind: str = "Internal"
    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, str]:
        """Return the structured ``{kind, message}`` pair for this error."""
        return {"kind": self.kind, "message": self.message}


class UnauthorizedError(SecureZoneError):
    """The caller could not be identified."""

    kind = "Unauthorized"
    status_code = 401


class ForbiddenError(SecureZoneError):
    """The caller is banned or lacks the required role."""

    kind = "Forbidden"
    status_code = 403


class NotFoundError(SecureZoneError):
    """A referenced user or report does not exist."""

    kind = "NotFound"
    status_code = 404


class ConflictError(SecureZoneError):
    """A uniqueness rule (email, username) would be violated."""

    kind = "Conflict"
    status_code = 409


class InvalidStateError(SecureZoneError):
    """Stored data is in a state the ledger does not recognise."""

    kind = "InvalidState"
    status_code = 400


class ValidationError(SecureZoneError):
    """Input has a shape that cannot be normalised."""

    kind = "ValidationError"
    status_code = 400


__all__ = [
    "SecureZoneError",
    "UnauthorizedError",
    "ForbiddenError",
    "NotFoundError",
    "ConflictError",
    "InvalidStateError",
    "ValidationError",
]
