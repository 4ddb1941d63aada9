"""Domain errors raised by services and translated to HTTP responses by the API layer."""

from __future__ import annotations


class EmsError(Exception):
    """Base class for business rule violations."""


class NotFoundError(EmsError):
    """A referenced employee or department is absent, or hidden from the caller."""


class ValidationError(EmsError):
    """Input violates a domain rule (self-management, management cycle, duplicates)."""


class ForbiddenError(EmsError):
    """The caller's role does not allow the operation."""


class AuthenticationError(EmsError):
    """Credentials or bearer token could not be verified."""


class RateLimitedError(EmsError):
    """Login attempts for an account are temporarily locked."""
