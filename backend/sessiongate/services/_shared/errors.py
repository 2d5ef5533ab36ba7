"""
Domain-level exceptions used within the service layer.

These exceptions are **framework-agnostic** and never import Flask or HTTP
types. The translation to HTTP responses (RFC 7807) happens at the API
boundary via ``BaseService.translate_exceptions()``.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError


def violates(exc: IntegrityError, constraint_name: str) -> bool:
    """
    Check whether an IntegrityError mentions a specific constraint or column.

    PostgreSQL and MySQL report the constraint name; SQLite reports the
    ``table.column`` pair, so callers may pass either.

    :param exc: The exception raised by SQLAlchemy during flush/commit.
    :param constraint_name: Constraint name (``uq_users_external_id``) or
        column reference (``users.external_id``).
    :returns: True if the driver message mentions ``constraint_name``.
    """
    message = str(exc.orig).lower() if exc.orig else ""
    return constraint_name.lower() in message


# --------------------------------------------------------------------------- #
# Base types
# --------------------------------------------------------------------------- #


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    Notes
    -----
    - These are *not* HTTP errors.
    - The API layer translates them through ``BaseService``.
    """

    pass


class InternalError(ServiceError):
    """
    Failure the caller cannot act on (store, signing, extraction).

    Always surfaced as a generic 500; the detail is only logged.
    """

    pass


# --------------------------------------------------------------------------- #
# Specific domain-level errors
# --------------------------------------------------------------------------- #


@dataclass(slots=True)
class NotFoundError(ServiceError):
    """
    Raised when an identity or an active session is missing.

    :param entity: Entity name (e.g., "User", "Session").
    :type entity: str
    :param key: Identifier or search key.
    :type key: str | int
    """

    entity: str
    key: str | int

    def __str__(self) -> str:  # pragma: no cover
        return f"{self.entity} not found: {self.key}"


@dataclass(slots=True)
class ConflictError(ServiceError):
    """
    Raised when a sign-in meets an already active session.

    :param entity: Entity name (e.g., "Session").
    :type entity: str
    :param detail: Short human-readable explanation.
    :type detail: str
    """

    entity: str
    detail: str

    def __str__(self) -> str:  # pragma: no cover
        return f"Conflict on {self.entity}: {self.detail}"


class TokenVerificationError(ServiceError):
    """Bad signature, wrong token kind, malformed or expired token."""

    def __init__(self, message: str = "Token verification failed") -> None:
        super().__init__(message)


class StoreError(InternalError):
    """The credential store was unreachable or a statement failed."""


class SigningError(InternalError):
    """The codec could not sign a claim (usually a missing signing key)."""


class SubjectExtractionError(InternalError):
    """No subject could be read from a presented token."""
