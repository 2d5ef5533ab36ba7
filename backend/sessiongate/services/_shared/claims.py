"""
Token claim variants.

Access and refresh claims are two distinct frozen types rather than one
structure with a ``type`` field, so the codec can check the kind it was asked
for against the ``type`` tag carried inside the signed token.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import ClassVar, Self


@dataclass(frozen=True, slots=True)
class TokenClaim:
    """
    Subject and absolute expiry embedded in a signed token.

    :ivar subject: Internal user id.
    :ivar expires_at: Timezone-aware UTC expiry.
    """

    token_type: ClassVar[str]
    lifetime: ClassVar[timedelta]

    subject: int
    expires_at: datetime

    @classmethod
    def for_subject(cls, subject: int, *, now: datetime | None = None) -> Self:
        """Build a fresh claim expiring ``lifetime`` after ``now``."""
        issued = now or datetime.now(UTC)
        return cls(subject=subject, expires_at=issued + cls.lifetime)

    def is_expired(self, *, now: datetime | None = None) -> bool:
        return (now or datetime.now(UTC)) >= self.expires_at


@dataclass(frozen=True, slots=True)
class AccessClaim(TokenClaim):
    """Short-lived claim authorizing requests (one hour)."""

    token_type: ClassVar[str] = "access"
    lifetime: ClassVar[timedelta] = timedelta(seconds=3600)


@dataclass(frozen=True, slots=True)
class RefreshClaim(TokenClaim):
    """Long-lived claim backing the stored session (fourteen days)."""

    token_type: ClassVar[str] = "refresh"
    lifetime: ClassVar[timedelta] = timedelta(seconds=1_209_600)


ClaimKind = type[AccessClaim] | type[RefreshClaim]
