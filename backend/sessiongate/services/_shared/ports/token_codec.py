from __future__ import annotations

from typing import Protocol

from sessiongate.services._shared.claims import ClaimKind, TokenClaim


class TokenCodec(Protocol):
    """Port for signing claims and checking presented tokens.

    ``verify`` and ``subject_of`` never raise: any failure (signature, expiry,
    wrong kind, garbage input) is reported as ``False`` / ``None``.
    """

    def issue(self, claim: TokenClaim) -> str:
        """Sign ``claim``. :raises SigningError: If no usable key is configured."""
        ...

    def verify(self, token: str, kind: ClaimKind) -> bool: ...

    def subject_of(self, token: str, kind: ClaimKind) -> int | None: ...
