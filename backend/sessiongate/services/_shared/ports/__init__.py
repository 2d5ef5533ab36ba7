"""
sessiongate.services._shared.ports
==================================

*Ports* (hexagonal interfaces) the session service depends on.

Modules
-------
- :mod:`token_codec`:
    Defines :class:`~.TokenCodec`: signing and verification of claims.

- :mod:`credential_store`:
    Defines :class:`~.CredentialStore` and the test double
    :class:`~.InMemoryCredentialStore`.

Concrete adapters (JWT, SQLAlchemy) live under ``sessiongate.infra``.
"""

from __future__ import annotations

from .credential_store import CredentialStore, InMemoryCredentialStore
from .token_codec import TokenCodec

__all__ = [
    "TokenCodec",
    "CredentialStore",
    "InMemoryCredentialStore",
]
