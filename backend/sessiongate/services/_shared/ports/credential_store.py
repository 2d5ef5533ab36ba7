from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Protocol

from sessiongate.services._shared.errors import NotFoundError, StoreError


class CredentialStore(Protocol):
    """
    Persistence port for users and their single stored refresh token.

    Every operation is one atomic statement. No transaction spans two calls,
    so check-then-write sequences built on top are only best-effort.
    """

    def create_user(self, external_id: str, display_name: str | None) -> int:
        """
        Insert a user and return its internal id.

        :raises StoreError: On duplicate ``external_id`` or store failure.
        """
        ...

    def find_internal_id_by_external_id(self, external_id: str) -> int | None: ...

    def find_internal_id(self, internal_id: int) -> int | None: ...

    def fetch_refresh_token(self, external_id: str) -> str | None:
        """
        Read the stored refresh token (``None`` when no session is active).

        :raises NotFoundError: If no user has ``external_id``.
        """
        ...

    def set_refresh_token(self, internal_id: int, token: str) -> int:
        """Overwrite the stored token. :returns: Rows affected."""
        ...

    def set_refresh_token_if_absent(self, internal_id: int, token: str) -> str | None:
        """
        Store ``token`` only if no token is stored.

        :returns: ``None`` when the write happened, otherwise the token that
            was already stored (left unchanged).
        """
        ...

    def clear_refresh_token(self, internal_id: int) -> int:
        """Null the stored token. :returns: Rows changed (0 if already null)."""
        ...

    def rename_user(self, internal_id: int, new_name: str) -> int: ...


@dataclass(slots=True)
class _Row:
    external_id: str
    display_name: str | None
    refresh_token: str | None = None


class InMemoryCredentialStore(CredentialStore):
    """
    Dict-backed credential store for unit tests.

    .. note::
       A lock makes each call atomic, mirroring single-statement atomicity of
       the relational store. Nothing spans calls.
    """

    def __init__(self) -> None:
        self._rows: dict[int, _Row] = {}
        self._seq = 0
        self._lock = threading.Lock()

    # -------------------------- helpers ----------------------------

    def _id_for(self, external_id: str) -> int | None:
        for internal_id, row in self._rows.items():
            if row.external_id == external_id:
                return internal_id
        return None

    # -------------------------- API ----------------------------

    def create_user(self, external_id: str, display_name: str | None) -> int:
        with self._lock:
            if self._id_for(external_id) is not None:
                raise StoreError(f"duplicate external id: {external_id}")
            self._seq += 1
            self._rows[self._seq] = _Row(external_id=external_id, display_name=display_name)
            return self._seq

    def find_internal_id_by_external_id(self, external_id: str) -> int | None:
        with self._lock:
            return self._id_for(external_id)

    def find_internal_id(self, internal_id: int) -> int | None:
        with self._lock:
            return internal_id if internal_id in self._rows else None

    def fetch_refresh_token(self, external_id: str) -> str | None:
        with self._lock:
            internal_id = self._id_for(external_id)
            if internal_id is None:
                raise NotFoundError("User", external_id)
            return self._rows[internal_id].refresh_token

    def set_refresh_token(self, internal_id: int, token: str) -> int:
        with self._lock:
            row = self._rows.get(internal_id)
            if row is None:
                return 0
            row.refresh_token = token
            return 1

    def set_refresh_token_if_absent(self, internal_id: int, token: str) -> str | None:
        with self._lock:
            row = self._rows.get(internal_id)
            if row is None:
                raise NotFoundError("User", internal_id)
            if row.refresh_token is not None:
                return row.refresh_token
            row.refresh_token = token
            return None

    def clear_refresh_token(self, internal_id: int) -> int:
        with self._lock:
            row = self._rows.get(internal_id)
            if row is None or row.refresh_token is None:
                return 0
            row.refresh_token = None
            return 1

    def rename_user(self, internal_id: int, new_name: str) -> int:
        with self._lock:
            row = self._rows.get(internal_id)
            if row is None:
                return 0
            row.display_name = new_name
            return 1

    # Test-only helpers

    def delete_user(self, internal_id: int) -> None:
        with self._lock:
            self._rows.pop(internal_id, None)

    def display_name_of(self, internal_id: int) -> str | None:
        return self._rows[internal_id].display_name
