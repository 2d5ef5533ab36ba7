# sessiongate/infra/sqlalchemy/credential_store.py
from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from sessiongate.services._shared.errors import NotFoundError, StoreError, violates
from sessiongate.services._shared.ports import CredentialStore
from sessiongate.uow import SQLAlchemyReadOnlyUnitOfWork, SQLAlchemyUnitOfWork

log = logging.getLogger(__name__)


@dataclass(slots=True)
class SQLAlchemyCredentialStore(CredentialStore):
    """
    Relational credential store over the ``users`` table.

    Every method runs exactly one statement inside its own unit of work and
    commits (or rolls back) before returning. Driver and connectivity errors
    are logged with detail and re-raised as :class:`StoreError`.

    :param rw_uow: Factory for read-write units of work.
    :param ro_uow: Factory for read-only units of work.
    """

    rw_uow: Callable[[], SQLAlchemyUnitOfWork] = field(default=SQLAlchemyUnitOfWork)
    ro_uow: Callable[[], SQLAlchemyReadOnlyUnitOfWork] = field(
        default=SQLAlchemyReadOnlyUnitOfWork
    )

    # -------------------- helpers --------------------

    @staticmethod
    @contextmanager
    def _guard(operation: str) -> Iterator[None]:
        try:
            yield
        except SQLAlchemyError as exc:
            log.error("store.%s failed: %s", operation, exc, exc_info=True)
            raise StoreError(f"{operation} failed") from exc

    # -------------------- API ------------------------

    def create_user(self, external_id: str, display_name: str | None) -> int:
        try:
            with self._guard("create_user"), self.rw_uow() as uow:
                user = uow.users.create(external_id=external_id, display_name=display_name)
                return user.id
        except StoreError as exc:
            cause = exc.__cause__
            if isinstance(cause, IntegrityError) and (
                violates(cause, "uq_users_external_id") or violates(cause, "users.external_id")
            ):
                raise StoreError(f"duplicate external id: {external_id}") from cause
            raise

    def find_internal_id_by_external_id(self, external_id: str) -> int | None:
        with self._guard("find_internal_id_by_external_id"), self.ro_uow() as uow:
            return uow.users.get_id_by_external_id(external_id)

    def find_internal_id(self, internal_id: int) -> int | None:
        with self._guard("find_internal_id"), self.ro_uow() as uow:
            return uow.users.get_id(internal_id)

    def fetch_refresh_token(self, external_id: str) -> str | None:
        with self._guard("fetch_refresh_token"), self.ro_uow() as uow:
            row = uow.users.get_refresh_token_row(external_id)
        if row is None:
            raise NotFoundError("User", external_id)
        return row.refresh_token

    def set_refresh_token(self, internal_id: int, token: str) -> int:
        with self._guard("set_refresh_token"), self.rw_uow() as uow:
            return uow.users.update_refresh_token(internal_id, token)

    def set_refresh_token_if_absent(self, internal_id: int, token: str) -> str | None:
        while True:
            with self._guard("set_refresh_token_if_absent"), self.rw_uow() as uow:
                changed = uow.users.update_refresh_token_if_null(internal_id, token)
            if changed:
                return None
            # Lost the race (or the row is gone): report what is stored now
            with self._guard("set_refresh_token_if_absent"), self.ro_uow() as uow:
                exists = uow.users.get_id(internal_id) is not None
                current = uow.users.get_refresh_token(internal_id)
            if not exists:
                raise NotFoundError("User", internal_id)
            if current is not None:
                return current
            # Cleared again between the two statements; retry the swap

    def clear_refresh_token(self, internal_id: int) -> int:
        with self._guard("clear_refresh_token"), self.rw_uow() as uow:
            rows = uow.users.clear_refresh_token(internal_id)
        log.debug("store.clear_refresh_token", extra={"internal_id": internal_id, "rows": rows})
        return rows

    def rename_user(self, internal_id: int, new_name: str) -> int:
        with self._guard("rename_user"), self.rw_uow() as uow:
            return uow.users.update_display_name(internal_id, new_name)
