"""User repository: single-statement reads and writes over ``users``."""

from __future__ import annotations

from typing import Any, cast

from sqlalchemy import CursorResult, Row, select, update

from sessiongate.models.user import User
from sessiongate.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Persistence-only repository for :class:`User`.

    Each method issues exactly one statement. Write helpers return the number
    of rows the statement changed so callers can tell "no such row" (or
    "nothing to change") apart from success.
    """

    model = User

    # ---------------------------- Creation ----------------------------

    def create(self, *, external_id: str, display_name: str | None) -> User:
        """Insert a user row and flush to obtain its id.

        :param external_id: Identity-provider id (must be unique).
        :type external_id: str
        :param display_name: Optional display name.
        :type display_name: str | None
        :returns: The persisted user with ``id`` populated.
        :rtype: User
        :raises sqlalchemy.exc.IntegrityError: On duplicate ``external_id``.
        """
        return self.add(User(external_id=external_id, display_name=display_name))

    # ---------------------------- Lookups ----------------------------

    def get_id_by_external_id(self, external_id: str) -> int | None:
        stmt = select(User.id).where(User.external_id == external_id)
        return cast(int | None, self.session.execute(stmt).scalar_one_or_none())

    def get_id(self, user_id: int) -> int | None:
        stmt = select(User.id).where(User.id == user_id)
        return cast(int | None, self.session.execute(stmt).scalar_one_or_none())

    def get_refresh_token_row(self, external_id: str) -> Row[Any] | None:
        """Return the ``(refresh_token,)`` row for ``external_id``.

        A missing row means the user is unknown; a row holding ``None`` means
        the user exists without an active session.
        """
        stmt = select(User.refresh_token).where(User.external_id == external_id)
        return self.session.execute(stmt).first()

    def get_refresh_token(self, user_id: int) -> str | None:
        stmt = select(User.refresh_token).where(User.id == user_id)
        return cast(str | None, self.session.execute(stmt).scalar_one_or_none())

    # ---------------------------- Session slot ----------------------------

    def update_refresh_token(self, user_id: int, token: str) -> int:
        """Overwrite the stored refresh token unconditionally."""
        stmt = update(User).where(User.id == user_id).values(refresh_token=token)
        return self._rowcount(stmt)

    def update_refresh_token_if_null(self, user_id: int, token: str) -> int:
        """Store ``token`` only when no refresh token is currently stored."""
        stmt = (
            update(User)
            .where(User.id == user_id, User.refresh_token.is_(None))
            .values(refresh_token=token)
        )
        return self._rowcount(stmt)

    def clear_refresh_token(self, user_id: int) -> int:
        """Null the stored refresh token.

        The ``IS NOT NULL`` predicate makes an already-cleared slot report
        zero rows on every dialect, not only on MySQL.
        """
        stmt = (
            update(User)
            .where(User.id == user_id, User.refresh_token.is_not(None))
            .values(refresh_token=None)
        )
        return self._rowcount(stmt)

    # ---------------------------- Profile ----------------------------

    def update_display_name(self, user_id: int, display_name: str) -> int:
        stmt = update(User).where(User.id == user_id).values(display_name=display_name)
        return self._rowcount(stmt)

    # ---------------------------- Internals ----------------------------

    def _rowcount(self, stmt: Any) -> int:
        result = self.session.execute(stmt.execution_options(synchronize_session=False))
        return int(cast(CursorResult[Any], result).rowcount)
