"""User model: identity row plus its single server-side session slot."""

from __future__ import annotations

from sqlalchemy import String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, validates

from sessiongate.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin


class User(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    Identity known to this service.

    Fields
    ------
    id : int
        Internal id. Assigned on first sign-up and never changed.
    external_id : str
        Opaque identifier supplied by the identity provider. Unique.
    display_name : str | None
        Optional name shown to other users.
    refresh_token : str | None
        The one active refresh token. ``None`` means no session is active;
        there is no history of earlier values.
    """

    __tablename__ = "users"

    external_id: Mapped[str] = mapped_column(String(255), nullable=False)
    display_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    refresh_token: Mapped[str | None] = mapped_column(Text, nullable=True)

    __table_args__ = (UniqueConstraint("external_id", name="uq_users_external_id"),)

    @property
    def has_active_session(self) -> bool:
        """``True`` while a refresh token is stored."""
        return self.refresh_token is not None

    @validates("external_id")
    def _validate_external_id(self, key: str, value: str) -> str:
        """
        Reject blank external ids.

        :raises ValueError: If the value is missing or only whitespace.
        """
        if not isinstance(value, str) or not value.strip():
            raise ValueError("External id is required.")
        return value
