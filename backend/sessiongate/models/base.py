"""Column mixins for the mapped models."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, Integer, func
from sqlalchemy.orm import Mapped, mapped_column


class PKMixin:
    """Surrogate integer key.

    On :class:`~sessiongate.models.user.User` this is the internal id that
    issued tokens carry as ``sub``.
    """

    id: Mapped[int] = mapped_column(Integer, primary_key=True)


class TimestampMixin:
    """Server-side ``created_at``; ``updated_at`` moves on every UPDATE.

    Session writes are bulk ``UPDATE`` statements, so ``updated_at`` also
    records the last sign-in, revoke or rename.
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )


class ReprMixin:
    """``<ClassName id=...>`` representation (never includes tokens)."""

    def __repr__(self) -> str:
        return f"<{type(self).__name__} id={getattr(self, 'id', None)}>"
