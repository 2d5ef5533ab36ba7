"""Units of work over the Flask-SQLAlchemy scoped session."""

from __future__ import annotations

from sqlalchemy.orm import Session

from sessiongate.core.extensions import db
from sessiongate.repositories import UserRepository
from sessiongate.uow.base import UnitOfWork


class SQLAlchemyUnitOfWork(UnitOfWork):
    """Read-write scope: the statement's effects are committed on success.

    :param session: Session to use; defaults to the request-scoped one.
    """

    def __init__(self, session: Session | None = None) -> None:
        self.session: Session = session if session is not None else db.session
        self.users = UserRepository(session=self.session)

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()


class SQLAlchemyReadOnlyUnitOfWork(SQLAlchemyUnitOfWork):
    """Read scope: always ends in a rollback, and ``commit()`` is refused.

    Reads here are single ``SELECT`` statements, so the rollback only releases
    the connection's transaction.
    """

    def __exit__(self, exc_type, exc, tb) -> None:
        self.rollback()

    def commit(self) -> None:
        """:raises RuntimeError: Always; nothing read-only may be persisted."""
        raise RuntimeError("Read-only UnitOfWork does not allow commit().")
