"""Factory Boy base wired to the app-scoped SQLAlchemy session."""

from __future__ import annotations

import factory
from sessiongate.core.extensions import db


def _current_session():
    # Resolved per call: each test builds its own app and engine
    return db.session


class BaseFactory(factory.alchemy.SQLAlchemyModelFactory):
    """Persist through ``db.session``; requires the ``app`` fixture.

    Rows are committed, not just flushed, because the credential store reads
    and writes in its own units of work.
    """

    class Meta:
        abstract = True
        sqlalchemy_session_factory = _current_session
        sqlalchemy_session_persistence = "commit"
