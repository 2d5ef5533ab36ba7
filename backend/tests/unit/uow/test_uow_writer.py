"""
Unit tests for SQLAlchemyUnitOfWork (writer), using factories.
"""

from __future__ import annotations

import pytest
from sessiongate.models import User
from sessiongate.uow import SQLAlchemyUnitOfWork
from tests.factories.user import UserFactory


class TestSQLAlchemyUnitOfWorkWriter:
    def test_writer_uow_commits_on_success(self, session):
        """
        GIVEN a writer UoW
        WHEN we create a user via repo inside the context and leave without exception
        THEN the transaction is committed and the row is visible afterwards.
        """
        initial = session.query(User).count()

        with SQLAlchemyUnitOfWork() as uow:
            uow.users.create(external_id="idp|writer", display_name="Writer")

        session.rollback()  # a later rollback must not undo a committed UoW
        assert session.query(User).count() == initial + 1

    def test_writer_uow_rolls_back_on_exception(self, session):
        """
        GIVEN a writer UoW
        WHEN an exception is raised inside the context
        THEN the transaction is rolled back and no rows are persisted.
        """
        initial = session.query(User).count()

        with pytest.raises(RuntimeError), SQLAlchemyUnitOfWork() as uow:
            uow.users.create(external_id="idp|boom", display_name=None)
            raise RuntimeError("boom")

        assert session.query(User).count() == initial

    def test_writer_uow_persists_session_slot_update(self, session):
        user = UserFactory()

        with SQLAlchemyUnitOfWork() as uow:
            assert uow.users.update_refresh_token(user.id, "rt-1") == 1

        session.expire_all()
        assert session.get(User, user.id).refresh_token == "rt-1"
