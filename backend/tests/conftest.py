"""Pytest fixtures building an isolated application per test.

Each test gets a fresh app over an in-memory SQLite database whose schema is
created on entry and dropped on exit, so committed data never leaks between
cases.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Generator
from typing import Any

import pytest
from flask import Flask
from sessiongate.core.config import TestingConfig
from sessiongate.core.extensions import db as _db  # Flask-SQLAlchemy instance
from sessiongate.factory import create_app  # application factory under test


def _build_app(**overrides: Any) -> Flask:
    # Ensure env-based config does not leak into tests
    os.environ.pop("DATABASE_URL", None)
    config = type("TestConfig", (TestingConfig,), overrides)
    application = create_app(config, instance_relative_config=False)
    application.logger.setLevel("WARNING")
    return application


@pytest.fixture()
def app_overrides() -> dict[str, Any]:
    """Config attributes layered over :class:`TestingConfig`.

    Override this fixture in a test module to tweak the configuration.
    """
    return {}


@pytest.fixture()
def app(app_overrides: dict[str, Any]) -> Generator[Flask, None, None]:
    """Create a Flask application configured for testing.

    Yields
    ------
    flask.Flask
        Application with its schema created, inside an active app context.
    """
    application = _build_app(**app_overrides)
    with application.app_context():
        _db.create_all()
        yield application
        _db.session.remove()
        _db.drop_all()


@pytest.fixture()
def session(app: Flask) -> Any:
    """Return the Flask-scoped SQLAlchemy session bound to ``app``."""
    return _db.session


@pytest.fixture()
def client(app: Flask) -> Any:
    """Return a Flask test client."""
    return app.test_client()


@pytest.fixture()
def runner(app: Flask) -> Any:
    """Return a click runner for the app's CLI commands."""
    return app.test_cli_runner()


@pytest.fixture(scope="session")
def faker():
    """Provide a :class:`faker.Faker` instance seeded for deterministic tests."""
    from faker import Faker

    fk = Faker()
    Faker.seed(1337)
    return fk


@pytest.fixture()
def freeze_time() -> Callable[[str | None], Any]:
    """Factory returning :func:`freezegun.freeze_time`.

    Examples
    --------
    >>> def test_with_frozen_time(freeze_time):
    ...     with freeze_time("2024-01-01"):
    ...         ...
    """

    from freezegun import freeze_time as _freeze_time

    def _factory(target: str | None = None) -> Any:
        return _freeze_time(target or "2024-01-01")

    return _factory
