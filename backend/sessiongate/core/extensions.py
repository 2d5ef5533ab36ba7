"""Flask extension singletons: database, migrations and JWT signing."""

from __future__ import annotations

from flask import Flask
from flask_jwt_extended import JWTManager
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import MetaData

# Constraint names are deterministic so migrations and IntegrityError
# matching (``uq_users_external_id``) agree across dialects.
metadata = MetaData(
    naming_convention={
        "ix": "ix_%(table_name)s_%(column_0_name)s",
        "uq": "uq_%(table_name)s_%(column_0_name)s",
        "pk": "pk_%(table_name)s",
    }
)

db: SQLAlchemy = SQLAlchemy(session_options={"autoflush": False}, metadata=metadata)
migrate = Migrate()
jwt = JWTManager()


def init_app(app: Flask) -> None:
    """Bind the extensions to ``app``.

    Importing :mod:`sessiongate.models` here completes the metadata before
    ``create_all`` or Alembic autogenerate inspects it. SQLite cannot
    ``ALTER`` columns in place, so migrations run in batch mode there.
    """
    db.init_app(app)

    from sessiongate import models as _models  # noqa: F401

    uri = str(app.config.get("SQLALCHEMY_DATABASE_URI", ""))
    migrate.init_app(app, db, render_as_batch=uri.startswith("sqlite"))

    # Tokens are only ever read from the Authorization header
    app.config.setdefault("JWT_TOKEN_LOCATION", ["headers"])
    jwt.init_app(app)
