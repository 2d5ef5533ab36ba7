"""Application factory wiring Flask extensions, the session service and blueprints."""

from __future__ import annotations

from flask import Flask

from sessiongate.core.config import BaseConfig, get_config
from sessiongate.core.logger import configure_logging, init_app as init_logging


def create_app(
    config: str | type[BaseConfig] | object | None = None,
    *,
    instance_relative_config: bool = True,
    instance_config_filename: str = "config.py",
) -> Flask:
    """Build and configure the Flask application."""

    app = Flask(__name__, instance_relative_config=instance_relative_config)

    app.config.from_object(get_config() if config is None else config)
    if instance_relative_config and instance_config_filename:
        app.config.from_pyfile(instance_config_filename, silent=True)

    configure_logging(app.config.get("LOG_LEVEL", "INFO"))

    # Proxy headers if running behind a reverse proxy
    from sessiongate.core import proxy

    proxy.init_app(app)

    from sessiongate.core import extensions

    extensions.init_app(app)

    init_logging(app)

    from sessiongate.core import cors

    cors.init_app(app)

    _init_session_service(app)

    from sessiongate.api import init_app as init_api

    init_api(app)

    from sessiongate.core import errors

    errors.init_app(app)

    from sessiongate import cli as app_cli

    app_cli.init_app(app)

    return app


def _init_session_service(app: Flask) -> None:
    """Build the process-wide :class:`SessionService` once and publish it.

    The service holds no per-request state, so a single instance is shared by
    every handler through ``app.extensions``.
    """
    from sessiongate.api.deps import SERVICE_EXTENSION_KEY
    from sessiongate.infra.jwt import JWTTokenCodec
    from sessiongate.infra.sqlalchemy import SQLAlchemyCredentialStore
    from sessiongate.services import SessionService

    app.extensions[SERVICE_EXTENSION_KEY] = SessionService(
        codec=JWTTokenCodec(),
        store=SQLAlchemyCredentialStore(),
        compare_and_swap=bool(app.config.get("AUTH_SIGNIN_COMPARE_AND_SWAP", False)),
    )
