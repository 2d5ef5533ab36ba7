"""API blueprint package aggregating the HTTP routes."""

from __future__ import annotations

from collections.abc import Iterable

from flask import Blueprint, Flask


def register_blueprint_group(
    app: Flask,
    *,
    base_prefix: str,
    entries: Iterable[tuple[Blueprint, str]],
) -> None:
    """Register related blueprints beneath a common prefix.

    Parameters
    ----------
    app:
        Application instance receiving the blueprints.
    base_prefix:
        Prefix applied to all entries; may be empty.
    entries:
        ``(blueprint, relative_prefix)`` pairs; ``relative_prefix`` is
        appended to ``base_prefix``.
    """

    for bp, rel_prefix in entries:
        full_prefix = "/".join(
            segment for segment in [base_prefix.strip("/"), rel_prefix.strip("/")] if segment
        )
        app.register_blueprint(bp, url_prefix=f"/{full_prefix}" if full_prefix else None)


def init_app(app: Flask) -> None:
    """Register every API blueprint under ``API_BASE_PREFIX``."""

    # Import blueprints *only here* to keep imports localized and avoid cycles.
    from .health import bp as health_bp
    from .session import bp as session_bp
    from .users import bp as users_bp

    register_blueprint_group(
        app,
        base_prefix=app.config.get("API_BASE_PREFIX", ""),
        entries=[
            (health_bp, ""),  # -> /health
            (session_bp, ""),  # -> /signin, /token/renew, /token
            (users_bp, ""),  # -> /user/name
        ],
    )


__all__ = ["init_app", "register_blueprint_group"]
