"""Flask CLI commands for inspecting and ending user sessions."""

from __future__ import annotations

import logging

import click
from flask.cli import with_appcontext

from sessiongate.api.deps import get_session_service
from sessiongate.services._shared.errors import NotFoundError

LOGGER = logging.getLogger(__name__)


@click.group("session")
def session_cli() -> None:
    """Operator commands over the stored session slot."""


@session_cli.command("status")
@click.argument("external_id")
@with_appcontext
def status_command(external_id: str) -> None:
    """Print ACTIVE or NONE for EXTERNAL_ID."""
    store = get_session_service().store
    try:
        token = store.fetch_refresh_token(external_id)
    except NotFoundError as exc:
        click.echo(f"Unknown user: {external_id}", err=True)
        raise click.exceptions.Exit(1) from exc
    click.echo("ACTIVE" if token is not None else "NONE")


@session_cli.command("revoke")
@click.argument("internal_id", type=int)
@with_appcontext
def revoke_command(internal_id: int) -> None:
    """Clear the stored refresh token of INTERNAL_ID."""
    store = get_session_service().store
    if store.clear_refresh_token(internal_id) == 0:
        click.echo(f"No active session for user {internal_id}", err=True)
        raise click.exceptions.Exit(1)
    LOGGER.info("cli.session.revoke", extra={"internal_id": internal_id})
    click.echo("revoked")
