"""Flask CLI commands for bootstrapping the user store."""

from __future__ import annotations

import logging

import click
from flask import current_app
from flask.cli import with_appcontext

from pixiu.api.deps import get_user_service
from pixiu.core.extensions import db
from pixiu.services._shared.context import ServiceContext
from pixiu.services._shared.errors import ServiceError
from pixiu.services.user.dto import User

LOGGER = logging.getLogger(__name__)

ADMIN_ROLE = 1


@click.group("users")
def users_cli() -> None:
    """User store maintenance commands."""


@users_cli.command("init-db")
@with_appcontext
def init_db_command() -> None:
    """Create the tables used by the default user service."""
    db.create_all()
    click.echo("Tables created.")


@users_cli.command("create-admin")
@click.option("--name", default=None, help="Login name (defaults to PIXIU_ADMIN_NAME).")
@click.option(
    "--password",
    default=None,
    help="Password (defaults to PIXIU_ADMIN_PASSWORD, prompted when unset).",
)
@with_appcontext
def create_admin_command(name: str | None, password: str | None) -> None:
    """Create the bootstrap administrator through the registered user service."""
    name = name or current_app.config.get("PIXIU_ADMIN_NAME") or "admin"
    password = password or current_app.config.get("PIXIU_ADMIN_PASSWORD")
    if not password:
        password = click.prompt("Password", hide_input=True, confirmation_prompt=True)

    service = get_user_service()
    try:
        service.create(ServiceContext(), User(name=name, password=password, role=ADMIN_ROLE))
    except ServiceError as exc:
        raise click.ClickException(str(exc)) from exc
    LOGGER.info("cli.admin_created")
    click.echo(f"Administrator '{name}' created.")
