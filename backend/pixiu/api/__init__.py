"""API blueprint package for the user surface."""

from __future__ import annotations

from collections.abc import Iterable

from flask import Blueprint, Flask

from pixiu.services.user.port import UserService


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
        Prefix applied to all entries, ``"/pixiu"`` by default.
    entries:
        Iterable of ``(blueprint, relative_prefix)`` pairs where
        ``relative_prefix`` is appended to ``base_prefix``.
    """

    for bp, rel_prefix in entries:
        full_prefix = "/".join(
            segment for segment in [base_prefix.rstrip("/"), rel_prefix.strip("/")] if segment
        )
        full_prefix = "/" + full_prefix if not full_prefix.startswith("/") else full_prefix
        app.register_blueprint(bp, url_prefix=full_prefix)


def init_app(app: Flask, *, user_service: UserService | None = None) -> None:
    """Mount the user routes and register the service they delegate to.

    When ``user_service`` is omitted the SQLAlchemy-backed default is used.
    """

    from pixiu.api.deps import USER_SERVICE_KEY
    from pixiu.api.users import bp as users_bp

    if user_service is None:
        from pixiu.services.user.service import SQLAlchemyUserService

        user_service = SQLAlchemyUserService()
    app.extensions[USER_SERVICE_KEY] = user_service

    api_base = app.config.get("API_BASE_PREFIX", "/pixiu")
    register_blueprint_group(app, base_prefix=api_base, entries=[(users_bp, "/users")])


__all__ = ["init_app", "register_blueprint_group"]
