"""Shared API helpers for request-scoped collaborators and cross-cutting concerns."""

from __future__ import annotations

from typing import cast

from flask import current_app
from flask_jwt_extended import get_jwt_identity, verify_jwt_in_request

from pixiu.core.logger import ensure_request_id
from pixiu.services._shared.context import ServiceContext
from pixiu.services.user.port import UserService


USER_SERVICE_KEY = "pixiu.user_service"


def get_user_service() -> UserService:
    """Return the user service registered on the current application."""

    service = current_app.extensions.get(USER_SERVICE_KEY)
    if service is None:
        raise RuntimeError("No user service registered. Call pixiu.api.init_app() first.")
    return cast(UserService, service)


def auth_enabled() -> bool:
    return bool(current_app.config.get("AUTH_REQUIRED", True))


def authenticate(required: bool) -> str | None:
    """Verify the bearer token when ``required`` and enforcement is on.

    :returns: The token identity, or ``None`` when nothing was verified.
    :raises flask_jwt_extended.exceptions.NoAuthorizationError: Missing token.
    """
    if not (required and auth_enabled()):
        return None
    verify_jwt_in_request(optional=False)
    identity = get_jwt_identity()
    return None if identity is None else str(identity)


def build_context(*, actor_id: str | None = None) -> ServiceContext:
    """Assemble the :class:`ServiceContext` handed to the user service."""

    return ServiceContext.with_timeout(
        current_app.config.get("REQUEST_DEADLINE_SECONDS"),
        request_id=ensure_request_id(),
        actor_id=actor_id,
    )
