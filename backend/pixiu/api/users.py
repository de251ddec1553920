"""User endpoints.

Every handler here is a plain function of ``(service, ctx, **bound)``; the
binding and envelope work happens in :mod:`pixiu.api.dispatch`.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from flask import Blueprint

from pixiu.api.dispatch import operation
from pixiu.schemas import LoginSchema, UserSchema
from pixiu.services._shared.context import ServiceContext
from pixiu.services.user.dto import User
from pixiu.services.user.port import UserService

bp = Blueprint("users", __name__)

user_schema = UserSchema()
user_list_schema = UserSchema(many=True)
login_schema = LoginSchema()


@operation(bp, "/", methods=["POST"], body=user_schema)
def create_user(service: UserService, ctx: ServiceContext, *, user: User) -> None:
    """Create a user."""

    service.create(ctx, user)


@operation(bp, "/<userId>", methods=["PUT"], bind_path=True, body=user_schema)
def update_user(service: UserService, ctx: ServiceContext, *, user_id: int, user: User) -> None:
    """Update a user by id."""

    service.update(ctx, user_id, user)


@operation(bp, "/<userId>", methods=["DELETE"], bind_path=True)
def delete_user(service: UserService, ctx: ServiceContext, *, user_id: int) -> None:
    """Delete a user by id."""

    service.delete(ctx, user_id)


@operation(bp, "/<userId>", methods=["GET"], bind_path=True, dump=user_schema)
def get_user(service: UserService, ctx: ServiceContext, *, user_id: int) -> User:
    """Return one user."""

    return service.get(ctx, user_id)


@operation(bp, "", methods=["GET"], dump=user_list_schema)
def list_users(service: UserService, ctx: ServiceContext) -> Sequence[User]:
    """Return every user, in the order the service yields them."""

    return service.list(ctx)


@operation(bp, "/login", methods=["POST"], body=login_schema, auth=False)
def login(service: UserService, ctx: ServiceContext, *, user: User) -> Any:
    """Exchange credentials for whatever the service issues (a token by default)."""

    return service.login(ctx, user)


@operation(bp, "/logout", methods=["POST"], auth=False)
def logout(service: UserService, ctx: ServiceContext) -> None:
    """Always succeed without calling the service.

    Logout is a stub: nothing is revoked server-side and clients are expected
    to drop their token. Whether real session invalidation belongs here is
    still open.
    """

    return None
