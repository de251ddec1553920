"""Contract every user service implementation satisfies."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol, runtime_checkable

from pixiu.services._shared.context import ServiceContext
from pixiu.services.user.dto import User


@runtime_checkable
class UserService(Protocol):
    """
    User-account operations the HTTP layer delegates to.

    Implementations report failures by raising
    :class:`pixiu.services._shared.errors.ServiceError` (or a subclass); the
    message is shown to the client verbatim. ``ctx`` is request-scoped and
    must not be retained past the call.
    """

    def create(self, ctx: ServiceContext, user: User) -> None: ...

    def update(self, ctx: ServiceContext, user_id: int, user: User) -> None: ...

    def delete(self, ctx: ServiceContext, user_id: int) -> None: ...

    def get(self, ctx: ServiceContext, user_id: int) -> User: ...

    def list(self, ctx: ServiceContext) -> Sequence[User]: ...

    def login(self, ctx: ServiceContext, credentials: User) -> Any: ...
