"""
SQLAlchemyUserService
=====================

Default implementation of :class:`pixiu.services.user.port.UserService`:
- Accounts persisted through :class:`UserRepository`
- Passwords hashed by the model
- Login issues an access token through a :class:`TokenProvider`
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from pixiu.models.user import User as UserModel
from pixiu.repositories.user import UserRepository
from pixiu.services._shared.context import ServiceContext
from pixiu.services._shared.errors import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    ServiceError,
    violates,
)
from pixiu.services._shared.ports import TokenProvider
from pixiu.services.user.dto import User

log = logging.getLogger(__name__)


def to_dto(model: UserModel) -> User:
    """Convert a persistent row into the public :class:`User` record."""

    return User(
        id=model.id,
        resource_version=model.resource_version,
        name=model.name,
        email=model.email,
        status=model.status,
        role=model.role,
        description=model.description,
        gmt_create=model.gmt_create,
        gmt_modified=model.gmt_modified,
    )


class SQLAlchemyUserService:
    """
    Application service for user accounts.

    Responsibilities
    ----------------
    - Create, update and delete accounts, enforcing name uniqueness.
    - Reject updates carrying a stale ``resource_version``.
    - Authenticate credentials and issue access tokens.
    """

    def __init__(
        self,
        *,
        token_provider: TokenProvider | None = None,
        session: Session | None = None,
    ) -> None:
        if token_provider is None:
            from pixiu.infra.jwt import JWTTokenProvider

            token_provider = JWTTokenProvider()
        self.tokens = token_provider
        self.repo = UserRepository(session)

    @property
    def session(self) -> Session:
        return self.repo.session

    # --------------------------------------------------------------------- #
    # Commands
    # --------------------------------------------------------------------- #

    def create(self, ctx: ServiceContext, user: User) -> None:
        """
        Persist a new account.

        :raises ServiceError: When no password is supplied or the deadline passed.
        :raises ConflictError: When the name is taken.
        """
        self._ensure_live(ctx)
        if not user.password:
            raise ServiceError("password is required")
        if self.repo.exists_by_name(user.name):
            raise ConflictError("User", f"name '{user.name}' already in use")

        try:
            model = UserModel(
                name=user.name,
                password=user.password,
                email=user.email,
                status=user.status,
                role=user.role,
                description=user.description,
            )
        except ValueError as exc:
            raise ServiceError(str(exc)) from exc

        self._commit(lambda: self.repo.add(model), name=user.name)
        log.info("user.created", extra={"user_id": model.id})

    def update(self, ctx: ServiceContext, user_id: int, user: User) -> None:
        """
        Replace the mutable fields of an account.

        The password only changes when the payload carries one.

        :raises NotFoundError: If the account does not exist.
        :raises ConflictError: On stale ``resource_version`` or a taken name.
        """
        self._ensure_live(ctx)
        model = self._require(user_id)
        if user.resource_version is not None and user.resource_version != model.resource_version:
            raise ConflictError("User", "resource version mismatch, reload and retry")
        if self.repo.exists_by_name(user.name, exclude_id=user_id):
            raise ConflictError("User", f"name '{user.name}' already in use")

        fields: dict[str, Any] = {
            "name": user.name,
            "email": user.email,
            "status": user.status,
            "role": user.role,
            "description": user.description,
        }
        if user.password:
            fields["password"] = user.password

        def _apply() -> None:
            self.repo.assign_updates(model, fields)
            model.resource_version += 1
            self.repo.flush()

        self._commit(_apply, name=user.name)
        log.info("user.updated", extra={"user_id": user_id})

    def delete(self, ctx: ServiceContext, user_id: int) -> None:
        """
        Remove an account.

        :raises NotFoundError: If the account does not exist.
        """
        self._ensure_live(ctx)
        model = self._require(user_id)
        self.repo.delete(model)
        self.session.commit()
        log.info("user.deleted", extra={"user_id": user_id})

    # --------------------------------------------------------------------- #
    # Queries
    # --------------------------------------------------------------------- #

    def get(self, ctx: ServiceContext, user_id: int) -> User:
        """
        Retrieve one account.

        :raises NotFoundError: If the account does not exist.
        """
        return to_dto(self._require(user_id))

    def list(self, ctx: ServiceContext) -> Sequence[User]:
        """Return every account ordered by id."""
        return [to_dto(model) for model in self.repo.list_all()]

    # --------------------------------------------------------------------- #
    # Authentication
    # --------------------------------------------------------------------- #

    def login(self, ctx: ServiceContext, credentials: User) -> str:
        """
        Verify credentials and issue an access token.

        :returns: Encoded access token.
        :raises AuthenticationError: When name or password do not match.
        """
        if not credentials.password:
            raise AuthenticationError()
        model = self.repo.authenticate(credentials.name, credentials.password)
        if model is None:
            log.warning("user.login_failed")
            raise AuthenticationError()
        return self.tokens.create_access_token(
            identity=str(model.id),
            additional_claims={"name": model.name, "role": model.role},
        )

    # --------------------------------------------------------------------- #
    # Internals
    # --------------------------------------------------------------------- #

    def _require(self, user_id: int) -> UserModel:
        model = self.repo.get(user_id)
        if model is None:
            raise NotFoundError("User", user_id)
        return model

    def _ensure_live(self, ctx: ServiceContext) -> None:
        if ctx.expired:
            raise ServiceError("request deadline exceeded")

    def _commit(self, work, *, name: str) -> None:
        """Run ``work`` and commit, rolling back on any failure."""
        try:
            work()
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            if violates(exc, "uq_users_name"):
                raise ConflictError("User", f"name '{name}' already in use") from exc
            raise
        except ValueError as exc:
            self.session.rollback()
            raise ServiceError(str(exc)) from exc
