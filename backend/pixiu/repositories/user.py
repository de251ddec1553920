"""User repository for persistence and authentication utilities."""

from __future__ import annotations

from typing import cast

from sqlalchemy import select

from pixiu.models.user import User
from pixiu.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Persistence-only repository for :class:`User`.

    It never issues tokens; only DB-level user management.
    """

    model = User

    def _updatable_fields(self):
        """Publicly allowed updatable fields (password goes through the setter)."""
        return {"name", "email", "status", "role", "description", "password"}

    # ---------------------------- Lookup helpers ----------------------------

    def get_by_name(self, name: str) -> User | None:
        """Fetch a user by login name.

        :param name: Login name, trimmed before lookup.
        :type name: str
        :returns: User instance or ``None`` when not found.
        :rtype: User | None
        """
        stmt = select(User).where(User.name == name.strip())
        result = self.session.execute(stmt).scalars().first()
        return cast(User | None, result)

    def exists_by_name(self, name: str, *, exclude_id: int | None = None) -> bool:
        """Return ``True`` when another user already holds ``name``."""
        stmt = select(User.id).where(User.name == name.strip())
        if exclude_id is not None:
            stmt = stmt.where(User.id != exclude_id)
        return bool(self.session.execute(stmt).first())

    # ---------------------------- Password ops ----------------------------

    def authenticate(self, name: str, password: str) -> User | None:
        """Authenticate a user by name and password.

        :param name: Login name.
        :type name: str
        :param password: Raw password to verify.
        :type password: str
        :returns: Authenticated user or ``None`` when credentials fail.
        :rtype: User | None
        """
        user = self.get_by_name(name)
        if not user or not user.verify_password(password):
            return None
        return user
