"""User-account service: contract, records and the default implementation."""

from __future__ import annotations

from .dto import IdMeta, User
from .port import UserService
from .service import SQLAlchemyUserService

__all__ = ["IdMeta", "User", "UserService", "SQLAlchemyUserService"]
