"""Service layer public API.

Re-exports
----------
- :class:`ServiceContext` (request-scoped data threaded into every call)
- Errors: :class:`ServiceError`, :class:`NotFoundError`,
  :class:`ConflictError`, :class:`AuthenticationError`
- User service: :class:`UserService` (contract),
  :class:`SQLAlchemyUserService` (default implementation), :class:`User`
"""

from __future__ import annotations

from ._shared.context import ServiceContext
from ._shared.errors import AuthenticationError, ConflictError, NotFoundError, ServiceError
from .user import IdMeta, SQLAlchemyUserService, User, UserService

__all__ = [
    "ServiceContext",
    "ServiceError",
    "NotFoundError",
    "ConflictError",
    "AuthenticationError",
    "IdMeta",
    "User",
    "UserService",
    "SQLAlchemyUserService",
]
