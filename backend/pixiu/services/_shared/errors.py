"""
Domain-level exceptions raised by user services.

These exceptions are **framework-agnostic**: they never import Flask or HTTP
helpers. They are the only way a service reports failure to the dispatch
layer, which carries their message to the client verbatim and derives a
status code from the class (see ``pixiu.api.dispatch.delegation_error``).
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError


def violates(exc: IntegrityError, constraint_name: str) -> bool:
    """
    Check whether an IntegrityError originates from a specific constraint.

    Parameters
    ----------
    exc : IntegrityError
        The exception raised by SQLAlchemy during flush/commit.
    constraint_name : str
        The database constraint to match (e.g., ``'uq_users_name'``).

    Returns
    -------
    bool
        True if the IntegrityError mentions the constraint.

    Notes
    -----
    SQLite reports the column (``users.name``) instead of the constraint name,
    so the trailing column segment of ``constraint_name`` is matched too.
    """
    message = str(exc.orig).lower() if exc.orig else ""
    name = constraint_name.lower()
    if name in message:
        return True
    column = name.rsplit("_", 1)[-1]
    return f".{column}" in message


# --------------------------------------------------------------------------- #
# Base types
# --------------------------------------------------------------------------- #


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    Notes
    -----
    - These are *not* HTTP errors.
    - ``str(exc)`` is shown to the client as-is, so keep it safe to expose.
    """

    pass


# --------------------------------------------------------------------------- #
# Specific domain-level errors
# --------------------------------------------------------------------------- #


@dataclass
class NotFoundError(ServiceError):
    """
    Raised when an entity is not found in the repository.

    :param entity: Entity name (e.g., "User").
    :type entity: str
    :param key: Identifier or search key.
    :type key: str | int
    """

    entity: str
    key: str | int

    def __str__(self) -> str:
        return f"{self.entity} not found: {self.key}"


@dataclass
class ConflictError(ServiceError):
    """
    Raised when a unique constraint or optimistic-lock conflict occurs.

    :param entity: Entity name (e.g., "User").
    :type entity: str
    :param detail: Short human-readable explanation.
    :type detail: str
    """

    entity: str
    detail: str

    def __str__(self) -> str:
        return f"Conflict on {self.entity}: {self.detail}"


class AuthenticationError(ServiceError):
    """Raised when credentials do not identify an active account."""

    def __init__(self, message: str = "Invalid username or password") -> None:
        super().__init__(message)
