# pixiu/services/user/dto.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(slots=True)
class User:
    """
    User record exchanged between the HTTP layer and the user service.

    Incoming bodies are bound into this type; services return it for reads.
    ``password`` is only ever populated on the way in.

    :param name: Login name, unique per installation.
    :param id: Primary key, ``None`` until persisted.
    :param resource_version: Optimistic-lock counter.
    :param password: Raw password (input only).
    :param email: Optional contact address.
    :param status: Account status flag.
    :param role: Role flag.
    :param description: Free-form text.
    """

    name: str
    id: int | None = None
    resource_version: int | None = None
    password: str | None = None
    email: str | None = None
    status: int = 0
    role: int = 0
    description: str | None = None
    gmt_create: datetime | None = None
    gmt_modified: datetime | None = None


@dataclass(frozen=True, slots=True)
class IdMeta:
    """Identifier taken from the ``{userId}`` path segment."""

    user_id: int
