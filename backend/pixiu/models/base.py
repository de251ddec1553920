"""Reusable SQLAlchemy mixins shared by models (typed 2.0)."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import BigInteger, DateTime, Integer, func
from sqlalchemy.orm import Mapped, mapped_column


class TimestampMixin:
    """Provide ``gmt_create`` and ``gmt_modified`` timestamp columns.

    Attributes
    ----------
    gmt_create:
        Timezone-aware timestamp filled by the database on insert.
    gmt_modified:
        Timezone-aware timestamp refreshed by the database on update.
    """

    gmt_create: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    gmt_modified: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )


class PKMixin:
    """Expose a 64-bit surrogate primary key ``id`` and a ``resource_version``.

    Attributes
    ----------
    id:
        Auto-incrementing primary key. SQLite only autoincrements ``INTEGER``
        columns, hence the variant.
    resource_version:
        Counter bumped on every update; used for optimistic locking.
    """

    id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"), primary_key=True
    )
    resource_version: Mapped[int] = mapped_column(Integer, nullable=False, default=0)


class ReprMixin:
    """Provide a concise ``__repr__`` including the class name and id."""

    def __repr__(self) -> str:
        cls = self.__class__.__name__
        key = getattr(self, "id", None)
        return f"<{cls} id={key}>"
