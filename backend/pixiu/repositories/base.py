"""Generic repository base for SQLAlchemy 2.x.

Repositories are persistence-only:

* They never commit or roll back; services own transaction boundaries.
* Updates go through an explicit ``_updatable_fields`` whitelist so request
  payloads cannot mass-assign columns.
* Listing is always ordered by primary key so results are deterministic.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Generic, TypeVar, cast

from sqlalchemy import select
from sqlalchemy.orm import InstrumentedAttribute, Session

from pixiu.core.extensions import db

E = TypeVar("E")  # SQLAlchemy mapped entity type


class BaseRepository(Generic[E]):
    """Generic, persistence-only repository for a single aggregate.

    Subclasses MUST define ``model`` and SHOULD override
    ``_updatable_fields``.
    """

    #: SQLAlchemy mapped model (must be set by subclasses)
    model: type[E]

    def __init__(self, session: Session | None = None) -> None:
        """Initialise the repository with an optional SQLAlchemy session.

        When no explicit session is provided the repository falls back to the
        Flask-scoped session exposed by ``pixiu.core.extensions``.

        :param session: Session shared across the use case.
        :type session: :class:`sqlalchemy.orm.Session` | None
        """
        self._session: Session | None = session

    @property
    def session(self) -> Session:
        """Return the injected session or the Flask-scoped one."""
        if self._session is not None:
            return self._session
        return cast(Session, db.session)

    # ------------------------------ Extensibility ----------------------------

    def _pk_attr(self) -> InstrumentedAttribute[Any]:
        return cast(InstrumentedAttribute[Any], getattr(self.model, "id"))

    def _updatable_fields(self) -> set[str]:
        """Whitelist of keys that can be assigned on update (empty by default)."""
        return set()

    # --------------------------------- CRUD ----------------------------------

    def add(self, instance: E) -> E:
        """Stage a new entity and flush to materialize the PK.

        :param instance: New entity instance.
        :type instance: E
        :returns: The same instance after ``flush()``.
        :rtype: E
        """
        self.session.add(instance)
        self.flush()
        return instance

    def get(self, entity_id: Any) -> E | None:
        """Retrieve a single entity by primary key, or ``None``."""
        stmt = select(self.model).where(self._pk_attr() == entity_id)
        result = self.session.execute(stmt).scalars().first()
        return cast(E | None, result)

    def list_all(self) -> list[E]:
        """Return every row ordered by primary key."""
        stmt = select(self.model).order_by(self._pk_attr().asc())
        return list(self.session.execute(stmt).scalars().all())

    def assign_updates(self, instance: E, fields: Mapping[str, Any]) -> E:
        """Assign whitelisted ``fields`` onto ``instance``.

        :param instance: Persistent entity to mutate.
        :param fields: Public key to value mapping.
        :returns: The same instance.
        :raises ValueError: If a key is not whitelisted.
        """
        allowed = self._updatable_fields()
        unknown = [k for k in fields if k not in allowed]
        if unknown:
            raise ValueError(f"Unknown or non-updatable fields: {unknown}")
        for key, value in fields.items():
            setattr(instance, key, value)
        return instance

    def delete(self, instance: E) -> None:
        """Delete ``instance`` and flush."""
        self.session.delete(instance)
        self.flush()

    def flush(self) -> None:
        self.session.flush()
