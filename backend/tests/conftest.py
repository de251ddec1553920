"""Pytest fixtures for the pixiu user API.

Two application flavours are provided:

- ``app`` / ``client`` delegate to :class:`RecordingUserService`, so routing
  tests observe exactly which service calls happen.
- ``sql_app`` / ``sql_client`` use the default SQLAlchemy-backed service on an
  in-memory SQLite database created fresh for each test.
"""

from __future__ import annotations

import os
from collections.abc import Generator
from typing import Any

import pytest
from flask import Flask

from pixiu.core.config import TestingConfig
from pixiu.core.extensions import db as _db
from pixiu.factory import create_app
from pixiu.services._shared.ports import StubTokenProvider
from pixiu.services.user.service import SQLAlchemyUserService
from tests.helpers.services import RecordingUserService


class TestConfig(TestingConfig):
    """Testing configuration pinned to an in-memory database."""

    __test__ = False
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"


@pytest.fixture()
def service() -> RecordingUserService:
    """Fresh recording double for each test."""
    return RecordingUserService()


@pytest.fixture()
def app_config() -> type[TestConfig]:
    """Config class used by ``app``; override in a module to tweak settings."""
    return TestConfig


@pytest.fixture()
def app(app_config: type[TestConfig], service: RecordingUserService) -> Flask:
    """Create a Flask application delegating to the recording double."""
    os.environ.pop("DATABASE_URL", None)
    return create_app(app_config, user_service=service, instance_relative_config=False)


@pytest.fixture()
def client(app: Flask) -> Any:
    """Return a Flask test client."""
    return app.test_client()


@pytest.fixture()
def tokens() -> StubTokenProvider:
    return StubTokenProvider()


@pytest.fixture()
def user_service(tokens: StubTokenProvider) -> SQLAlchemyUserService:
    """Default service wired to the deterministic token provider."""
    return SQLAlchemyUserService(token_provider=tokens)


@pytest.fixture()
def sql_app(user_service: SQLAlchemyUserService) -> Generator[Flask, None, None]:
    """Application backed by the default service with tables created.

    The application context stays pushed for the whole test so requests and
    direct service calls share one session.
    """
    application = create_app(TestConfig, user_service=user_service, instance_relative_config=False)
    with application.app_context():
        _db.create_all()
        yield application
        _db.session.remove()
        _db.drop_all()


@pytest.fixture()
def sql_client(sql_app: Flask) -> Any:
    return sql_app.test_client()


@pytest.fixture()
def session(sql_app: Flask) -> Any:
    """Scoped session of ``sql_app``; also wired into Factory Boy."""
    from tests.factories import SQLAlchemySession

    SQLAlchemySession.set(_db.session)
    yield _db.session
    SQLAlchemySession.set(None)
