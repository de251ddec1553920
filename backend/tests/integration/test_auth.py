"""Bearer-token enforcement on the user routes."""

from __future__ import annotations

from datetime import timedelta

import pytest
from flask_jwt_extended import create_access_token

from pixiu.services.user.dto import User
from tests.conftest import TestConfig
from tests.helpers.utils import assert_failure, assert_success, json_headers

BASE = "/pixiu/users"


class AuthConfig(TestConfig):
    AUTH_REQUIRED = True


@pytest.fixture()
def app_config():
    return AuthConfig


def _token(app, identity: str = "7", **kwargs) -> str:
    with app.app_context():
        return create_access_token(identity=identity, **kwargs)


@pytest.mark.parametrize(
    ("method", "path"),
    [
        ("post", f"{BASE}/"),
        ("put", f"{BASE}/1"),
        ("delete", f"{BASE}/1"),
        ("get", f"{BASE}/1"),
        ("get", BASE),
    ],
)
def test_protected_routes_require_token(client, service, method, path):
    resp = getattr(client, method)(path, json={"name": "alice"})

    assert_failure(resp, 401)
    assert service.calls == []


def test_valid_token_sets_actor_on_context(app, client, service):
    resp = client.get(BASE, headers=json_headers(_token(app, "7")))

    assert_success(resp)
    assert service.calls[0].ctx.actor_id == "7"


def test_garbage_token_rejected(client, service):
    resp = client.get(BASE, headers=json_headers("not-a-jwt"))

    assert_failure(resp, 401)
    assert service.calls == []


def test_expired_token_rejected(app, client, service):
    token = _token(app, "7", expires_delta=timedelta(seconds=-30))

    resp = client.get(BASE, headers=json_headers(token))

    assert assert_failure(resp, 401) == "Token has expired"
    assert service.calls == []


def test_token_checked_before_binding(client, service):
    """Unauthenticated callers learn nothing about their payload."""
    resp = client.put(f"{BASE}/notanumber", json={})

    assert_failure(resp, 401)


def test_login_and_logout_are_open(client, service):
    assert_success(client.post(f"{BASE}/login", json={"name": "a", "password": "b"}))
    assert_success(client.post(f"{BASE}/logout"))


def test_get_with_token(app, client, service):
    service.users[3] = User(id=3, name="carol")

    result = assert_success(client.get(f"{BASE}/3", headers=json_headers(_token(app))))

    assert result["name"] == "carol"
