"""Route-level tests: binding, delegation and the envelope for each user operation."""

from __future__ import annotations

import pytest

from pixiu.services._shared.errors import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    ServiceError,
)
from pixiu.services.user.dto import User
from tests.helpers.utils import assert_failure, assert_success, json_headers

BASE = "/pixiu/users"


# ------------------------------- Create ----------------------------------- #
def test_create_user_delegates_and_returns_empty_success(client, service):
    """POST with a name only succeeds and hands the bound User to the service."""
    resp = client.post(f"{BASE}/", json={"name": "alice"})

    assert assert_success(resp) is None
    assert service.called == ["create"]
    user = service.calls[0].args[0]
    assert isinstance(user, User)
    assert user.name == "alice"
    assert user.password is None


def test_create_user_missing_name_is_validation_error(client, service):
    resp = client.post(f"{BASE}/", json={"email": "a@example.com"})

    message = assert_failure(resp, 400)
    assert message == "name: Missing data for required field."
    assert service.calls == []


def test_create_user_malformed_json(client, service):
    resp = client.post(f"{BASE}/", data="{not json", headers=json_headers())

    assert assert_failure(resp, 400) == "request body is not valid JSON"
    assert service.calls == []


def test_create_user_empty_body(client, service):
    resp = client.post(f"{BASE}/", data="")

    assert_failure(resp, 400)
    assert service.calls == []


def test_create_user_non_object_body(client, service):
    resp = client.post(f"{BASE}/", json=["alice"])

    assert "Invalid input type" in assert_failure(resp, 400)
    assert service.calls == []


def test_create_user_binds_without_content_type(client, service):
    """The body is parsed as JSON whatever the declared content type."""
    resp = client.post(f"{BASE}/", data='{"name": "carol"}', content_type="text/plain")

    assert_success(resp)
    assert service.calls[0].args[0].name == "carol"


def test_create_user_ignores_unknown_and_output_only_fields(client, service):
    resp = client.post(f"{BASE}/", json={"name": "dave", "id": 9, "nickname": "d"})

    assert_success(resp)
    assert service.calls[0].args[0].id is None


def test_create_user_invalid_email(client, service):
    resp = client.post(f"{BASE}/", json={"name": "erin", "email": "nope"})

    assert assert_failure(resp, 400).startswith("email:")
    assert service.calls == []


# ------------------------------- Update ----------------------------------- #
def test_update_user_binds_path_and_body(client, service):
    resp = client.put(f"{BASE}/7", json={"name": "bob", "resource_version": 3})

    assert_success(resp)
    call = service.calls[0]
    assert call.name == "update"
    user_id, user = call.args
    assert user_id == 7
    assert user.name == "bob"
    assert user.resource_version == 3


def test_update_user_non_integer_id(client, service):
    """A non-numeric id fails binding and the service is never invoked."""
    resp = client.put(f"{BASE}/notanumber", json={"name": "bob"})

    assert assert_failure(resp, 400) == "userId: Not a valid integer."
    assert service.calls == []


def test_update_user_reports_only_first_binding_failure(client, service):
    resp = client.put(f"{BASE}/abc", json={})

    message = assert_failure(resp, 400)
    assert "userId" in message
    assert "name" not in message
    assert service.calls == []


def test_update_user_missing_body_field(client, service):
    resp = client.put(f"{BASE}/7", json={"email": "x@example.com"})

    assert "name" in assert_failure(resp, 400)
    assert service.calls == []


# ------------------------------- Delete ----------------------------------- #
def test_delete_user(client, service):
    resp = client.delete(f"{BASE}/5")

    assert assert_success(resp) is None
    assert service.calls[0].name == "delete"
    assert service.calls[0].args == (5,)


@pytest.mark.parametrize(
    "raw", ["abc", "0", "-1", "1.5", "99999999999999999999", "4_2", "%2042", "%D9%A4%D9%A2"]
)
def test_delete_user_rejects_invalid_ids(client, service, raw):
    resp = client.delete(f"{BASE}/{raw}")

    assert assert_failure(resp, 400).startswith("userId:")
    assert service.calls == []


# -------------------------------- Get ------------------------------------- #
def test_get_user_returns_serialized_user(client, service):
    service.users[42] = User(id=42, name="alice", password="secret", email="a@example.com")

    result = assert_success(client.get(f"{BASE}/42"))

    assert result["id"] == 42
    assert result["name"] == "alice"
    assert result["email"] == "a@example.com"
    assert "password" not in result
    assert service.calls[0].args == (42,)


def test_get_user_not_found_message_is_verbatim(client, service):
    resp = client.get(f"{BASE}/404")

    assert assert_failure(resp, 404) == str(NotFoundError("User", 404))


# -------------------------------- List ------------------------------------ #
def test_list_users_preserves_service_order(client, service):
    for user_id in (3, 1, 2):
        service.users[user_id] = User(id=user_id, name=f"u{user_id}")

    result = assert_success(client.get(BASE))

    assert [item["id"] for item in result] == [3, 1, 2]
    assert service.called == ["list"]


def test_list_users_empty(client, service):
    assert assert_success(client.get(BASE)) == []


# -------------------------------- Login ----------------------------------- #
def test_login_returns_service_result(client, service):
    resp = client.post(f"{BASE}/login", json={"name": "alice", "password": "pw"})

    assert assert_success(resp) == "token-abc"
    credentials = service.calls[0].args[0]
    assert (credentials.name, credentials.password) == ("alice", "pw")


def test_login_requires_password(client, service):
    resp = client.post(f"{BASE}/login", json={"name": "alice"})

    assert assert_failure(resp, 400) == "password: Missing data for required field."
    assert service.calls == []


def test_login_failure_is_unauthorized(client, service):
    service.fail_with = AuthenticationError()

    resp = client.post(f"{BASE}/login", json={"name": "alice", "password": "bad"})

    assert assert_failure(resp, 401) == "Invalid username or password"


# -------------------------------- Logout ---------------------------------- #
def test_logout_always_succeeds_without_delegation(client, service):
    service.fail_with = ServiceError("should not be reached")

    resp = client.post(f"{BASE}/logout", data="garbage")

    assert assert_success(resp) is None
    assert service.calls == []


# ---------------------------- Delegation errors --------------------------- #
@pytest.mark.parametrize(
    ("error", "code"),
    [
        (ServiceError("database is read-only"), 400),
        (NotFoundError("User", 1), 404),
        (ConflictError("User", "name 'alice' already in use"), 409),
        (AuthenticationError("account locked"), 401),
    ],
)
@pytest.mark.parametrize(
    ("method", "path", "body"),
    [
        ("post", f"{BASE}/", {"name": "alice"}),
        ("put", f"{BASE}/1", {"name": "alice"}),
        ("delete", f"{BASE}/1", None),
        ("get", f"{BASE}/1", None),
        ("get", BASE, None),
        ("post", f"{BASE}/login", {"name": "alice", "password": "pw"}),
    ],
)
def test_service_errors_surface_verbatim(client, service, error, code, method, path, body):
    service.fail_with = error

    resp = getattr(client, method)(path, json=body)

    assert assert_failure(resp, code) == str(error)
    assert len(service.calls) == 1


def test_unexpected_service_exception_is_generic_500(client, service):
    service.fail_with = RuntimeError("connection string with password")

    resp = client.get(BASE)

    assert assert_failure(resp, 500) == "Unexpected error"


# ------------------------------ Routing ----------------------------------- #
def test_unknown_route_gets_envelope(client):
    resp = client.get("/pixiu/nothing-here")

    assert "not found" in assert_failure(resp, 404)


def test_wrong_method_gets_envelope(client, service):
    resp = client.patch(f"{BASE}/1", json={"name": "x"})

    assert_failure(resp, 405)
    assert resp.content_type == "application/json"
    assert {"GET", "PUT", "DELETE"} <= set(resp.allow)
    assert service.calls == []


# ------------------------------ Context ----------------------------------- #
def test_request_id_is_threaded_to_service_and_echoed(client, service):
    resp = client.get(BASE, headers={"X-Request-ID": "req-123"})

    assert_success(resp)
    assert service.calls[0].ctx.request_id == "req-123"
    assert resp.headers["X-Request-ID"] == "req-123"


def test_request_id_generated_when_absent(client, service):
    resp = client.get(BASE)

    generated = resp.headers["X-Request-ID"]
    assert generated
    assert service.calls[0].ctx.request_id == generated


def test_context_has_no_deadline_by_default(client, service):
    client.get(BASE)

    ctx = service.calls[0].ctx
    assert ctx.deadline is None
    assert ctx.actor_id is None
