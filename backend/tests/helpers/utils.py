"""Tiny helpers shared across test modules."""

from __future__ import annotations

from typing import Any

ENVELOPE_KEYS = {"code", "message", "result"}


def json_headers(auth_token: str | None = None, **extra: str) -> dict[str, str]:
    """Return standard JSON headers, optionally with a bearer token.

    Parameters
    ----------
    auth_token:
        Optional bearer token to include.
    **extra:
        Additional headers (underscores become dashes).
    """

    headers = {"Content-Type": "application/json", "Accept": "application/json"}
    if auth_token:
        headers["Authorization"] = f"Bearer {auth_token}"
    headers.update({key.replace("_", "-"): value for key, value in extra.items()})
    return headers


def assert_success(response: Any) -> Any:
    """Assert ``response`` is a success envelope and return its ``result``."""

    body = response.get_json()
    assert set(body) == ENVELOPE_KEYS, body
    assert response.status_code == 200
    assert body["code"] == 200
    assert body["message"] is None
    return body["result"]


def assert_failure(response: Any, code: int) -> str:
    """Assert ``response`` is a failure envelope with ``code``; return the message."""

    body = response.get_json()
    assert set(body) == ENVELOPE_KEYS, body
    assert response.status_code == code
    assert body["code"] == code
    assert body["result"] is None
    assert isinstance(body["message"], str) and body["message"]
    return body["message"]
