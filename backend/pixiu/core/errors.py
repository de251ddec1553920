"""Application-level error handlers that still answer with the envelope.

Failures inside a user operation are enveloped by the dispatch layer. What
is left for this module:

- routing errors (unknown path, wrong method) raised by Werkzeug,
- bearer-token failures raised by Flask-JWT-Extended,
- anything unexpected, answered with a generic 500 message.
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any

from flask import Flask, request
from werkzeug.exceptions import HTTPException

from pixiu.api.envelope import write_failure
from pixiu.core.extensions import jwt

log = logging.getLogger(__name__)


def _http_message(err: HTTPException, status: int) -> str:
    if status == HTTPStatus.NOT_FOUND and request:
        return f"Route '{request.path}' not found"
    if status == HTTPStatus.METHOD_NOT_ALLOWED and request:
        return f"Method {request.method} not allowed on '{request.path}'"
    return (err.description or HTTPStatus(status).phrase).strip()


def _register_jwt_loaders() -> None:
    """Make Flask-JWT-Extended failures answer with a 401 envelope."""

    @jwt.unauthorized_loader
    def _missing_token(reason: str):
        log.warning("auth.missing_token: %s", reason)
        return write_failure(HTTPStatus.UNAUTHORIZED, reason)

    @jwt.invalid_token_loader
    def _invalid_token(reason: str):
        log.warning("auth.invalid_token: %s", reason)
        return write_failure(HTTPStatus.UNAUTHORIZED, reason)

    @jwt.expired_token_loader
    def _expired_token(jwt_header: dict[str, Any], jwt_payload: dict[str, Any]):
        log.warning("auth.expired_token")
        return write_failure(HTTPStatus.UNAUTHORIZED, "Token has expired")


def init_app(app: Flask) -> None:
    """
    Attach envelope-producing error handlers to the Flask app.

    Notes
    -----
    - 4xx are logged as warnings without traceback.
    - Unexpected exceptions are logged with ``exc_info``; the client only
      sees a generic message.
    """

    _register_jwt_loaders()

    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        status = int(err.code or HTTPStatus.INTERNAL_SERVER_ERROR)
        message = _http_message(err, status)
        level = log.error if status >= 500 else log.warning
        level("HTTPException: status=%s detail=%s", status, message)
        response = write_failure(status, message)
        # Keep protocol headers such as ``Allow`` on 405
        for name, value in err.get_headers():
            if name.lower() != "content-type":
                response.headers[name] = value
        return response

    @app.errorhandler(Exception)
    def handle_unexpected_error(err: Exception):
        log.error("Unhandled exception", exc_info=err)
        return write_failure(HTTPStatus.INTERNAL_SERVER_ERROR, "Unexpected error")
