"""Operation table and the bind -> delegate -> envelope middleware.

Each route is a pure function ``handler(service, ctx, **bound) -> result``.
:func:`operation` records it in :data:`OPERATIONS` and mounts a view that

1. authenticates the caller (when the operation requires it),
2. binds the path identifier and/or body, stopping at the first failure,
3. calls the handler once,
4. writes exactly one envelope.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any

from flask import Blueprint, Response
from marshmallow import Schema, ValidationError

from pixiu.api import envelope
from pixiu.api.binding import bind_body, bind_path_id, describe
from pixiu.api.deps import authenticate, build_context, get_user_service
from pixiu.api.envelope import Envelope, ErrorKind, RequestError
from pixiu.services._shared.errors import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    ServiceError,
)

log = logging.getLogger(__name__)

Handler = Callable[..., Any]


@dataclass(frozen=True, slots=True)
class Operation:
    """
    One row of the route table.

    :param name: Endpoint name, also the handler's name.
    :param handler: Pure function receiving ``(service, ctx, **bound)``.
    :param bind_path: Bind ``userId`` into the ``user_id`` keyword.
    :param body: Schema loading the JSON body into the ``user`` keyword.
    :param dump: Schema serializing a non-``None`` result.
    :param auth: Require a bearer token when ``AUTH_REQUIRED`` is on.
    """

    name: str
    handler: Handler
    bind_path: bool = False
    body: Schema | None = None
    dump: Schema | None = None
    auth: bool = True

    def bind(self, view_args: Mapping[str, Any] | None) -> dict[str, Any]:
        """Bind inputs in order (path, then body); raise on the first failure."""

        bound: dict[str, Any] = {}
        if self.bind_path:
            bound["user_id"] = bind_path_id(view_args).user_id
        if self.body is not None:
            bound["user"] = bind_body(self.body)
        return bound

    def render(self, result: Any) -> Any:
        if result is None or self.dump is None:
            return result
        return self.dump.dump(result)


OPERATIONS: dict[str, Operation] = {}


def delegation_error(exc: ServiceError) -> RequestError:
    """Classify a service failure; the message is kept verbatim."""

    if isinstance(exc, NotFoundError):
        code = HTTPStatus.NOT_FOUND
    elif isinstance(exc, ConflictError):
        code = HTTPStatus.CONFLICT
    elif isinstance(exc, AuthenticationError):
        code = HTTPStatus.UNAUTHORIZED
    else:
        code = HTTPStatus.BAD_REQUEST
    return RequestError(kind=ErrorKind.DELEGATION, message=str(exc), code=code)


def validation_error(err: ValidationError) -> RequestError:
    return RequestError(kind=ErrorKind.VALIDATION, message=describe(err))


def dispatch(op: Operation, view_args: Mapping[str, Any] | None = None) -> Response:
    """Run ``op`` for the current request and write its envelope."""

    start = time.perf_counter()
    actor_id = authenticate(op.auth)
    ctx = build_context(actor_id=actor_id)

    try:
        bound = op.bind(view_args)
    except ValidationError as err:
        return _write(op, Envelope.from_error(validation_error(err)), start)

    try:
        result = op.handler(get_user_service(), ctx, **bound)
    except ServiceError as exc:
        return _write(op, Envelope.from_error(delegation_error(exc)), start)

    return _write(op, Envelope.success(op.render(result)), start)


def _write(op: Operation, env: Envelope, start: float) -> Response:
    elapsed_ms = (time.perf_counter() - start) * 1000
    level = logging.INFO if env.ok else logging.WARNING
    log.log(
        level,
        "request.dispatched",
        extra={"operation": op.name, "code": int(env.code), "elapsed_ms": round(elapsed_ms, 2)},
    )
    return envelope.write(env)


def operation(
    bp: Blueprint,
    rule: str,
    *,
    methods: list[str],
    bind_path: bool = False,
    body: Schema | None = None,
    dump: Schema | None = None,
    auth: bool = True,
) -> Callable[[Handler], Handler]:
    """Register ``handler`` in the table and mount it on ``bp`` at ``rule``.

    The handler itself is returned unchanged so it stays callable directly.
    """

    def decorator(handler: Handler) -> Handler:
        op = Operation(
            name=handler.__name__,
            handler=handler,
            bind_path=bind_path,
            body=body,
            dump=dump,
            auth=auth,
        )
        OPERATIONS[op.name] = op

        def view(**view_args: Any) -> Response:
            return dispatch(op, view_args)

        view.__name__ = op.name
        view.__doc__ = handler.__doc__
        bp.add_url_rule(
            rule,
            endpoint=op.name,
            view_func=view,
            methods=methods,
            strict_slashes=False,
        )
        return handler

    return decorator
