"""Request binder: turn path segments and JSON bodies into typed records.

Binding never touches the user service. Every failure surfaces as a
:class:`marshmallow.ValidationError`; :func:`describe` renders it for the
envelope.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any

from flask import request
from marshmallow import Schema, ValidationError
from werkzeug.exceptions import BadRequest

from pixiu.schemas.user import IdMetaSchema
from pixiu.services.user.dto import IdMeta

id_meta_schema = IdMetaSchema()

PATH_KEYS = ("userId",)


def bind_path_id(view_args: Mapping[str, Any] | None) -> IdMeta:
    """Parse the ``userId`` path segment.

    :param view_args: Values captured by the URL rule.
    :returns: Bound identifier.
    :raises ValidationError: When the segment is missing, non-integer or out
        of range.
    """
    raw = {key: view_args[key] for key in PATH_KEYS if view_args and key in view_args}
    return id_meta_schema.load(raw)


def bind_body(schema: Schema) -> Any:
    """Decode the request body as JSON and load it through ``schema``.

    The ``Content-Type`` header is not enforced.

    :raises ValidationError: On malformed JSON, a non-object body or missing
        required fields.
    """
    try:
        payload = request.get_json(force=True)
    except BadRequest as exc:
        raise ValidationError("request body is not valid JSON") from exc
    return schema.load(payload)


def describe(err: ValidationError) -> str:
    """Flatten marshmallow messages into one line, e.g. ``"name: Missing data..."``."""

    parts = list(_flatten(err.messages))
    return "; ".join(parts) if parts else "invalid request"


def _flatten(messages: Any, prefix: str = "") -> Iterator[str]:
    if isinstance(messages, Mapping):
        for key, value in messages.items():
            if key == "_schema":
                label = prefix
            else:
                label = f"{prefix}.{key}" if prefix else str(key)
            yield from _flatten(value, label)
    elif isinstance(messages, (list, tuple)):
        for message in messages:
            yield from _flatten(message, prefix)
    else:
        yield f"{prefix}: {messages}" if prefix else str(messages)
