"""Uniform response envelope written for every request.

Shape: ``{"code": int, "message": str | null, "result": any}``. A success
carries ``code == 200`` and no message; a failure carries its status code and
a message and never a result. The HTTP status of the response mirrors
``code``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from http import HTTPStatus
from typing import Any

from flask import Response, jsonify

from pixiu.schemas.common import EnvelopeSchema

envelope_schema = EnvelopeSchema()


class ErrorKind(str, Enum):
    """Where a request failure originated."""

    VALIDATION = "validation"  # path or body could not be bound
    DELEGATION = "delegation"  # the user service reported an error


@dataclass(frozen=True, slots=True)
class RequestError:
    """
    Failure crossing from dispatch to the envelope writer.

    :param kind: Origin of the failure.
    :param message: Client-facing text, passed through unchanged.
    :param code: Status code written in the envelope and the response.
    """

    kind: ErrorKind
    message: str
    code: int = HTTPStatus.BAD_REQUEST


@dataclass(frozen=True, slots=True)
class Envelope:
    code: int
    message: str | None = None
    result: Any = None

    @property
    def ok(self) -> bool:
        return self.code == HTTPStatus.OK

    @classmethod
    def success(cls, result: Any = None) -> "Envelope":
        return cls(code=HTTPStatus.OK, result=result)

    @classmethod
    def failure(cls, code: int, message: str) -> "Envelope":
        return cls(code=int(code), message=message)

    @classmethod
    def from_error(cls, error: RequestError) -> "Envelope":
        return cls.failure(error.code, error.message)


def write(envelope: Envelope) -> Response:
    """Serialize ``envelope`` into a JSON response with a matching status."""

    response = jsonify(envelope_schema.dump(envelope))
    response.status_code = int(envelope.code)
    return response


def write_failure(code: int, message: str) -> Response:
    return write(Envelope.failure(code, message))


__all__ = [
    "Envelope",
    "ErrorKind",
    "RequestError",
    "write",
    "write_failure",
]
