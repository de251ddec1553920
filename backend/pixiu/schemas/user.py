"""User resource schemas."""

from __future__ import annotations

import re
from typing import Any

from marshmallow import EXCLUDE, Schema, ValidationError, fields, post_load, pre_load, validate

from pixiu.services.user.dto import IdMeta, User

MAX_USER_ID = 2**63 - 1

# Optional sign followed by ASCII digits only
DECIMAL_ID = re.compile(r"[+-]?[0-9]+")


class IdMetaSchema(Schema):
    """Bind the ``userId`` path segment.

    Zero is rejected alongside non-numeric values: an identifier of ``0``
    never names a stored row. Strings ``int()`` would still accept
    (``4_2``, padded blanks, non-ASCII digits) are rejected too.
    """

    user_id = fields.Integer(
        required=True,
        data_key="userId",
        validate=validate.Range(min=1, max=MAX_USER_ID),
    )

    @pre_load
    def check_decimal(self, data: dict[str, Any], **_: Any) -> dict[str, Any]:
        raw = data.get("userId") if isinstance(data, dict) else None
        if isinstance(raw, str) and not DECIMAL_ID.fullmatch(raw):
            raise ValidationError(self.fields["user_id"].error_messages["invalid"], "userId")
        return data

    @post_load
    def make_meta(self, data: dict[str, Any], **_: Any) -> IdMeta:
        return IdMeta(user_id=data["user_id"])


class UserSchema(Schema):
    """Request body and public representation of a user.

    Unknown keys are dropped on load; ``password`` never appears on dump.
    """

    class Meta:
        unknown = EXCLUDE

    id = fields.Integer(dump_only=True)
    resource_version = fields.Integer(load_default=None, validate=validate.Range(min=0))
    name = fields.String(required=True, validate=validate.Length(min=1, max=128))
    password = fields.String(load_only=True, load_default=None, validate=validate.Length(max=128))
    email = fields.Email(load_default=None, allow_none=True, validate=validate.Length(max=254))
    status = fields.Integer(load_default=0, validate=validate.Range(min=0))
    role = fields.Integer(load_default=0, validate=validate.Range(min=0))
    description = fields.String(load_default=None, allow_none=True)
    gmt_create = fields.DateTime(dump_only=True)
    gmt_modified = fields.DateTime(dump_only=True)

    @post_load
    def make_user(self, data: dict[str, Any], **_: Any) -> User:
        return User(**data)


class LoginSchema(UserSchema):
    """Credentials posted to the login route."""

    password = fields.String(
        required=True, load_only=True, validate=validate.Length(min=1, max=128)
    )
