"""Response envelope schema shared by every route."""

from __future__ import annotations

from marshmallow import Schema, fields


class EnvelopeSchema(Schema):
    """Serialize :class:`pixiu.api.envelope.Envelope` instances.

    ``result`` is dumped as-is: operations serialize their payload before it
    reaches the envelope.
    """

    code = fields.Integer(required=True)
    message = fields.String(allow_none=True)
    result = fields.Raw(allow_none=True)
