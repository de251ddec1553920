"""Convenience exports for application schemas."""

from __future__ import annotations

from .common import EnvelopeSchema
from .user import IdMetaSchema, LoginSchema, UserSchema

__all__ = ["EnvelopeSchema", "IdMetaSchema", "LoginSchema", "UserSchema"]
