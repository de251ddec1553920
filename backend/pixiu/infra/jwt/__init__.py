"""Flask-JWT-Extended adapters."""

from __future__ import annotations

from .flask_jwt_token_provider import JWTTokenProvider

__all__ = ["JWTTokenProvider"]
