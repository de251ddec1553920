"""Ports (interfaces) the services depend on, with in-memory doubles."""

from __future__ import annotations

from .token_provider import StubTokenProvider, TokenProvider

__all__ = ["TokenProvider", "StubTokenProvider"]
