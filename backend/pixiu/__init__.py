"""Expose the application factory at package level.

Provide convenient access to :func:`pixiu.factory.create_app` so callers can
``from pixiu import create_app`` (and ``gunicorn "pixiu:create_app()"``).
"""

from __future__ import annotations

from .factory import create_app

__all__ = ["create_app"]
