"""Persistence-only repositories."""

from __future__ import annotations

from .base import BaseRepository
from .user import UserRepository

__all__ = ["BaseRepository", "UserRepository"]
