"""Repository package exposing persistence-layer access for the models."""

from __future__ import annotations

from sessiongate.repositories.base import BaseRepository
from sessiongate.repositories.user import UserRepository

__all__ = ["BaseRepository", "UserRepository"]
