"""Marshmallow schemas for request validation and response rendering."""

from __future__ import annotations

from .session import AccessTokenSchema, RenameSchema, SignInSchema, TokenPairSchema

__all__ = ["AccessTokenSchema", "RenameSchema", "SignInSchema", "TokenPairSchema"]
