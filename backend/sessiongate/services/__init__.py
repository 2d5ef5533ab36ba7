"""Application services and the ports they depend on."""

from __future__ import annotations

from sessiongate.services.session.service import SessionService

__all__ = ["SessionService"]
