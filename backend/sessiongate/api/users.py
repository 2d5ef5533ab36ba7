"""User profile endpoints."""

from __future__ import annotations

from flask import Blueprint, request

from sessiongate.api.deps import (
    bearer_token,
    empty_response,
    get_session_service,
    timing,
    translated,
)
from sessiongate.schemas import RenameSchema
from sessiongate.services.session.dto import RenameIn

bp = Blueprint("users", __name__)

rename_schema = RenameSchema()


@bp.patch("/user/name")
@timing
def rename():
    """Change the display name of the access token's owner."""

    payload = rename_schema.load(request.get_json(silent=True) or {})
    token = bearer_token()
    service = get_session_service()
    with translated(service):
        service.rename(RenameIn(access_token=token, name=payload["name"]))
    return empty_response()
