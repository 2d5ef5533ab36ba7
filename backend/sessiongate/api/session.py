"""Session endpoints: sign-in, renewal and revocation."""

from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, request

from sessiongate.api.deps import (
    bearer_token,
    empty_response,
    get_session_service,
    json_response,
    timing,
    translated,
)
from sessiongate.schemas import AccessTokenSchema, SignInSchema, TokenPairSchema
from sessiongate.services.session.dto import RenewIn, RevokeIn

bp = Blueprint("session", __name__)

signin_schema = SignInSchema()
token_pair_schema = TokenPairSchema()
access_token_schema = AccessTokenSchema()


@bp.post("/signin")
@timing
def signin():
    """Sign up (``displayName`` given) or sign in an existing identity."""

    dto = signin_schema.load(request.get_json(silent=True) or {})
    service = get_session_service()
    with translated(service):
        result = service.sign_in(dto)
    status = HTTPStatus.CREATED if result.created else HTTPStatus.OK
    return json_response(token_pair_schema.dump(result.tokens), status=status)


@bp.post("/token/renew")
@timing
def renew_token():
    """Exchange a refresh token for a new access token."""

    token = bearer_token()
    service = get_session_service()
    with translated(service):
        result = service.renew(RenewIn(refresh_token=token))
    return json_response(access_token_schema.dump(result), status=HTTPStatus.CREATED)


@bp.delete("/token")
@timing
def revoke_token():
    """Revoke the active session identified by the refresh token."""

    token = bearer_token()
    service = get_session_service()
    with translated(service):
        service.revoke(RevokeIn(refresh_token=token))
    return empty_response()
