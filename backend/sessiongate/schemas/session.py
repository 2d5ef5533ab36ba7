"""Session-related Marshmallow schemas (camelCase on the wire)."""

from __future__ import annotations

from marshmallow import Schema, ValidationError, fields, post_load, validate, validates

from sessiongate.services.session.dto import SignInIn


class SignInSchema(Schema):
    """Input payload for sign-up-or-sign-in.

    A ``displayName`` (even an empty one) marks the request as a sign-up.
    """

    external_id = fields.String(
        required=True,
        data_key="externalId",
        validate=validate.Length(min=1, max=255),
    )
    display_name = fields.String(
        load_default=None,
        allow_none=True,
        data_key="displayName",
        validate=validate.Length(max=100),
    )

    @validates("external_id")
    def _reject_blank_external_id(self, value: str, **_: object) -> None:
        if not value.strip():
            raise ValidationError("External id must not be blank.")

    @post_load
    def _to_dto(self, data: dict, **_: object) -> SignInIn:
        return SignInIn(**data)


class RenameSchema(Schema):
    """Input payload for changing the display name."""

    name = fields.String(required=True, validate=validate.Length(min=1, max=100))


class TokenPairSchema(Schema):
    """Response payload carrying both tokens."""

    access_token = fields.String(required=True, data_key="accessToken")
    refresh_token = fields.String(required=True, data_key="refreshToken")


class AccessTokenSchema(Schema):
    """Response payload carrying a renewed access token."""

    access_token = fields.String(required=True, data_key="accessToken")
