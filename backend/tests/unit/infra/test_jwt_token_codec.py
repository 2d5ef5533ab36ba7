"""Tests for the Flask-JWT-Extended token codec."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest
from flask_jwt_extended import create_refresh_token, decode_token
from sessiongate.infra.jwt import JWTTokenCodec
from sessiongate.services._shared.claims import AccessClaim, RefreshClaim
from sessiongate.services._shared.errors import SigningError


@pytest.fixture()
def codec(app):
    """Codec bound to the testing app (requires an app context)."""
    return JWTTokenCodec()


def test_issue_and_verify_round_trip(codec):
    claim = RefreshClaim.for_subject(42)
    token = codec.issue(claim)

    assert codec.verify(token, RefreshClaim) is True
    assert codec.subject_of(token, RefreshClaim) == 42


def test_issued_token_carries_subject_type_and_exact_expiry(codec):
    expires_at = datetime(2099, 1, 1, tzinfo=UTC)
    token = codec.issue(AccessClaim(subject=5, expires_at=expires_at))

    claims = decode_token(token)
    assert claims["sub"] == "5"
    assert claims["type"] == "access"
    assert claims["exp"] == int(expires_at.timestamp())


def test_each_issue_yields_a_distinct_token(codec):
    claim = RefreshClaim.for_subject(1)
    assert codec.issue(claim) != codec.issue(claim)


def test_wrong_kind_is_rejected(codec):
    access = codec.issue(AccessClaim.for_subject(9))
    refresh = codec.issue(RefreshClaim.for_subject(9))

    assert codec.verify(access, RefreshClaim) is False
    assert codec.subject_of(access, RefreshClaim) is None
    assert codec.verify(refresh, AccessClaim) is False


@pytest.mark.parametrize("token", ["", "garbage", "a.b.c"])
def test_malformed_tokens_are_rejected(codec, token):
    assert codec.verify(token, RefreshClaim) is False
    assert codec.subject_of(token, RefreshClaim) is None


def test_tampered_signature_is_rejected(codec):
    token = codec.issue(RefreshClaim.for_subject(3))
    head, payload, signature = token.split(".")
    forged = ".".join([head, payload, signature[::-1]])
    assert codec.verify(forged, RefreshClaim) is False


def test_expired_claim_is_rejected(codec):
    past = datetime.now(UTC) - timedelta(minutes=5)
    token = codec.issue(RefreshClaim(subject=1, expires_at=past))

    assert codec.verify(token, RefreshClaim) is False
    assert codec.subject_of(token, RefreshClaim) is None


def test_token_expires_with_the_clock(codec, freeze_time):
    with freeze_time("2024-01-01T00:00:00Z"):
        token = codec.issue(AccessClaim.for_subject(8))
        assert codec.verify(token, AccessClaim) is True
    with freeze_time("2024-01-01T01:00:01Z"):
        assert codec.verify(token, AccessClaim) is False


def test_non_numeric_subject_is_not_extracted(codec):
    token = create_refresh_token(identity="not-a-number")

    assert codec.verify(token, RefreshClaim) is True
    assert codec.subject_of(token, RefreshClaim) is None


def test_missing_signing_key_raises_signing_error(app, codec):
    app.config["JWT_SECRET_KEY"] = None
    app.config["SECRET_KEY"] = None

    with pytest.raises(SigningError):
        codec.issue(AccessClaim.for_subject(1))


def test_verify_without_signing_key_returns_false(app, codec):
    token = codec.issue(RefreshClaim.for_subject(1))
    app.config["JWT_SECRET_KEY"] = None
    app.config["SECRET_KEY"] = None

    assert codec.verify(token, RefreshClaim) is False
    assert codec.subject_of(token, RefreshClaim) is None
