"""Integration tests for the session endpoints."""

from __future__ import annotations

import pytest
from flask_jwt_extended import decode_token
from sessiongate.infra.sqlalchemy import SQLAlchemyCredentialStore
from sessiongate.models.user import User
from tests.factories.user import UserFactory


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def stored_token(session, external_id: str) -> str | None:
    session.expire_all()
    return session.query(User).filter_by(external_id=external_id).one().refresh_token


def signin(client, external_id: str, display_name: str | None = None):
    payload = {"externalId": external_id}
    if display_name is not None:
        payload["displayName"] = display_name
    return client.post("/signin", json=payload)


# ------------------------------ Sign-in ----------------------------------- #
def test_signup_then_conflict_then_revoke_then_signin(client, session):
    """abc / Mongli: 201, 409 while active, 204 on revoke, then 200 with a new pair."""

    resp = signin(client, "abc", "Mongli")
    assert resp.status_code == 201
    t1 = resp.get_json()
    assert set(t1) == {"accessToken", "refreshToken"}
    assert stored_token(session, "abc") == t1["refreshToken"]

    resp = signin(client, "abc")
    assert resp.status_code == 409
    assert resp.mimetype == "application/problem+json"
    assert stored_token(session, "abc") == t1["refreshToken"]

    resp = client.delete("/token", headers=bearer(t1["refreshToken"]))
    assert resp.status_code == 204
    assert stored_token(session, "abc") is None

    resp = signin(client, "abc")
    assert resp.status_code == 200
    t2 = resp.get_json()
    assert t2["refreshToken"] != t1["refreshToken"]
    assert stored_token(session, "abc") == t2["refreshToken"]


def test_signin_pair_subject_is_internal_id(client, session):
    user = UserFactory()

    resp = signin(client, user.external_id)

    assert resp.status_code == 200
    body = resp.get_json()
    assert decode_token(body["accessToken"])["sub"] == str(user.id)
    assert decode_token(body["refreshToken"])["sub"] == str(user.id)


def test_signin_unknown_identity_is_404(client):
    resp = signin(client, "nobody")
    assert resp.status_code == 404
    assert resp.get_json()["code"] == "not_found"


def test_signup_duplicate_is_500_without_detail(client):
    assert signin(client, "abc", "Mongli").status_code == 201

    resp = signin(client, "abc", "Other")

    assert resp.status_code == 500
    body = resp.get_json()
    assert body["code"] == "internal_server_error"
    assert "duplicate" not in body["detail"]


@pytest.mark.parametrize(
    "payload",
    [
        {},
        {"externalId": ""},
        {"externalId": "   "},
        {"externalId": "   ", "displayName": "x"},
        {"externalId": 123},
        {"externalId": "x" * 256},
        {"externalId": "abc", "displayName": "n" * 101},
    ],
)
def test_signin_invalid_body_is_400(client, payload):
    resp = client.post("/signin", json=payload)
    assert resp.status_code == 400
    assert resp.get_json()["code"] == "validation_error"


def test_signin_non_json_body_is_400(client):
    resp = client.post("/signin", data="externalId=abc", content_type="text/plain")
    assert resp.status_code == 400


# ------------------------------- Renew ------------------------------------ #
def test_renew_before_revocation_keeps_stored_token(client, session):
    t1 = signin(client, "abc", "Mongli").get_json()

    resp = client.post("/token/renew", headers=bearer(t1["refreshToken"]))

    assert resp.status_code == 201
    access = resp.get_json()["accessToken"]
    assert access != t1["accessToken"]
    assert decode_token(access)["sub"] == decode_token(t1["refreshToken"])["sub"]
    assert stored_token(session, "abc") == t1["refreshToken"]


def test_renew_expired_token_is_401(client, freeze_time):
    with freeze_time("2024-01-01T00:00:00Z"):
        t1 = signin(client, "abc", "Mongli").get_json()
    with freeze_time("2024-02-01T00:00:00Z"):
        resp = client.post("/token/renew", headers=bearer(t1["refreshToken"]))
    assert resp.status_code == 401
    assert resp.get_json()["code"] == "unauthorized"


def test_renew_with_access_token_is_401(client):
    t1 = signin(client, "abc", "Mongli").get_json()
    resp = client.post("/token/renew", headers=bearer(t1["accessToken"]))
    assert resp.status_code == 401
    assert resp.headers["WWW-Authenticate"].startswith("Bearer")


def test_renew_missing_subject_is_404(client, session):
    t1 = signin(client, "abc", "Mongli").get_json()
    session.query(User).filter_by(external_id="abc").delete()
    session.commit()

    resp = client.post("/token/renew", headers=bearer(t1["refreshToken"]))
    assert resp.status_code == 404


@pytest.mark.parametrize(
    "headers",
    [
        {},
        {"Authorization": ""},
        {"Authorization": "Token abc"},
        {"Authorization": "Bearer"},
        {"Authorization": "Bearer a b"},
    ],
)
def test_malformed_bearer_header_is_400(client, headers):
    assert client.post("/token/renew", headers=headers).status_code == 400
    assert client.delete("/token", headers=headers).status_code == 400


# ------------------------------- Revoke ----------------------------------- #
def test_second_revoke_is_404(client):
    t1 = signin(client, "abc", "Mongli").get_json()

    assert client.delete("/token", headers=bearer(t1["refreshToken"])).status_code == 204
    assert client.delete("/token", headers=bearer(t1["refreshToken"])).status_code == 404


def test_revoke_with_unreadable_token_is_500(client):
    resp = client.delete("/token", headers=bearer("not-a-jwt"))
    assert resp.status_code == 500
    assert resp.get_json()["code"] == "internal_server_error"


# ------------------------------- Rename ----------------------------------- #
def test_rename_changes_display_name(client, session):
    t1 = signin(client, "abc", "Mongli").get_json()

    resp = client.patch("/user/name", json={"name": "Mongo"}, headers=bearer(t1["accessToken"]))

    assert resp.status_code == 204
    session.expire_all()
    assert session.query(User).filter_by(external_id="abc").one().display_name == "Mongo"


def test_rename_with_refresh_token_is_401(client):
    t1 = signin(client, "abc", "Mongli").get_json()
    resp = client.patch("/user/name", json={"name": "Mongo"}, headers=bearer(t1["refreshToken"]))
    assert resp.status_code == 401


@pytest.mark.parametrize("payload", [{}, {"name": ""}, {"name": "n" * 101}])
@pytest.mark.parametrize("headers", [bearer("not-a-jwt"), {}, {"Authorization": "Token abc"}])
def test_rename_invalid_body_is_400_before_token_checks(client, payload, headers):
    resp = client.patch("/user/name", json=payload, headers=headers)
    assert resp.status_code == 400
    assert resp.get_json()["code"] == "validation_error"


# --------------------------- Cross-cutting -------------------------------- #
def test_health_reports_database(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.get_json()["db"] == "ok"


def test_request_id_is_echoed(client):
    resp = client.get("/health", headers={"X-Request-ID": "req-123"})
    assert resp.headers["X-Request-ID"] == "req-123"


def test_unknown_route_is_problem_json(client):
    resp = client.get("/nope")
    assert resp.status_code == 404
    assert resp.mimetype == "application/problem+json"


class TestCompareAndSwap:
    """Sign-in with ``AUTH_SIGNIN_COMPARE_AND_SWAP`` enabled."""

    @pytest.fixture()
    def app_overrides(self):
        return {"AUTH_SIGNIN_COMPARE_AND_SWAP": True}

    def test_stale_read_still_conflicts(self, client, session, monkeypatch):
        user = UserFactory(refresh_token="concurrent-winner")
        monkeypatch.setattr(
            SQLAlchemyCredentialStore, "fetch_refresh_token", lambda self, external_id: None
        )

        resp = signin(client, user.external_id)

        assert resp.status_code == 409
        monkeypatch.undo()
        assert stored_token(session, user.external_id) == "concurrent-winner"

    def test_signin_from_none(self, client, session):
        user = UserFactory()

        resp = signin(client, user.external_id)

        assert resp.status_code == 200
        assert stored_token(session, user.external_id) == resp.get_json()["refreshToken"]


def test_stale_read_last_write_wins(client, session, monkeypatch):
    user = UserFactory(refresh_token="concurrent-winner")
    monkeypatch.setattr(
        SQLAlchemyCredentialStore, "fetch_refresh_token", lambda self, external_id: None
    )

    resp = signin(client, user.external_id)

    assert resp.status_code == 200
    monkeypatch.undo()
    assert stored_token(session, user.external_id) == resp.get_json()["refreshToken"]
