# Overview: Pytest coverage for registration, login, sessions and profile updates.

"""
Authentication tests.

Verifies:
- Registration returns 201 with {user, token}; duplicate email is 400
- Login with a wrong password and with an unknown email fail identically
- Tokens resolve on /auth/me, stop working after logout or expiry
- Password hashes never leave the server
"""

import logging
from datetime import timedelta

import pytest

from propdesk.extensions import db
from propdesk.models import SessionToken, User
from propdesk.services import session_service
from propdesk.services.auth_service import verify_password
from propdesk.time_utils import utcnow
from conftest import auth_headers, get_auth_token


REGISTRATION = {
    "email": "new.user@example.com",
    "password": "secret123",
    "name": "New User",
    "role": "tenant",
    "phone": "555-0100",
}


class TestRegister:

    def test_register_returns_user_and_token(self, client, db_session):
        resp = client.post("/auth/register", json=REGISTRATION)
        assert resp.status_code == 201
        body = resp.get_json()
        assert body["user"]["email"] == "new.user@example.com"
        assert body["user"]["role"] == "tenant"
        assert body["user"]["phone"] == "555-0100"
        assert len(body["token"]) == 64
        assert "password" not in body["user"]
        assert "passwordHash" not in body["user"]

    def test_password_is_stored_hashed(self, client, db_session):
        client.post("/auth/register", json=REGISTRATION)
        user = db_session.query(User).filter_by(email="new.user@example.com").one()
        assert user.password_hash != "secret123"
        assert verify_password("secret123", user.password_hash)

    def test_register_twice_same_email(self, client, db_session):
        first = client.post("/auth/register", json=REGISTRATION)
        second = client.post("/auth/register", json=REGISTRATION)
        assert first.status_code == 201
        assert second.status_code == 400
        assert second.get_json() == {"message": "User already exists"}

    def test_email_is_case_insensitive(self, client, db_session):
        client.post("/auth/register", json=REGISTRATION)
        resp = client.post("/auth/register", json={**REGISTRATION, "email": "NEW.User@Example.com"})
        assert resp.status_code == 400

    @pytest.mark.parametrize("alias,role", [
        ("manager", "property_manager"),
        ("owner", "property_owner"),
        ("property_owner", "property_owner"),
    ])
    def test_role_aliases(self, client, db_session, alias, role):
        resp = client.post("/auth/register", json={**REGISTRATION, "role": alias})
        assert resp.status_code == 201
        assert resp.get_json()["user"]["role"] == role

    def test_register_collects_all_field_errors(self, client, db_session):
        resp = client.post("/auth/register", json={
            "email": "not-an-email",
            "password": "123",
            "name": "A",
            "role": "landlord",
        })
        assert resp.status_code == 400
        body = resp.get_json()
        assert body["message"] == "Validation error"
        fields = {issue["field"] for issue in body["errors"]}
        assert fields == {"email", "password", "name", "role"}

    def test_register_rejects_non_object_body(self, client, db_session):
        resp = client.post("/auth/register", json=["not", "an", "object"])
        assert resp.status_code == 400
        assert resp.get_json()["message"] == "Invalid JSON payload"


class TestLogin:

    def test_login_success(self, client, users):
        resp = client.post("/auth/login", json={"email": "owner@example.com", "password": "password123"})
        assert resp.status_code == 200
        body = resp.get_json()
        assert body["user"]["id"] == users.owner
        assert body["user"]["role"] == "property_owner"
        assert body["token"]

    def test_wrong_password_and_unknown_email_are_indistinguishable(self, client, users):
        wrong_password = client.post(
            "/auth/login", json={"email": "owner@example.com", "password": "not-the-password"}
        )
        unknown_email = client.post(
            "/auth/login", json={"email": "nobody@example.com", "password": "password123"}
        )
        assert wrong_password.status_code == unknown_email.status_code == 401
        assert wrong_password.get_json() == unknown_email.get_json() == {"message": "Invalid credentials"}

    def test_login_missing_fields(self, client, db_session):
        resp = client.post("/auth/login", json={})
        assert resp.status_code == 400
        fields = {issue["field"] for issue in resp.get_json()["errors"]}
        assert fields == {"email", "password"}

    def test_each_login_issues_a_new_session(self, client, users):
        first = get_auth_token(client, "owner@example.com")
        second = get_auth_token(client, "owner@example.com")
        assert first != second
        assert db.session.query(SessionToken).filter_by(user_id=users.owner).count() == 2

    def test_token_is_not_stored_in_plaintext(self, client, users):
        token = get_auth_token(client, "owner@example.com")
        stored = db.session.query(SessionToken).filter_by(user_id=users.owner).one()
        assert stored.token_hash != token
        assert stored.token_hash == session_service.hash_token(token)

    def test_passwords_never_reach_the_log(self, client, users, caplog):
        secret = "Zq9-unmistakable-pw"
        with caplog.at_level(logging.DEBUG, logger="propdesk"):
            client.post("/auth/register", json={**REGISTRATION, "password": secret})
            client.post("/auth/login", json={"email": REGISTRATION["email"], "password": secret})
            client.post("/auth/login", json={"email": "owner@example.com", "password": secret})
        assert secret not in caplog.text
        failures = [r.getMessage() for r in caplog.records if r.getMessage().startswith("Failed login")]
        assert failures == ["Failed login for owner@example.com"]


class TestSession:

    def test_me_returns_current_user(self, client, login, users):
        resp = client.get("/auth/me", headers=login("tenant"))
        assert resp.status_code == 200
        assert resp.get_json()["id"] == users.tenant

    def test_logout_revokes_token(self, client, users):
        headers = auth_headers(get_auth_token(client, "tenant@example.com"))
        assert client.post("/auth/logout", headers=headers).status_code == 200
        resp = client.get("/auth/me", headers=headers)
        assert resp.status_code == 401
        assert resp.get_json() == {"message": "Invalid or expired token"}

    def test_expired_token_rejected(self, client, users):
        token = get_auth_token(client, "tenant@example.com")
        stored = db.session.query(SessionToken).filter_by(user_id=users.tenant).one()
        stored.expires_at = utcnow() - timedelta(minutes=1)
        db.session.commit()

        resp = client.get("/auth/me", headers=auth_headers(token))
        assert resp.status_code == 401

    def test_unknown_token_rejected(self, client, db_session):
        resp = client.get("/auth/me", headers=auth_headers("f" * 64))
        assert resp.status_code == 401

    def test_cleanup_removes_only_old_dead_sessions(self, client, users):
        live = get_auth_token(client, "owner@example.com")
        dead = get_auth_token(client, "tenant@example.com")
        session_service.revoke_session(dead)
        for row in db.session.query(SessionToken).all():
            row.created_at = utcnow() - timedelta(days=40)
        db.session.commit()

        assert session_service.cleanup_expired_sessions(older_than_days=30) == 1
        assert session_service.validate_session(live) is not None


class TestProfile:

    def test_update_profile(self, client, login):
        resp = client.put("/auth/me", json={"name": "Tina T.", "phone": "555-7777"}, headers=login("tenant"))
        assert resp.status_code == 200
        body = resp.get_json()
        assert body["name"] == "Tina T."
        assert body["phone"] == "555-7777"

    def test_role_cannot_be_changed_through_profile(self, client, login):
        resp = client.put("/auth/me", json={"role": "property_manager"}, headers=login("tenant"))
        assert resp.status_code == 400
        assert resp.get_json()["errors"] == [{"field": "role", "message": "is not an allowed field"}]
