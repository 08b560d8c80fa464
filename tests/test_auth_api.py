from datetime import datetime, timedelta, timezone

import pytest

from hotelbook.models import User
from hotelbook.security import Identity, Role
from tests.conftest import bearer, login_token, register


def test_register_creates_user(client, db):
    r = register(client)
    assert r.status_code == 201
    assert r.json() == {"message": "User registered successfully"}
    user = db.query(User).one()
    assert user.username == "alice"
    assert user.hashed_password != "s3cret!"


def test_duplicate_email_is_rejected_without_second_record(client, db):
    assert register(client).status_code == 201
    r = register(client, username="alice2")
    assert r.status_code == 400
    assert r.json() == {"message": "User with this email already exists"}
    assert db.query(User).count() == 1


def test_duplicate_username_is_rejected(client, db):
    assert register(client).status_code == 201
    r = register(client, email="other@example.com")
    assert r.status_code == 400
    assert r.json() == {"message": "User with this username already exists"}
    assert db.query(User).count() == 1


@pytest.mark.parametrize("email", ["not-an-email", "alice@", "alice@example"])
def test_register_validates_email_format(client, db, email):
    r = register(client, email=email)
    assert r.status_code == 400
    assert r.json()["message"] == "Invalid request"
    assert ["body", "email"] in [e["loc"] for e in r.json()["errors"]]
    assert db.query(User).count() == 0


def test_login_returns_token_and_user(client):
    register(client)
    r = client.post("/api/login", json={"email": "alice@example.com", "password": "s3cret!"})
    assert r.status_code == 200
    body = r.json()
    assert body["token"]
    assert body["user"]["username"] == "alice"
    assert body["user"]["email"] == "alice@example.com"
    assert "hashed_password" not in body["user"]


def test_wrong_password_and_unknown_email_look_identical(client):
    register(client)
    wrong_password = client.post("/api/login", json={"email": "alice@example.com", "password": "nope"})
    unknown_email = client.post("/api/login", json={"email": "nobody@example.com", "password": "nope"})
    assert wrong_password.status_code == unknown_email.status_code == 400
    assert wrong_password.content == unknown_email.content
    assert wrong_password.json() == {"message": "Invalid email or password"}


def test_logout_is_a_no_op(client):
    token = login_token(client)
    r = client.post("/api/logout", headers=bearer(token))
    assert r.json() == {"message": "Logged out successfully"}
    # The token is still usable until it expires
    assert client.get("/api/my-bookings", headers=bearer(token)).status_code == 200


def test_protected_route_without_header(client):
    r = client.get("/api/my-bookings")
    assert r.status_code == 401
    assert r.json() == {"message": "No token provided, authorization denied"}


def test_protected_route_with_empty_bearer(client):
    r = client.get("/api/my-bookings", headers={"Authorization": "Bearer"})
    assert r.status_code == 401
    assert r.json() == {"message": "No token provided, authorization denied"}


def test_protected_route_with_garbage_token(client):
    r = client.get("/api/my-bookings", headers=bearer("not.a.token"))
    assert r.status_code == 401
    assert r.json() == {"message": "Invalid token, authorization denied"}


def test_expired_login_token_is_rejected(client, app):
    login_token(client)
    user = client.post("/api/login", json={"email": "alice@example.com", "password": "s3cret!"}).json()["user"]
    expired = app.state.tokens.issue(
        Identity(id=user["id"], email=user["email"], role=Role.USER),
        now=datetime.now(timezone.utc) - timedelta(hours=9),
    )
    r = client.get("/api/my-bookings", headers=bearer(expired))
    assert r.status_code == 401
    assert r.json() == {"message": "Invalid token, authorization denied"}


def test_user_token_cannot_reach_admin_routes(client):
    token = login_token(client)
    r = client.get("/api/admin/users", headers=bearer(token))
    assert r.status_code == 401
    assert r.json() == {"message": "Invalid token, authorization denied"}


def test_admin_token_cannot_reach_user_routes(client):
    token = login_token(client, username="root", email="root@example.com", prefix="/api/admin")
    r = client.get("/api/my-bookings", headers=bearer(token))
    assert r.status_code == 401
