import pytest
from fastapi.testclient import TestClient

from hotelbook.config import Settings
from hotelbook.main import create_app

# Smallest header _sniff_image_type accepts as PNG
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00\x00\x00\rIHDR" + b"\x01" * 16
GIF_BYTES = b"GIF89a" + b"\x02" * 20


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        DATABASE_URL=f"sqlite:///{tmp_path / 'test.db'}",
        SECRET_KEY="test-secret",
        UPLOAD_DIR=str(tmp_path / "uploads"),
        RATE_LIMIT_ENABLED=False,
        ADMIN_EMAIL="",
        ADMIN_PASSWORD="",
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def db(app, client):
    """A session on the same database the client talks to (tables already created)."""
    session = app.state.session_factory()
    yield session
    session.close()


def upload_hotel(client, name="Grand Plaza", price="100", city="Paris", image=PNG_BYTES, content_type="image/png") -> dict:
    r = client.post(
        "/api/uploadphoto",
        data={"name": name, "price": price, "city": city},
        files={"myImage": ("hotel.png", image, content_type)},
    )
    assert r.status_code == 200, r.text
    hotels = client.get("/api/bookings").json()
    return hotels[-1]


def register(client, username="alice", email="alice@example.com", password="s3cret!", prefix="/api"):
    return client.post(f"{prefix}/register", json={"username": username, "email": email, "password": password})


def login_token(client, username="alice", email="alice@example.com", password="s3cret!", prefix="/api") -> str:
    assert register(client, username, email, password, prefix).status_code == 201
    r = client.post(f"{prefix}/login", json={"email": email, "password": password})
    assert r.status_code == 200, r.text
    return r.json()["token"]


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}
