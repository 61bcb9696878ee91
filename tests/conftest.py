# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# Sets up the environment before the config module is imported and provides
# app/client fixtures plus helpers for CSRF tokens and logged-in users.
# =============================================================================

import os

# config.py reads the environment at import time
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("SOCKETIO_ASYNC_MODE", "threading")
os.environ.setdefault("LOG_LEVEL", "DEBUG")

import pytest

from chatapp import create_app
from chatapp.extensions import db, limiter


STRONG_PASSWORD = "Secret123"
INDEX_HTML = "<!doctype html><html><body><div id=\"root\"></div></body></html>"
BUNDLE_JS = "console.log('chat');"


@pytest.fixture
def frontend_dist(tmp_path):
    """A tiny pre-built frontend bundle."""
    dist = tmp_path / "dist"
    (dist / "assets").mkdir(parents=True)
    (dist / "index.html").write_text(INDEX_HTML, encoding="utf-8")
    (dist / "assets" / "app.js").write_text(BUNDLE_JS, encoding="utf-8")
    return dist


@pytest.fixture
def app_config(tmp_path, frontend_dist):
    return {
        "TESTING": True,
        "SECRET_KEY": "test-secret-key",
        "SQLALCHEMY_DATABASE_URI": f"sqlite:///{tmp_path / 'test.db'}",
        "FRONTEND_DIST": str(frontend_dist),
        "SOCKETIO_ASYNC_MODE": "threading",
        "RATELIMIT_STORAGE_URI": "memory://",
        "FORCE_HTTPS": False,
        "SESSION_COOKIE_SECURE": False,
    }


@pytest.fixture
def app(app_config):
    flask_app = create_app(app_config)
    yield flask_app
    with flask_app.app_context():
        limiter.reset()
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


def csrf_headers(client):
    """Fetch a CSRF token for the client's session and return request headers."""
    response = client.get("/api/auth/csrf-token")
    assert response.status_code == 200
    return {"X-CSRFToken": response.get_json()["csrf_token"]}


def signup(client, username, password=STRONG_PASSWORD, full_name=None, headers=None):
    headers = headers or csrf_headers(client)
    return client.post("/api/auth/signup", json={
        "full_name": full_name or username.title(),
        "username": username,
        "password": password,
        "confirm_password": password,
    }, headers=headers)


@pytest.fixture
def make_user(app):
    """Create a user directly in the database and return its id."""
    from werkzeug.security import generate_password_hash
    from chatapp.models import User

    def _make_user(username, password=STRONG_PASSWORD):
        with app.app_context():
            user = User(
                username=username,
                full_name=username.title(),
                password=generate_password_hash(password),
            )
            db.session.add(user)
            db.session.commit()
            return user.id

    return _make_user


@pytest.fixture
def logged_in(client):
    """Sign up `alice` on the shared client; returns (user json, csrf headers)."""
    headers = csrf_headers(client)
    response = signup(client, "alice", headers=headers)
    assert response.status_code == 201
    return response.get_json(), headers
