"""Shared fixtures: a mongomock database injected into a fresh app per test."""

import mongomock
import pytest
from fastapi.testclient import TestClient

from innovation_server.api.server import create_app
from innovation_server.auth.security import issue_token
from innovation_server.config import Config

TEST_SECRET = "test_secret_do_not_use_in_prod"


@pytest.fixture
def cfg():
    return Config(
        ACCESS_TOKEN_SECRET=TEST_SECRET,
        ACCESS_TOKEN_EXPIRE_DAYS=7,
        AUTH_BOOTSTRAP_ADMIN_EMAIL="",
        CORS_ALLOW_ORIGINS="*",
    )


@pytest.fixture
def db():
    return mongomock.MongoClient()["innovationBD"]


@pytest.fixture
def client(cfg, db):
    with TestClient(create_app(cfg, database=db)) as c:
        yield c


@pytest.fixture
def make_token():
    def _make(email="a@x.com", secret=TEST_SECRET, **claims):
        payload = dict(claims)
        if email is not None:
            payload["email"] = email
        return issue_token(payload, secret=secret)

    return _make


@pytest.fixture
def auth_header(make_token):
    def _header(email="a@x.com"):
        return {"Authorization": f"Bearer {make_token(email)}"}

    return _header


@pytest.fixture
def admin(db):
    db["users"].insert_one({"email": "admin@x.com", "name": "Admin", "role": "admin"})
    return "admin@x.com"
