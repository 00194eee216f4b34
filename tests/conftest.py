# tests/conftest.py
import os
import tempfile
import uuid

# must be set before summarizer_api is imported anywhere
_TMP = tempfile.mkdtemp(prefix="summarizer-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{_TMP}/test.db"
os.environ["WEBHOOK_URL"] = "http://webhook.test/summarize"
os.environ["JWT_SECRET"] = "test-secret"

import pytest
from fastapi.testclient import TestClient

from summarizer_api.main import app


def _signup(client: TestClient, name: str = "Test User") -> dict:
    email = f"user-{uuid.uuid4().hex[:10]}@example.com"
    r = client.post("/api/auth/signup", json={"full_name": name, "email": email, "password": "hunter22"})
    assert r.status_code == 200, r.text
    return r.json()


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def user_client():
    """A client already signed in as a fresh user."""
    with TestClient(app) as c:
        c.user = _signup(c)
        yield c


@pytest.fixture
def other_client():
    with TestClient(app) as c:
        c.user = _signup(c, name="Someone Else")
        yield c
