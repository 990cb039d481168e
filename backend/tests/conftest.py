"""
Shared fixtures: an isolated SQLite database (set before app import), fake identity and text
oracles wired in through dependency overrides, and a logged-in TestClient.
"""
import json
import os
import tempfile
import uuid

_TMP_DIR = tempfile.mkdtemp(prefix="wisely-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_TMP_DIR, 'test.db')}"
os.environ["SEED_ON_STARTUP"] = "true"
os.environ["IDENTITY_PROVIDER"] = "dev"
os.environ["LLM_PROVIDER"] = "gemini"
os.environ["GEMINI_API_KEY"] = ""
os.environ.setdefault("ENV", "test")

import pytest
from fastapi.testclient import TestClient

from app.database import SessionLocal, init_db
from app.errors import AuthError
from app.llm import get_text_oracle, get_text_oracle_factory
from app.llm.mock_impl import MockTextOracle
from app.main import app
from app.services.identity import IdentityClaims, get_identity_oracle


class FakeIdentityOracle:
    """Accepts "good:<uid>" tokens; uids in `revoked` fail the per-request check."""

    def __init__(self):
        self.revoked: set[str] = set()
        self.verified: list[str] = []

    def verify_token(self, id_token: str) -> IdentityClaims:
        if not id_token.startswith("good:"):
            raise AuthError("Invalid ID token")
        uid = id_token[len("good:"):]
        self.verified.append(uid)
        return IdentityClaims(uid=uid, email=f"{uid}@students.example.com", name="Asha Rao Verma", picture="https://img.example.com/a.png")

    def get_user(self, uid: str) -> IdentityClaims:
        if uid in self.revoked:
            raise AuthError()
        return IdentityClaims(uid=uid)


class FakeTextOracle:
    """Scripted oracle: returns `response` (or raises `error`); falls back to the mock payloads."""

    model_name = "fake"

    def __init__(self):
        self.response: str | None = None
        self.error: Exception | None = None
        self.calls: list[dict] = []
        self._mock = MockTextOracle()

    def respond_with(self, payload) -> None:
        self.response = payload if isinstance(payload, str) else json.dumps(payload)

    def generate_json(self, system_instruction: str, contents: str, response_schema: dict | None = None) -> str:
        self.calls.append({"system": system_instruction, "contents": contents, "schema": response_schema})
        if self.error is not None:
            raise self.error
        if self.response is not None:
            return self.response
        return self._mock.generate_json(system_instruction, contents, response_schema)


def make_questions(n: int, correct: int = 0) -> list[dict]:
    return [
        {
            "id": i + 1,
            "question": f"Pick the correct form ({i + 1}).",
            "options": ["is", "are", "was", "were"],
            "correct": correct,
            "explanation": "Subject-verb agreement.",
        }
        for i in range(n)
    ]


@pytest.fixture
def db():
    init_db()
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def identity_oracle():
    return FakeIdentityOracle()


@pytest.fixture
def text_oracle():
    return FakeTextOracle()


@pytest.fixture
def client(identity_oracle, text_oracle):
    """TestClient with both oracles overridden; no session cookie yet."""
    app.dependency_overrides[get_identity_oracle] = lambda: identity_oracle
    app.dependency_overrides[get_text_oracle] = lambda: text_oracle
    app.dependency_overrides[get_text_oracle_factory] = lambda: (lambda: text_oracle)
    try:
        with TestClient(app) as c:
            yield c
    finally:
        app.dependency_overrides.pop(get_identity_oracle, None)
        app.dependency_overrides.pop(get_text_oracle, None)
        app.dependency_overrides.pop(get_text_oracle_factory, None)


@pytest.fixture
def user_id():
    return f"user-{uuid.uuid4().hex[:10]}"


@pytest.fixture
def auth_client(client, user_id):
    """Client holding a live session cookie for a fresh user."""
    r = client.post("/api/login", json={"idToken": f"good:{user_id}"})
    assert r.status_code == 200, r.text
    return client
