import os

# settings are read at import time, so the environment must be ready first
os.environ["API_KEY"] = "test-api-key"
os.environ["SECRET_KEY"] = "test-secret-key-" + "x" * 64
os.environ["ALGORITHM"] = "HS512"
os.environ["DB_DRIVER_NAME"] = "sqlite"
os.environ["DB_DATABASE_NAME"] = ":memory:"
os.environ["OPEN_AI_MODEL"] = "test-model"

from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from knowledge_assistant.api.ai_service import AIService
from knowledge_assistant.api.fast_api import get_ai_service
from knowledge_assistant.database.core.db import Base, SessionLocal, engine, init_db
from knowledge_assistant.main import app


class FakeCompletions:
    """Stands in for ``client.completions``; records every request."""

    def __init__(self, text="  reply  "):
        self.text = text
        self.calls = []
        self.error = None

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return SimpleNamespace(choices=[SimpleNamespace(text=self.text)])


class FakeClient:
    def __init__(self):
        self.completions = FakeCompletions()


@pytest.fixture(autouse=True)
def tables():
    Base.metadata.drop_all(bind=engine)
    init_db()
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def fake_client():
    return FakeClient()


@pytest.fixture
def ai_service(fake_client):
    return AIService(client=fake_client, model="test-model")


@pytest.fixture
def session():
    s = SessionLocal()
    try:
        yield s
    finally:
        s.close()


@pytest.fixture
def client(ai_service):
    with TestClient(app) as c:
        app.dependency_overrides[get_ai_service] = lambda: ai_service
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def registered_user(client):
    payload = {"email": "ada@example.com", "password": "s3cret", "firstName": "Ada", "lastName": "Lovelace"}
    response = client.post("/api/users/register", json=payload)
    assert response.status_code == 200
    return response.json()
