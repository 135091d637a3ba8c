"""Shared fixtures.

The database URL and log directory are pointed at a temporary directory
before any application module is imported, so tests never touch a real
database file.
"""
import os
import tempfile

_TMP_DIR = tempfile.mkdtemp(prefix="welltrack-tests-")
os.environ["WRITE_DATABASE_URL"] = "sqlite:///" + os.path.join(_TMP_DIR, "test.db")
os.environ["READ_DATABASE_URL"] = os.environ["WRITE_DATABASE_URL"]
os.environ["LOG_DIR"] = _TMP_DIR
os.environ["GEMINI_API_KEY"] = ""

from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from core.auth import create_session
from core.config import SESSION_COOKIE_NAME
from core.exceptions import AIServiceError
from core.repository import UserScopedRepository
from database import models, write_engine
from database.database import WriteSessionLocal
from database.models import Base
from services.ai_client import get_ai_client

USER_ID = "user-1"
OTHER_USER_ID = "user-2"


class FakeAIClient:
    """Stand-in for `GenerativeAIClient` that never touches the network.

    `text` may be a string, a list of strings returned in order (the last
    one repeats) or an exception instance to raise.
    """

    def __init__(self, text="", image_url="https://images.example/food.png"):
        self.text = text
        self.image_url = image_url
        self.prompts = []
        self.image_labels = []

    def generate_text(self, prompt):
        self.prompts.append(prompt)
        reply = self.text
        if isinstance(reply, list):
            reply = reply.pop(0) if len(reply) > 1 else reply[0]
        if isinstance(reply, Exception):
            raise reply
        return reply

    def generate_image(self, prompt, label):
        self.image_labels.append(label)
        if isinstance(self.image_url, Exception):
            raise self.image_url
        return self.image_url


def unavailable(service="text"):
    return AIServiceError("service unavailable", service=service)


@pytest.fixture(autouse=True)
def fresh_schema():
    """Recreate every table before each test."""
    Base.metadata.drop_all(bind=write_engine)
    Base.metadata.create_all(bind=write_engine)
    yield


@pytest.fixture
def db():
    session = WriteSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def fake_ai():
    return FakeAIClient()


def add_metrics(db, user_id=USER_ID, **overrides):
    fields = dict(
        height=175.0,
        weight=70.0,
        age=30,
        gender="male",
        activity_level="moderate",
        blood_pressure="118/76",
        heart_rate=72.0,
        allergies="peanuts, shellfish",
        chronic_conditions="",
        recorded_at=datetime.utcnow(),
    )
    fields.update(overrides)
    return UserScopedRepository(models.HealthMetrics, db, user_id).create(**fields)


@pytest.fixture
def client(fake_ai):
    from main import app

    app.dependency_overrides[get_ai_client] = lambda: fake_ai
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def auth_client(client, db):
    """Client carrying a valid session cookie for USER_ID."""
    client.cookies.set(SESSION_COOKIE_NAME, create_session(db, USER_ID))
    return client
