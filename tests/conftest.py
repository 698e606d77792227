"""
Pytest configuration and fixtures
"""
import os
import tempfile

# Settings are read at import time, so the environment comes first
_TEST_DIR = tempfile.mkdtemp(prefix="immidraft-tests-")
os.environ.setdefault("OPENAI_API_KEY", "sk-test-key")
os.environ.setdefault("API_SECRET_KEY", "test-secret-key")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_TEST_DIR, 'test.db')}"
os.environ["UPLOAD_DIR"] = os.path.join(_TEST_DIR, "uploads")
os.environ["LOG_FILE_PATH"] = os.path.join(_TEST_DIR, "logs", "app.log")
os.environ["RATE_LIMIT_PER_MINUTE"] = "10000"
os.environ["VERIFICATION_AI_ENABLED"] = "false"

import pytest
from fastapi.testclient import TestClient
from config.settings import settings
from immidraft.api.main import app
from immidraft.db.base import Base
from immidraft.db.connection import db_manager
from immidraft.db.models import Criterion
from immidraft.services.gpt_client import gpt_client

db_manager.create_tables()


class FakeGPT:
    """
    Stand-in for ``gpt_client.chat_completion``

    Replies are consumed in order; a reply may be a string or a callable
    taking the messages and returning a string. ``default`` is used once
    the queue is empty, ``error`` is raised when set.
    """

    def __init__(self):
        self.calls = []
        self.replies = []
        self.default = "Generated text"
        self.error = None

    def queue(self, *replies):
        self.replies.extend(replies)

    @property
    def prompts(self):
        return [call["messages"][-1]["content"] for call in self.calls]

    def __call__(self, messages, temperature=0.7, max_tokens=None, **kwargs):
        self.calls.append({"messages": messages, "temperature": temperature, **kwargs})
        if self.error is not None:
            raise self.error

        reply = self.replies.pop(0) if self.replies else self.default
        content = reply(messages) if callable(reply) else reply
        return {
            "content": content,
            "role": "assistant",
            "usage": {"prompt_tokens": 10, "completion_tokens": 20, "total_tokens": 30},
            "model": "fake-model",
            "finish_reason": "stop",
        }


@pytest.fixture
def fake_gpt(monkeypatch):
    """Replace the OpenAI call on the shared GPT client"""
    fake = FakeGPT()
    monkeypatch.setattr(gpt_client, "chat_completion", fake)
    return fake


@pytest.fixture
def client():
    """Test client (runs startup: table creation and criteria seeding)"""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth_headers():
    return {"Authorization": f"Bearer {settings.api_secret_key}"}


@pytest.fixture(autouse=True)
def clean_database():
    """Empty every table except the criteria reference data after each test"""
    yield
    with db_manager.get_db_session() as session:
        for table in reversed(Base.metadata.sorted_tables):
            if table.name != Criterion.__tablename__:
                session.execute(table.delete())
