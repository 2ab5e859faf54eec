from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from helpers import FakeCompletionClient
from sleepcoach.core.config import settings
from sleepcoach.main import app
from sleepcoach.observability import client as opik_client
from sleepcoach.services.completion_client import get_completion_client_factory


@pytest.fixture(autouse=True)
def _tracing_disabled(monkeypatch):
    monkeypatch.setattr(opik_client, "get_opik_client", lambda: None)


@pytest.fixture()
def fake_completion():
    return FakeCompletionClient()


@pytest.fixture()
def api_client(fake_completion, monkeypatch):
    monkeypatch.setattr(settings, "openai_api_key", "test-key")
    app.dependency_overrides[get_completion_client_factory] = lambda: (lambda: fake_completion)
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
