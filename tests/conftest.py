"""
Pytest configuration and fixtures.
"""

import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.core.config import Settings, get_settings
from app.api.v1.gemini_client import get_generative_client


class StubGenerativeClient:
    """Stands in for GeminiClient; records calls and returns or raises on demand."""

    def __init__(self, text="X", error=None):
        self.text = text
        self.error = error
        self.calls = []

    def generate(self, prompt, profile):
        self.calls.append((prompt, profile))
        if self.error is not None:
            raise self.error
        return self.text


@pytest.fixture
def test_settings():
    return Settings(gemini_api_key="test-key", analysis_profile="analysis", app_env="test")


@pytest.fixture
def stub_llm():
    return StubGenerativeClient()


@pytest.fixture
def client(test_settings, stub_llm):
    """Test client with settings and the Gemini collaborator overridden."""
    app.dependency_overrides[get_settings] = lambda: test_settings
    app.dependency_overrides[get_generative_client] = lambda: stub_llm
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def live_client(test_settings):
    """Test client using the real GeminiClient; patch requests.post in the test."""
    app.dependency_overrides[get_settings] = lambda: test_settings
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def valid_payload():
    return {
        "notes": "Iştahsızlık, 2 gündür kusma, hafif ateş.",
        "petInfo": {
            "name": "Boncuk",
            "species": "Kedi",
            "breed": "Tekir",
            "age": 3,
            "weight": 4.2,
        },
    }


@pytest.fixture
def gemini_success_body():
    return {
        "candidates": [
            {
                "content": {"parts": [{"text": "🔍 BULGULAR: kusma"}], "role": "model"},
                "finishReason": "STOP",
            }
        ]
    }
