"""
Shared pytest fixtures for backend tests.
The Gemini client is swapped out through FastAPI dependency overrides, so no
test touches the network.
"""
import pytest
import sys
import os
from datetime import date

# Add backend to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from gemini import Completion


class FakeCompletionClient:
    """Stands in for GeminiClient; records the turns it was asked to complete."""

    def __init__(self, text: str = "", error: Exception | None = None):
        self.text = text
        self.error = error
        self.calls = []

    async def complete(self, turns):
        self.calls.append(turns)
        if self.error:
            raise self.error
        return Completion(text=self.text, finish_reason="STOP")


def gemini_body(text: str, finish_reason: str = "STOP") -> dict:
    """A generateContent response body with a single candidate."""
    return {
        "candidates": [
            {
                "content": {"role": "model", "parts": [{"text": text}]},
                "finishReason": finish_reason,
            }
        ]
    }


@pytest.fixture
def today():
    return date(2025, 3, 10)


@pytest.fixture
def fake_completion():
    return FakeCompletionClient()


@pytest.fixture
def app_client(fake_completion, monkeypatch):
    """
    Test client for the FastAPI app with the completion client replaced.
    Tests that need a real GeminiClient set their own override.
    """
    from fastapi.testclient import TestClient
    import main

    monkeypatch.setenv("GEMINI_API_KEY", "test-key")
    main.app.dependency_overrides[main.get_completion_client] = lambda: fake_completion
    with TestClient(main.app) as client:
        yield client
    main.app.dependency_overrides.clear()
