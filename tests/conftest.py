"""Shared fixtures for ItemCat tests.

The Anthropic API is never contacted: classifiers are wired to an
httpx.MockTransport that records requests and replays canned responses.
"""

import json
from typing import Callable, Dict, Generator, List

import httpx
import pytest
from fastapi.testclient import TestClient

from itemcat.api.main import app
from itemcat.api.metrics import metrics_service
from itemcat.api.routes.categorize import get_categorizer
from itemcat.categorizer import Categorizer
from itemcat.categorizer.classifier import AnthropicClassifier


def completion_body(text: str) -> Dict:
    """Build a Messages API response body whose first block holds `text`."""
    return {
        "id": "msg_test",
        "type": "message",
        "role": "assistant",
        "content": [{"type": "text", "text": text}],
        "model": "claude-3-haiku-20240307",
    }


def reply_with(category, confidence=0.9) -> Callable[[httpx.Request], httpx.Response]:
    """Handler answering every request with the given category and confidence."""
    text = json.dumps({"category": category, "confidence": confidence})

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=completion_body(text))

    return handler


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it served."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.requests: List[httpx.Request] = []

        def recording_handler(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(recording_handler)


@pytest.fixture
def make_classifier():
    """Factory for classifiers backed by a recording mock transport."""
    clients: List[httpx.Client] = []

    def factory(handler):
        transport = RecordingTransport(handler)
        http_client = httpx.Client(transport=transport)
        clients.append(http_client)
        classifier = AnthropicClassifier(api_key="test-key", http_client=http_client)
        return classifier, transport

    yield factory

    for http_client in clients:
        http_client.close()


@pytest.fixture(autouse=True)
def reset_metrics() -> Generator[None, None, None]:
    """Start every test with empty metrics."""
    metrics_service.reset()
    yield
    metrics_service.reset()


@pytest.fixture
def api_client() -> Generator[Callable[[Categorizer], TestClient], None, None]:
    """Factory for a TestClient whose app uses the given Categorizer."""

    def factory(categorizer: Categorizer) -> TestClient:
        app.dependency_overrides[get_categorizer] = lambda: categorizer
        return TestClient(app)

    yield factory

    app.dependency_overrides.clear()


@pytest.fixture
def offline_client(api_client) -> TestClient:
    """TestClient for an app with no classifier credential."""
    return api_client(Categorizer())
