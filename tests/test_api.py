"""Tests for the FastAPI application endpoints.

This module contains integration tests for the ItemCat API endpoints,
including health checks, the categorize-item endpoint and its preflight.
"""

import httpx
import pytest
from fastapi.testclient import TestClient

from itemcat.api.main import app
from itemcat.categorizer import Categorizer

from conftest import completion_body, reply_with

# Create test client
client = TestClient(app)


def test_ping_endpoint():
    """Test that the /ping endpoint returns correct status and JSON."""
    response = client.get("/ping")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
    assert "X-Request-ID" in response.headers


def test_status_endpoint_offline(offline_client):
    """Test that /status reports a fallback-only service."""
    response = offline_client.get("/status")

    assert response.status_code == 200
    data = response.json()

    assert data["classifier_configured"] is False
    assert data["model"] is None
    assert data["list_types"] == ["grocery", "shopping", "project"]


def test_status_endpoint_with_classifier(api_client, make_classifier):
    """Test that /status reports the configured model."""
    classifier, _ = make_classifier(reply_with("Produce"))
    response = api_client(Categorizer(classifier)).get("/status")

    data = response.json()
    assert data["classifier_configured"] is True
    assert data["model"] == "claude-3-haiku-20240307"


def test_categorize_grocery_offline(offline_client):
    """Test categorizing a grocery item without a credential."""
    response = offline_client.post(
        "/categorize-item", json={"item_name": "milk", "list_type": "grocery"}
    )

    assert response.status_code == 200
    assert response.json() == {"category": "Refrigerated", "confidence": 0.5}
    assert response.headers["access-control-allow-origin"] == "*"


def test_categorize_defaults_to_grocery(offline_client):
    """Test that list_type is optional."""
    response = offline_client.post("/categorize-item", json={"item_name": "milk"})

    assert response.status_code == 200
    assert response.json()["category"] == "Refrigerated"


def test_categorize_shopping_offline(offline_client):
    """Test categorizing a shopping item without a credential."""
    response = offline_client.post(
        "/categorize-item", json={"item_name": "shoes", "list_type": "shopping"}
    )

    assert response.json() == {"category": "Shoes", "confidence": 0.5}


def test_categorize_project_returns_null(api_client, make_classifier):
    """Test that project items come back uncategorized with no remote call."""
    classifier, transport = make_classifier(reply_with("Produce"))
    response = api_client(Categorizer(classifier)).post(
        "/categorize-item", json={"item_name": "paint brushes", "list_type": "project"}
    )

    assert response.status_code == 200
    assert response.json() == {"category": None, "confidence": 0.0}
    assert transport.requests == []


def test_categorize_remote(api_client, make_classifier):
    """Test that a remote answer is passed through."""
    classifier, _ = make_classifier(reply_with("Produce", 0.93))
    response = api_client(Categorizer(classifier)).post(
        "/categorize-item", json={"item_name": "kale"}
    )

    assert response.status_code == 200
    assert response.json() == {"category": "Produce", "confidence": 0.93}


def test_categorize_remote_failure(api_client, make_classifier):
    """Test that a failed remote call still answers 200 with a fallback."""
    classifier, _ = make_classifier(lambda request: httpx.Response(401, json={}))
    response = api_client(Categorizer(classifier)).post(
        "/categorize-item",
        json={"item_name": "running shoes", "list_type": "shopping"},
    )

    assert response.status_code == 200
    assert response.json() == {"category": "Shoes", "confidence": 0.3}


def test_categorize_remote_out_of_vocabulary(api_client, make_classifier):
    """Test that unknown remote categories are normalized."""
    classifier, _ = make_classifier(reply_with("Snacks & Sweets", 0.99))
    response = api_client(Categorizer(classifier)).post(
        "/categorize-item", json={"item_name": "gummy bears"}
    )

    assert response.json() == {"category": "Other", "confidence": 0.5}


def test_preflight_returns_cors_headers():
    """Test the CORS preflight response."""
    response = client.options("/categorize-item")

    assert response.status_code == 200
    assert response.text == "ok"
    assert response.headers["access-control-allow-origin"] == "*"
    assert "content-type" in response.headers["access-control-allow-headers"]


def test_metrics_endpoint_counts_sources(api_client, make_classifier):
    """Test that /metrics reflects categorizations by source."""
    classifier, _ = make_classifier(lambda request: httpx.Response(503, json={}))
    failing = api_client(Categorizer(classifier))

    failing.post("/categorize-item", json={"item_name": "milk"})
    failing.post("/categorize-item", json={"item_name": "drill", "list_type": "project"})

    data = failing.get("/metrics").json()
    assert data["categorization_count"] == 2
    assert data["by_source"] == {"fallback": 1, "skipped": 1}
    assert data["remote_failures"] == 1


@pytest.mark.parametrize(
    "reply_text",
    [
        '{"category": "Dairy", "confidence": NaN}',
        '{"category": "Dairy", "confidence": ' + "9" * 400 + "}",
    ],
)
def test_categorize_unusable_confidence_falls_back(api_client, make_classifier, reply_text):
    """Test that a confidence that is not a finite number still gets a 200."""
    classifier, _ = make_classifier(
        lambda request: httpx.Response(200, json=completion_body(reply_text))
    )
    response = api_client(Categorizer(classifier)).post(
        "/categorize-item", json={"item_name": "milk"}
    )

    assert response.status_code == 200
    assert response.json() == {"category": "Refrigerated", "confidence": 0.3}
