"""Tests for error handling in the ItemCat API.

Malformed requests must come back as 400 with an "error" field and must
never be categorized.
"""

import pytest

from itemcat.api.metrics import metrics_service
from itemcat.exceptions import (
    ClassifierFailure,
    ClassifierUnavailable,
    ItemCatException,
    ValidationError,
)


@pytest.mark.parametrize(
    "body",
    [
        {},
        {"item_name": ""},
        {"item_name": "   "},
        {"item_name": None},
        {"list_type": "grocery"},
        {"item_name": "", "list_type": "project"},
    ],
)
def test_missing_item_name_returns_400(offline_client, body):
    """Test that missing or blank item names are rejected."""
    response = offline_client.post("/categorize-item", json=body)

    assert response.status_code == 400
    data = response.json()
    assert data["error"] == "item_name is required"
    assert "category" not in data
    assert response.headers["access-control-allow-origin"] == "*"


def test_rejected_requests_are_not_counted(offline_client):
    """Test that validation failures never produce a categorization."""
    offline_client.post("/categorize-item", json={"item_name": " "})

    assert metrics_service.get_metrics()["categorization_count"] == 0


def test_invalid_json_returns_400(offline_client):
    """Test that an unparseable body is a client error."""
    response = offline_client.post(
        "/categorize-item",
        content="{not json",
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid request body"


@pytest.mark.parametrize("body", [["milk"], "milk", {"item_name": 42}])
def test_wrong_body_shape_returns_400(offline_client, body):
    """Test that bodies of the wrong shape are client errors."""
    response = offline_client.post("/categorize-item", json=body)

    assert response.status_code == 400
    data = response.json()
    assert "error" in data
    assert isinstance(data["details"]["errors"], list)


def test_unknown_list_type_uses_grocery(offline_client):
    """Test that an unknown list type is not an error."""
    response = offline_client.post(
        "/categorize-item", json={"item_name": "milk", "list_type": "wishlist"}
    )

    assert response.status_code == 200
    assert response.json() == {"category": "Refrigerated", "confidence": 0.5}


def test_health_check_not_affected_by_errors(offline_client):
    """Test that /ping keeps working after bad requests."""
    offline_client.post("/categorize-item", json={})

    response = offline_client.get("/ping")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_exception_hierarchy():
    """Test status codes and details carried by each exception."""
    failure = ClassifierFailure("transport error", ConnectionError("refused"))

    assert isinstance(failure, ItemCatException)
    assert failure.status_code == 502
    assert failure.details == {
        "reason": "transport error",
        "error": "refused",
        "error_type": "ConnectionError",
    }
    assert ClassifierUnavailable().status_code == 503
    assert ValidationError("item_name is required").status_code == 400
    assert ValidationError("bad").details == {}
