"""Categorization endpoints for the ItemCat API.

This module exposes the single categorize-item endpoint, including its
CORS preflight, on top of the Categorizer.
"""

import logging
import time
from functools import lru_cache
from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import BaseModel, Field

from itemcat.api.metrics import metrics_service
from itemcat.categorizer import Categorizer
from itemcat.config import get_settings

# Configure module logger
logger = logging.getLogger(__name__)

# Create API router
router = APIRouter(tags=["categorization"])

# Sent on every categorize-item response, errors included
CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}


class CategorizeRequest(BaseModel):
    """Request body for categorize-item.

    Both fields are optional at the schema level so that a missing item name
    is reported by the categorizer as a 400, not by FastAPI as a 422.
    """

    item_name: Optional[str] = Field(None, description="Item to categorize")
    list_type: Optional[str] = Field(
        None, description="grocery, shopping or project (default: grocery)"
    )


class CategorizeResponse(BaseModel):
    """Response model for categorize-item.

    Attributes:
        category: Category label, or null for project lists.
        confidence: Heuristic trust score between 0 and 1.
    """

    category: Optional[str] = Field(..., description="Category label")
    confidence: float = Field(..., ge=0.0, le=1.0, description="Confidence score")


@lru_cache()
def get_categorizer() -> Categorizer:
    """Build the process-wide Categorizer from settings."""
    return Categorizer.from_settings(get_settings())


@router.options("/categorize-item")
def categorize_item_preflight() -> PlainTextResponse:
    """Answer the CORS preflight with open-access headers."""
    return PlainTextResponse("ok", headers=CORS_HEADERS)


@router.post("/categorize-item", response_model=CategorizeResponse)
def categorize_item(
    request: CategorizeRequest,
    categorizer: Categorizer = Depends(get_categorizer),
) -> JSONResponse:
    """Categorize one list item.

    Args:
        request: Item name and optional list type.
        categorizer: Categorizer to use (overridable in tests).

    Returns:
        JSON with category and confidence.

    Raises:
        ValidationError: If item_name is missing or blank; rendered as 400.

    Example:
        POST /categorize-item {"item_name": "milk"}
        Returns {"category": "Refrigerated", "confidence": 0.5} without a key.
    """
    start_time = time.time()

    result = categorizer.categorize(request.item_name, request.list_type)

    metrics_service.record_categorization(
        source=result.source,
        latency_ms=(time.time() - start_time) * 1000,
        remote_failed=result.classifier_error is not None,
    )

    return JSONResponse(content=result.to_response(), headers=CORS_HEADERS)
