"""FastAPI application main module.

This module defines the main FastAPI application instance, the error
handlers that turn exceptions into JSON error bodies, and the health and
status endpoints of the ItemCat service.
"""

from contextlib import asynccontextmanager
from typing import Any, Dict

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from itemcat import __version__
from itemcat.api.logging_config import RequestLoggingMiddleware, setup_logging
from itemcat.api.metrics import metrics_service
from itemcat.api.routes import categorize
from itemcat.api.routes.categorize import CORS_HEADERS, get_categorizer
from itemcat.categorizer import Categorizer, ListType
from itemcat.config import get_settings
from itemcat.exceptions import ItemCatException


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(get_settings().LOG_LEVEL)
    yield


# Create FastAPI application instance
app = FastAPI(
    title="ItemCat API",
    description="Grocery and shopping list item categorization service",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(RequestLoggingMiddleware)

# Include routers
app.include_router(categorize.router)


@app.exception_handler(ItemCatException)
async def itemcat_exception_handler(request: Request, exc: ItemCatException) -> JSONResponse:
    """Render ItemCat errors as {"error": ..., "details": ...}."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.message, "details": exc.details},
        headers=CORS_HEADERS,
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed request bodies as 400 instead of FastAPI's 422."""
    errors = [
        {"loc": [str(part) for part in err.get("loc", ())], "msg": err.get("msg")}
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid request body", "details": {"errors": errors}},
        headers=CORS_HEADERS,
    )


@app.get("/ping")
def ping() -> Dict[str, str]:
    """Health check endpoint.

    Returns:
        Dictionary with status key set to "ok".

    Example:
        >>> response = client.get("/ping")
        >>> assert response.json() == {"status": "ok"}
    """
    return {"status": "ok"}


@app.get("/status")
def service_status(categorizer: Categorizer = Depends(get_categorizer)) -> Dict[str, Any]:
    """Report how items are being categorized.

    Returns:
        Dictionary with whether the remote classifier is configured, the
        model it uses and the supported list types.
    """
    classifier = categorizer.classifier
    return {
        "classifier_configured": categorizer.remote_enabled,
        "model": classifier.model if classifier is not None else None,
        "list_types": [list_type.value for list_type in ListType],
        "version": __version__,
    }


@app.get("/metrics")
def get_metrics() -> Dict[str, Any]:
    """Return categorization counters and latency figures."""
    return metrics_service.get_metrics()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "itemcat.api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
