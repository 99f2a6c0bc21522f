"""ItemCat: list item categorization service.

This package provides a backend service that sorts free-text grocery and
shopping list entries into a fixed set of categories, using a hosted
language model with a local keyword fallback.

Modules:
    api: FastAPI application and REST API endpoints
    categorizer: Category tables, remote classifier and decision logic
"""

__version__ = "0.1.0"
