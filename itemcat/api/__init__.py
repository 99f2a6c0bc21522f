"""FastAPI application module for ItemCat.

This module contains the FastAPI application, route handlers, and API
endpoints for the categorization service.
"""
