"""Categorization logic for ItemCat.

Holds the fixed category vocabularies, the keyword fallback, the remote
language model classifier and the Categorizer that ties them together.
"""

from itemcat.categorizer.categories import ListType
from itemcat.categorizer.service import CategorizationResult, Categorizer

__all__ = ["CategorizationResult", "Categorizer", "ListType"]
