"""Keyword-based fallback categorization.

Used whenever the remote classifier is not configured or fails. Matching is
a plain case-insensitive substring scan over an ordered keyword table, so
the result is deterministic for a given item name.
"""

import logging

from itemcat.categorizer.categories import (
    OTHER_CATEGORY,
    KeywordTable,
    ListType,
    get_keyword_table,
)

# Configure module logger
logger = logging.getLogger(__name__)

# Confidence attached to fallback results
NO_CREDENTIAL_CONFIDENCE = 0.5
AFTER_FAILURE_CONFIDENCE = 0.3


def match_keywords(item_name: str, table: KeywordTable) -> str:
    """Return the first category whose keywords occur in the item name.

    Args:
        item_name: Free-text item name.
        table: Ordered (category, keywords) pairs.

    Returns:
        The matching category, or "Other" if nothing matches.

    Example:
        >>> match_keywords("Whole Milk", (("Refrigerated", ("milk", "eggs")),))
        'Refrigerated'
    """
    name = item_name.lower()

    for category, keywords in table:
        if any(keyword in name for keyword in keywords):
            return category

    return OTHER_CATEGORY


def fallback_categorize(item_name: str, list_type: ListType) -> str:
    """Categorize an item with the keyword table for its list type.

    Raises:
        ValueError: If the list type has no keyword table (project lists).
    """
    table = get_keyword_table(list_type)
    if table is None:
        raise ValueError(f"List type '{list_type.value}' cannot be categorized")

    category = match_keywords(item_name, table)
    logger.debug(
        "Fallback match",
        extra={"list_type": list_type.value, "category": category},
    )
    return category
