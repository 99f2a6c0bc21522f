"""Categorization decision logic.

Validates the request, picks the vocabulary for the list type, asks the
remote classifier when one is configured and falls back to keyword
matching otherwise or on any classifier failure. A result's category is
always a member of the active vocabulary, or None for project lists.
"""

import logging
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

from itemcat.categorizer.categories import (
    OTHER_CATEGORY,
    ListType,
    get_category_set,
)
from itemcat.categorizer.classifier import AnthropicClassifier
from itemcat.categorizer.fallback import (
    AFTER_FAILURE_CONFIDENCE,
    NO_CREDENTIAL_CONFIDENCE,
    fallback_categorize,
)
from itemcat.config import Settings
from itemcat.exceptions import ClassifierFailure, ClassifierUnavailable, ValidationError

# Configure module logger
logger = logging.getLogger(__name__)

# Confidence forced onto remote answers outside the vocabulary
OUT_OF_VOCABULARY_CONFIDENCE = 0.5

SOURCE_REMOTE = "remote"
SOURCE_FALLBACK = "fallback"
SOURCE_SKIPPED = "skipped"


@dataclass(frozen=True)
class CategorizationResult:
    """Outcome of categorizing one item.

    Attributes:
        category: Category label, or None for project lists.
        confidence: Heuristic trust score in [0, 1].
        source: Which path produced the result (remote, fallback, skipped).
        classifier_error: Failure reason when the remote call failed.
    """

    category: Optional[str]
    confidence: float
    source: str
    classifier_error: Optional[str] = None

    def to_response(self) -> Dict[str, Any]:
        """Return the client-facing payload."""
        return {"category": self.category, "confidence": self.confidence}


class Categorizer:
    """Categorizes list items.

    Args:
        classifier: Remote classifier, or None to always use the fallback.
    """

    def __init__(self, classifier: Optional[AnthropicClassifier] = None):
        self.classifier = classifier

    @classmethod
    def from_settings(cls, settings: Settings) -> "Categorizer":
        try:
            classifier = AnthropicClassifier.from_settings(settings)
        except ClassifierUnavailable:
            logger.info("No classifier credential configured, using keyword fallback only")
            classifier = None
        return cls(classifier=classifier)

    @property
    def remote_enabled(self) -> bool:
        return self.classifier is not None

    def categorize(
        self,
        item_name: Any,
        list_type: Union[ListType, str, None] = None,
    ) -> CategorizationResult:
        """Categorize a single item.

        Args:
            item_name: Free-text item name.
            list_type: List type; missing or unknown values mean grocery.

        Returns:
            CategorizationResult for the item.

        Raises:
            ValidationError: If item_name is missing or blank.
        """
        if not isinstance(item_name, str) or not item_name.strip():
            raise ValidationError("item_name is required")

        item_name = item_name.strip()
        resolved = ListType.resolve(list_type)
        start_time = time.time()

        categories = get_category_set(resolved)
        if categories is None:
            logger.info(
                "Skipping categorization for project list",
                extra={"list_type": resolved.value},
            )
            return CategorizationResult(
                category=None, confidence=0.0, source=SOURCE_SKIPPED
            )

        if self.classifier is None:
            result = CategorizationResult(
                category=fallback_categorize(item_name, resolved),
                confidence=NO_CREDENTIAL_CONFIDENCE,
                source=SOURCE_FALLBACK,
            )
        else:
            result = self._categorize_remote(item_name, resolved, categories)

        logger.info(
            "Item categorized",
            extra={
                "list_type": resolved.value,
                "category": result.category,
                "confidence": result.confidence,
                "source": result.source,
                "duration_ms": round((time.time() - start_time) * 1000, 2),
            },
        )
        return result

    def _categorize_remote(self, item_name, list_type, categories) -> CategorizationResult:
        try:
            category, confidence = self.classifier.classify(
                item_name, categories, list_label=list_type.value
            )
        except ClassifierFailure as e:
            logger.warning(
                "Classifier failed, using keyword fallback",
                extra={
                    "list_type": list_type.value,
                    "error": e.message,
                    "error_type": e.details.get("error_type", type(e).__name__),
                },
            )
            return CategorizationResult(
                category=fallback_categorize(item_name, list_type),
                confidence=AFTER_FAILURE_CONFIDENCE,
                source=SOURCE_FALLBACK,
                classifier_error=e.details.get("reason", e.message),
            )

        if category not in categories:
            logger.warning(
                "Classifier returned unknown category",
                extra={"list_type": list_type.value, "returned_category": str(category)},
            )
            return CategorizationResult(
                category=OTHER_CATEGORY,
                confidence=OUT_OF_VOCABULARY_CONFIDENCE,
                source=SOURCE_REMOTE,
            )

        return CategorizationResult(
            category=category, confidence=confidence, source=SOURCE_REMOTE
        )
