"""Remote classifier backed by the Anthropic Messages API.

Sends a single completion request per item and parses the JSON object the
model is asked to reply with. Every way the call can go wrong is reported
as ClassifierFailure so callers have one thing to catch.
"""

import json
import logging
import math
import re
from typing import Any, Optional, Sequence, Tuple

import httpx

from itemcat.config import Settings
from itemcat.exceptions import ClassifierFailure, ClassifierUnavailable

# Configure module logger
logger = logging.getLogger(__name__)

# Matches a reply wrapped in a markdown code fence
_CODE_FENCE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL)

PROMPT_TEMPLATE = """Categorize this {list_label} list item into exactly one of these categories: {categories}.

Item: "{item_name}"

Respond with ONLY a JSON object in this exact format:
{{"category": "CategoryName", "confidence": 0.95}}

The confidence should be between 0 and 1."""


def build_prompt(item_name: str, categories: Sequence[str], list_label: str = "shopping") -> str:
    """Build the user prompt for one item.

    Args:
        item_name: Item to categorize, already trimmed.
        categories: Allowed category labels, in display order.
        list_label: Kind of list, used in the wording of the prompt.

    Returns:
        Prompt text that embeds the item name and the literal category list.
    """
    return PROMPT_TEMPLATE.format(
        list_label=list_label,
        categories=", ".join(categories),
        item_name=item_name,
    )


def parse_completion(payload: Any) -> Tuple[Any, float]:
    """Extract (category, confidence) from a Messages API response body.

    The category is returned as the model gave it; checking it against the
    vocabulary is the caller's job. Confidence is clamped into [0, 1].

    Raises:
        ClassifierFailure: If the body or the embedded JSON is malformed.
    """
    try:
        text = payload["content"][0]["text"]
    except (KeyError, IndexError, TypeError) as e:
        raise ClassifierFailure("response has no text content", e)

    if not isinstance(text, str):
        raise ClassifierFailure("response text is not a string")

    text = text.strip()
    fenced = _CODE_FENCE.match(text)
    if fenced:
        text = fenced.group(1)

    try:
        result = json.loads(text)
    except ValueError as e:
        raise ClassifierFailure("response text is not valid JSON", e)

    if not isinstance(result, dict):
        raise ClassifierFailure("response JSON is not an object")

    confidence = result.get("confidence")
    if isinstance(confidence, bool) or not isinstance(confidence, (int, float)):
        raise ClassifierFailure("response confidence is missing or not a number")

    try:
        confidence = float(confidence)
    except (OverflowError, ValueError) as e:
        raise ClassifierFailure("response confidence is out of range", e)

    if math.isnan(confidence):
        raise ClassifierFailure("response confidence is NaN")

    confidence = min(max(confidence, 0.0), 1.0)
    return result.get("category"), confidence


class AnthropicClassifier:
    """Classifies item names with a hosted Claude model.

    Attributes:
        api_key: Anthropic API key.
        api_url: Messages endpoint URL.
        model: Model name sent with each request.
        version: Value of the anthropic-version header.
        max_tokens: Completion token budget.
        timeout: Request timeout in seconds, or None for the httpx default.
    """

    def __init__(
        self,
        api_key: str,
        api_url: str = "https://api.anthropic.com/v1/messages",
        model: str = "claude-3-haiku-20240307",
        version: str = "2023-06-01",
        max_tokens: int = 100,
        timeout: Optional[float] = None,
        http_client: Optional[httpx.Client] = None,
    ):
        if not api_key:
            raise ClassifierUnavailable()

        self.api_key = api_key
        self.api_url = api_url
        self.model = model
        self.version = version
        self.max_tokens = max_tokens
        self.timeout = timeout
        self._http_client = http_client

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        http_client: Optional[httpx.Client] = None,
    ) -> "AnthropicClassifier":
        """Create a classifier from settings.

        Raises:
            ClassifierUnavailable: If no API key is configured.
        """
        if not settings.classifier_configured:
            raise ClassifierUnavailable()

        return cls(
            api_key=settings.ANTHROPIC_API_KEY.strip(),
            api_url=settings.ANTHROPIC_API_URL,
            model=settings.ANTHROPIC_MODEL,
            version=settings.ANTHROPIC_VERSION,
            max_tokens=settings.ANTHROPIC_MAX_TOKENS,
            timeout=settings.ANTHROPIC_TIMEOUT,
            http_client=http_client,
        )

    def _headers(self) -> dict:
        return {
            "Content-Type": "application/json",
            "x-api-key": self.api_key,
            "anthropic-version": self.version,
        }

    def _post(self, client: httpx.Client, body: dict) -> httpx.Response:
        if self.timeout is None:
            return client.post(self.api_url, headers=self._headers(), json=body)
        return client.post(
            self.api_url, headers=self._headers(), json=body, timeout=self.timeout
        )

    def classify(
        self,
        item_name: str,
        categories: Sequence[str],
        list_label: str = "shopping",
    ) -> Tuple[Any, float]:
        """Ask the model for a category.

        Args:
            item_name: Item to categorize, already trimmed.
            categories: Allowed category labels.
            list_label: Kind of list, used in the prompt.

        Returns:
            Tuple of (category as returned by the model, confidence).

        Raises:
            ClassifierFailure: On transport errors, non-2xx responses or an
                unparseable body.
        """
        body = {
            "model": self.model,
            "max_tokens": self.max_tokens,
            "messages": [
                {
                    "role": "user",
                    "content": build_prompt(item_name, categories, list_label),
                }
            ],
        }

        try:
            if self._http_client is not None:
                response = self._post(self._http_client, body)
            else:
                with httpx.Client() as client:
                    response = self._post(client, body)
        except httpx.HTTPError as e:
            raise ClassifierFailure("transport error", e)

        if not response.is_success:
            raise ClassifierFailure(f"API returned status {response.status_code}")

        try:
            payload = response.json()
        except ValueError as e:
            raise ClassifierFailure("response body is not valid JSON", e)

        category, confidence = parse_completion(payload)
        logger.debug(
            "Classifier replied",
            extra={"model": self.model, "category": category, "confidence": confidence},
        )
        return category, confidence
