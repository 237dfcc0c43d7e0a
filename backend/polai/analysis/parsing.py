"""Recover the JSON object from a raw language-model response."""

import json
import logging
import re
from typing import Any

from polai.core.errors import ResponseParseError

logger = logging.getLogger(__name__)

_JSON_FENCE = re.compile(r"```json\s*\n(.*?)\n\s*```", re.DOTALL | re.IGNORECASE)
_ANY_FENCE = re.compile(r"```[^\n]*\n(.*?)\n\s*```", re.DOTALL)
_BRACED = re.compile(r"\{.*\}", re.DOTALL)


def _candidates(response: str):
    yield response
    for pattern in (_JSON_FENCE, _ANY_FENCE):
        match = pattern.search(response)
        if match:
            yield match.group(1)
    match = _BRACED.search(response)
    if match:
        yield match.group(0)


def parse_json_response(response: str | None) -> dict[str, Any]:
    """Return the JSON object contained in *response*.

    Tries, in order: the whole response, a ```json fenced block, any fenced block,
    and the span from the first ``{`` to the last ``}``.

    Raises:
        ResponseParseError: If no stage yields a JSON object.
    """
    if not response or not response.strip():
        raise ResponseParseError("Empty response from analysis provider")

    for candidate in _candidates(response):
        try:
            parsed = json.loads(candidate)
        except json.JSONDecodeError:
            continue
        if isinstance(parsed, dict):
            return parsed

    logger.error("Failed to parse provider response: %s", response[:500])
    raise ResponseParseError("No valid JSON found in provider response")
