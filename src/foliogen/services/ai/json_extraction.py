"""Parsing of model text output into trusted, typed structures.

All AI-produced payloads pass through here before calling code uses them.
Nothing in this module raises: malformed output yields the caller's fallback.
"""

import re
from typing import Any, TypeVar

import orjson
import structlog
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

logger = structlog.get_logger(__name__)

T = TypeVar("T")
ModelT = TypeVar("ModelT", bound=BaseModel)

SAMPLE_LENGTH = 100

_LEADING_FENCE = re.compile(r"^\s*```(?:json)?\s*", re.IGNORECASE)
_TRAILING_FENCE = re.compile(r"\s*```\s*$")


def strip_code_fences(text: str) -> str:
    """Remove surrounding fenced-code-block markers and whitespace."""
    cleaned = _LEADING_FENCE.sub("", text)
    cleaned = _TRAILING_FENCE.sub("", cleaned)
    return cleaned.strip()


def extract_json(text: str | None, fallback: T) -> Any | T:
    """
    Parse model output as JSON.

    Args:
        text: Raw model text, possibly wrapped in ```json fences
        fallback: Value returned untouched when the text cannot be parsed

    Returns:
        The parsed value, or ``fallback``
    """
    if not text:
        logger.warning("Empty text provided for JSON extraction")
        return fallback

    cleaned = strip_code_fences(text)
    if not cleaned:
        logger.warning("Text became empty after removing code fences")
        return fallback

    try:
        return orjson.loads(cleaned)
    except (orjson.JSONDecodeError, RecursionError) as e:
        logger.error(
            "JSON parsing failed",
            error=str(e),
            text_sample=text[:SAMPLE_LENGTH],
        )
        return fallback


def parse_payload(text: str | None, model: type[ModelT], fallback: ModelT) -> ModelT:
    """
    Parse model output and validate it against an expected shape.

    Returns ``fallback`` when the text is not JSON, is not an object,
    or does not satisfy ``model``.
    """
    data = extract_json(text, None)
    if data is None:
        return fallback

    if not isinstance(data, dict):
        logger.error(
            "AI payload is not a JSON object",
            expected=model.__name__,
            text_sample=(text or "")[:SAMPLE_LENGTH],
        )
        return fallback

    try:
        return model.model_validate(data)
    except PydanticValidationError as e:
        logger.error(
            "AI payload failed validation",
            expected=model.__name__,
            errors=e.error_count(),
            text_sample=(text or "")[:SAMPLE_LENGTH],
        )
        return fallback
