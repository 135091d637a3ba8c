"""Best-effort extraction of structured data from generative-AI replies.

Models wrap JSON in prose or code fences, so the first ``{...}`` or
``[...]`` span is cut out and parsed, then validated against a pydantic
schema. Anything that fails either step yields the caller's fallback.
"""

import json
import re
from typing import Any, List, Optional, Type, TypeVar

from pydantic import TypeAdapter, ValidationError as PydanticValidationError

from core.logger import get_logger

logger = get_logger("services.ai_parsing")

T = TypeVar("T")

_OBJECT_RE = re.compile(r"\{[\s\S]*\}")
_ARRAY_RE = re.compile(r"\[[\s\S]*\]")
_BULLET_RE = re.compile(r"^\s*[-•*]\s*")


def extract_json_object(text: Optional[str]) -> Optional[Any]:
    """Parse the span from the first '{' to the last '}' in `text`."""
    return _extract(text, _OBJECT_RE)


def extract_json_array(text: Optional[str]) -> Optional[Any]:
    """Parse the span from the first '[' to the last ']' in `text`."""
    return _extract(text, _ARRAY_RE)


def _extract(text: Optional[str], pattern) -> Optional[Any]:
    if not text:
        return None
    match = pattern.search(text)
    if not match:
        return None
    try:
        return json.loads(match.group(0))
    except json.JSONDecodeError as exc:
        logger.debug("AI response JSON did not parse: %s", exc)
        return None


def extract_bullets(text: Optional[str]) -> List[str]:
    """Collect '-' / '•' prefixed lines as plain strings."""
    if not text:
        return []
    points = []
    for line in re.split(r"[\r\n]+", text):
        stripped = line.strip()
        if stripped.startswith(("-", "•")):
            points.append(_BULLET_RE.sub("", stripped).strip())
    return [p for p in points if p]


def validate(data: Any, schema: Type[T]) -> Optional[T]:
    """Validate parsed JSON against `schema`; None if it does not conform."""
    if data is None:
        return None
    try:
        return TypeAdapter(schema).validate_python(data)
    except PydanticValidationError as exc:
        logger.warning("AI response failed schema validation: %s", exc.error_count())
        return None


def parse_object(text: Optional[str], schema: Type[T], fallback: T) -> T:
    """Extract and validate a JSON object, returning `fallback` on failure."""
    result = validate(extract_json_object(text), schema)
    return fallback if result is None else result


def parse_string_list(text: Optional[str], fallback: List[str]) -> List[str]:
    """Extract a JSON array of strings, else bullet lines, else `fallback`."""
    result = validate(extract_json_array(text), List[str])
    if result:
        return result
    bullets = extract_bullets(text)
    return bullets if bullets else list(fallback)
