"""
Institute Portal Backend: Value Coercion Utilities
===================================================

What:  Tolerant scalar and JSON coercion with caller-supplied fallbacks.
Why:   Admin forms send booleans as "true"/"1"/"yes", numbers as strings, and
       structured fields either as JSON text or already-decoded values. Rows
       store lists and objects as serialized text. Every read and write path
       funnels through these helpers so a bad value degrades to a default
       instead of failing the request.

Fallback contract:
    parse_boolean(None, F)        → F
    parse_number("", F)           → F
    parse_json_value("  ", F)     → F
    parse_json_value("{bad", F)   → F  (+ WARNING log, never raises)
    parse_json_value("NaN", F)    → F  (NaN/Infinity are not JSON)
    parse_json_value([1, 2], F)   → [1, 2]  (already decoded, passthrough)
"""

import json
import logging
import math
from typing import Any, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

_TRUE_STRINGS = frozenset({"true", "1", "yes"})
_FALSE_STRINGS = frozenset({"false", "0", "no"})

# Longest raw value echoed into a decode-failure warning
_LOG_PREVIEW_CHARS = 120

# Deeply nested text exhausts the recursive decoder
_DECODE_ERRORS = (ValueError, RecursionError)


def _reject_constant(token: str) -> Any:
    raise ValueError(f"{token} is not valid JSON")


def _loads(text: str) -> Any:
    """json.loads without the NaN/Infinity extensions."""
    return json.loads(text, parse_constant=_reject_constant)


def parse_boolean(value: Any, fallback: Optional[bool]) -> Optional[bool]:
    """
    Coerce a loosely-typed flag into a bool.

    Strings are trimmed and lower-cased, then matched against
    {"true", "1", "yes"} and {"false", "0", "no"}. Unrecognized strings,
    including the empty string, yield `fallback`.
    """
    if value is None:
        return fallback
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in _TRUE_STRINGS:
            return True
        if normalized in _FALSE_STRINGS:
            return False
    return fallback


def parse_number(value: Any, fallback: Optional[float]) -> Optional[float]:
    """
    Coerce a numeric value or numeric string.

    Bools are not numbers here (a checkbox value in a numeric field is a
    client bug). Strings go through float(); anything unparsable or
    non-finite yields `fallback`.
    """
    if value is None or isinstance(value, bool):
        return fallback
    if isinstance(value, (int, float)):
        return value if math.isfinite(value) else fallback
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return fallback
        try:
            parsed = float(text)
        except ValueError:
            return fallback
        return parsed if math.isfinite(parsed) else fallback
    return fallback


def parse_json_value(value: Any, fallback: T) -> T:
    """
    Decode a JSON-encoded column value.

    Idempotent: a value that is not a string is assumed to be decoded already
    (native JSON columns, request bodies) and is returned unchanged.
    """
    if value is None:
        return fallback
    if isinstance(value, str):
        if not value.strip():
            return fallback
        try:
            return _loads(value)
        except _DECODE_ERRORS as e:
            logger.warning(
                "Failed to parse JSON string field, returning fallback: %s (value=%r)",
                e,
                value[:_LOG_PREVIEW_CHARS],
            )
            return fallback
    return value


def serialize_json_value(value: Any) -> Optional[str]:
    """
    Encode a structured value for a TEXT column.

    Empty values are stored as NULL so reads fall back to the field's default.
    A string that already holds JSON is stored as-is; this keeps a client
    that pre-serialized its payload from getting it double-encoded.
    """
    if not value:
        return None
    if isinstance(value, str):
        try:
            _loads(value)
        except _DECODE_ERRORS:
            return json.dumps(value, ensure_ascii=False)
        return value
    return json.dumps(value, ensure_ascii=False)
