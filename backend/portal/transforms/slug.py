"""URL slug generation for service centers and products."""

import re

_SEPARATORS = re.compile(r"[\s_]+")
_DISALLOWED = re.compile(r"[^a-z0-9-]")
_REPEATED_HYPHENS = re.compile(r"-+")


def slugify(text: str) -> str:
    """
    Deterministic, idempotent string → slug transform.

    "Hello, World!  Foo_Bar" → "hello-world-foo-bar"

    Non-ASCII letters are removed rather than transliterated, so a purely
    Arabic name slugifies to "". Callers treat an empty slug as invalid input.
    Uniqueness is not checked here; see the service layer.
    """
    slug = text.lower().strip()
    slug = _SEPARATORS.sub("-", slug)
    slug = _DISALLOWED.sub("", slug)
    slug = _REPEATED_HYPHENS.sub("-", slug)
    return slug.strip("-")
