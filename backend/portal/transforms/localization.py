"""
Localization extractor.

Localized columns hold either a plain string (single-locale content, usually
legacy rows) or a mapping such as {"en": "Hello", "ar": "مرحبا"}. The lookup
order for a mapping is: requested locale, default locale, first non-empty
entry. Anything else yields None.
"""

from typing import Any, Mapping, Optional

from portal.config import settings


def extract_localized_value(
    value: Any,
    locale: str,
    default_locale: Optional[str] = None,
) -> Optional[str]:
    """Pick the string for `locale` out of a localized value. Never raises."""
    if value is None:
        return None
    if isinstance(value, str):
        return value
    if not isinstance(value, Mapping):
        return None

    fallback_locale = default_locale or settings.default_locale
    for key in (locale, fallback_locale):
        candidate = value.get(key)
        if isinstance(candidate, str) and candidate:
            return candidate

    # Neither locale present: take whatever translation exists
    for candidate in value.values():
        if isinstance(candidate, str) and candidate:
            return candidate
    return None
