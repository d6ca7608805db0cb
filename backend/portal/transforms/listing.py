"""
Institute Portal Backend: Equipment/Product List Normalizer
============================================================

What:  Turns heterogeneous equipment/product lists into the canonical item
       shape returned by the API and written to equipment tables.
Why:   Lists arrive from admin forms, legacy JSON columns and equipment rows,
       each with its own key names ("title" vs "name", "details" vs
       "description") and with specifications either as JSON text or objects.

Canonical item:
    {
        "name": str,
        "description": str | None,
        "image": str | None,
        "specifications": dict | list | None,
    }

Rules:
    name            ← name, else title, else the item is dropped
    description     ← details, else description, else None
    image           ← image, else None
    specifications  ← decoded specifications, else None

Dropping is a stable filter: kept items keep their relative order, and
normalizing an already-canonical list returns an equal list.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional

from portal.transforms.coercion import parse_json_value

logger = logging.getLogger(__name__)


def _first_present(item: Mapping[str, Any], *keys: str) -> Any:
    """Value of the first key that is present and not None."""
    for key in keys:
        value = item.get(key)
        if value is not None:
            return value
    return None


def normalize_list_item(item: Any) -> Optional[Dict[str, Any]]:
    """
    Normalize one list element.

    Returns None for an element that must be dropped: anything that is not a
    mapping, or a mapping whose name cannot be resolved.
    """
    if not isinstance(item, Mapping):
        return None

    name = item.get("name") or item.get("title")
    if not name:
        return None

    specifications = None
    if "specifications" in item:
        specifications = parse_json_value(item["specifications"], None)

    return {
        "name": name,
        "description": _first_present(item, "details", "description"),
        "image": item.get("image"),
        "specifications": specifications,
    }


def normalize_list_items(raw: Any) -> List[Dict[str, Any]]:
    """
    Normalize a whole equipment/product list.

    `raw` may still be JSON text; it is decoded first. A value that does not
    decode to a list yields an empty list.
    """
    items = parse_json_value(raw, [])
    if not isinstance(items, list):
        return []

    normalized = []
    for item in items:
        canonical = normalize_list_item(item)
        if canonical is not None:
            normalized.append(canonical)

    dropped = len(items) - len(normalized)
    if dropped:
        logger.debug("Dropped %d list item(s) without a resolvable name", dropped)
    return normalized
