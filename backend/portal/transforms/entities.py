"""
Institute Portal Backend: Entity Transformers
==============================================

What:  One pure function per entity kind turning a raw row mapping (from
       `Base.to_dict()` plus attached relations) into its canonical
       JSON-friendly representation.
How:   Every transformer follows the same template:
         1. copy the pass-through scalar fields
         2. decode each JSON-encoded column with a type-appropriate fallback
            ([] for list-typed fields, None for object-typed fields)
         3. extract localized fields for the caller's locale
         4. normalize equipment/product relations into canonical items
Who:   Called by the service layer for every read and after every write.

Locale semantics:
    locale="ar"  → localized fields become a single string (or None)
    locale=None  → localized fields are returned untouched, so admin editors
                   receive the full {"en": ..., "ar": ...} mapping

Failure semantics:
    Nothing in here raises for bad data. Malformed JSON degrades to the
    field's fallback, nameless list items are dropped, and a service center
    product that cannot be transformed is logged and skipped.
"""

import logging
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Mapping, Optional

from portal.transforms.coercion import parse_json_value
from portal.transforms.listing import normalize_list_item, normalize_list_items
from portal.transforms.localization import extract_localized_value

logger = logging.getLogger(__name__)

Row = Mapping[str, Any]

# ── Field inventories ─────────────────────────────────────────────────────
PRODUCT_LIST_FIELDS = ("images", "tags", "features", "sizes")
PRODUCT_OBJECT_FIELDS = ("specifications",)
PRODUCT_LOCALIZED_FIELDS = ("description", "short_description")

CENTER_LOCALIZED_FIELDS = (
    "headline",
    "description",
    "location",
    "lab_methodology",
    "future_prospective",
)
CENTER_LIST_FIELDS = ("services",)
CENTER_OBJECT_FIELDS = ("work_volume", "company_activity", "metrics")
# Relation keys attached by the service layer; replaced in the output
CENTER_RELATION_KEYS = ("equipments", "products_list", "staff")

SERVICE_LOCALIZED_FIELDS = ("subtitle", "description")
SERVICE_RELATION_KEYS = ("equipment", "center_head")

STAFF_REQUIRED_FIELDS = ("name", "title")
STAFF_LOCALIZED_FIELDS = (
    "academic_position",
    "current_admin_position",
    "bio",
    "research_interests",
)


# ── Field-level helpers ───────────────────────────────────────────────────

def _localize(value: Any, locale: Optional[str], required: bool = False) -> Any:
    """Localized field value; `required` fields become "" rather than None."""
    if locale is None:
        return value
    text = extract_localized_value(value, locale)
    if required:
        return text or ""
    return text


def _decode_list(value: Any) -> List[Any]:
    """Decode a list-typed column; anything that is not a list becomes []."""
    decoded = parse_json_value(value, [])
    return decoded if isinstance(decoded, list) else []


def _decode_object(value: Any) -> Any:
    """Decode an object-typed column; missing or malformed becomes None."""
    return parse_json_value(value, None)


def _to_float(value: Any) -> Optional[float]:
    # NUMERIC columns come back as Decimal
    if value is None:
        return None
    if isinstance(value, Decimal):
        return float(value)
    return value


def _transform_equipments(equipments: Any, locale: Optional[str]) -> List[Dict[str, Any]]:
    """
    Canonical items for an equipment relation, keeping each row's id.

    Names and descriptions are localized before normalization so the
    "drop nameless items" rule applies to the string the caller will see.
    """
    rows = parse_json_value(equipments, [])
    if not isinstance(rows, list):
        return []

    items = []
    for equipment in rows:
        if not isinstance(equipment, Mapping):
            continue
        localized = dict(equipment)
        if locale is not None:
            localized["name"] = extract_localized_value(equipment.get("name"), locale)
            localized["description"] = extract_localized_value(
                equipment.get("description"), locale
            )
        canonical = normalize_list_item(localized)
        if canonical is None:
            continue
        if equipment.get("id") is not None:
            canonical = {"id": equipment["id"], **canonical}
        items.append(canonical)
    return items


# ── Transformers ──────────────────────────────────────────────────────────

def transform_staff_member(row: Row, locale: Optional[str] = None) -> Dict[str, Any]:
    """Staff row with localized name, title, positions, bio and interests."""
    staff = dict(row)
    for field in STAFF_REQUIRED_FIELDS:
        staff[field] = _localize(row.get(field), locale, required=True)
    for field in STAFF_LOCALIZED_FIELDS:
        staff[field] = _localize(row.get(field), locale)
    return staff


def transform_product(row: Row, locale: Optional[str] = None) -> Dict[str, Any]:
    """
    Canonical product.

    images/tags/features/sizes always come out as lists and specifications as
    an object or None, whether the row stored JSON text, NULL or garbage.
    """
    product = dict(row)

    for field in PRODUCT_LIST_FIELDS:
        product[field] = _decode_list(row.get(field))
    for field in PRODUCT_OBJECT_FIELDS:
        product[field] = _decode_object(row.get(field))

    product["name"] = _localize(row.get("name"), locale, required=True)
    for field in PRODUCT_LOCALIZED_FIELDS:
        product[field] = _localize(row.get(field), locale)

    product["price"] = _to_float(row.get("price"))
    product["original_price"] = _to_float(row.get("original_price"))

    center = row.get("service_center")
    if isinstance(center, Mapping):
        product["service_center"] = {
            **center,
            "name": _localize(center.get("name"), locale, required=True),
            "location": _localize(center.get("location"), locale),
        }
    return product


def _transform_live_products(products: Iterable[Row], locale: Optional[str]) -> List[Dict[str, Any]]:
    """Run each related product through transform_product, skipping failures."""
    transformed = []
    for product in products:
        try:
            item = transform_product(product, locale)
        except Exception:
            logger.warning(
                "Skipping service center product that failed to transform (id=%s)",
                product.get("id") if isinstance(product, Mapping) else None,
                exc_info=True,
            )
            continue
        # Cards show the short description when no long one exists
        if not item.get("description"):
            item["description"] = item.get("short_description")
        transformed.append(item)
    return transformed


def _center_products(row: Row, locale: Optional[str]) -> List[Dict[str, Any]]:
    """
    Products for a service center.

    The live `products_list` relation wins whenever it yields at least one
    product; the legacy JSON `products` column is only consulted when the
    relation is absent, empty, or every related product failed to transform.
    """
    products_list = row.get("products_list")
    if isinstance(products_list, list) and products_list:
        transformed = _transform_live_products(products_list, locale)
        if transformed:
            return transformed
        logger.warning(
            "No related product of service center %s could be transformed; "
            "falling back to the legacy products column",
            row.get("id"),
        )
    return normalize_list_items(row.get("products"))


def transform_service_center(row: Row, locale: Optional[str] = None) -> Dict[str, Any]:
    """
    Canonical service center.

    Expects the service layer to attach `equipments` (equipment rows),
    optionally `products_list` (published product rows) and `staff` (staff
    rows). Raw relation keys never reach the output: equipments and staff are
    replaced by their transformed lists and products_list is folded into
    `products`.
    """
    center = {key: value for key, value in row.items() if key not in CENTER_RELATION_KEYS}

    center["name"] = _localize(row.get("name"), locale, required=True)
    for field in CENTER_LOCALIZED_FIELDS:
        center[field] = _localize(row.get(field), locale)

    for field in CENTER_LIST_FIELDS:
        center[field] = _decode_list(row.get(field))
    for field in CENTER_OBJECT_FIELDS:
        center[field] = _decode_object(row.get(field))

    center["equipments"] = _transform_equipments(row.get("equipments"), locale)
    center["products"] = _center_products(row, locale)
    center["staff"] = [
        transform_staff_member(member, locale)
        for member in row.get("staff") or []
        if isinstance(member, Mapping)
    ]
    return center


def transform_service(row: Row, locale: Optional[str] = None) -> Dict[str, Any]:
    """Canonical catalogue service with its equipment and center head."""
    service = {key: value for key, value in row.items() if key not in SERVICE_RELATION_KEYS}

    service["title"] = _localize(row.get("title"), locale, required=True)
    for field in SERVICE_LOCALIZED_FIELDS:
        service[field] = _localize(row.get(field), locale)
    service["features"] = _decode_list(row.get("features"))
    service["equipment"] = _transform_equipments(row.get("equipment"), locale)

    head = row.get("center_head")
    if isinstance(head, Mapping):
        service["center_head"] = {**head, "expertise": _decode_list(head.get("expertise"))}
    else:
        service["center_head"] = None
    return service
