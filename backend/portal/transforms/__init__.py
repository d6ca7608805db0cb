"""
Institute Portal Backend: Normalization Layer
==============================================

What:  Pure functions between database rows and API responses.
Who:   Called by services; never touches the database or the request.

Module Inventory:
    - coercion.py:      parse_boolean, parse_number, parse_json_value,
                        serialize_json_value
    - localization.py:  extract_localized_value
    - listing.py:       normalize_list_item, normalize_list_items
    - entities.py:      transform_product, transform_service_center,
                        transform_service, transform_staff_member
    - slug.py:          slugify
    - affiliations.py:  build_affiliation_index
"""

from portal.transforms.affiliations import build_affiliation_index
from portal.transforms.coercion import (
    parse_boolean,
    parse_json_value,
    parse_number,
    serialize_json_value,
)
from portal.transforms.entities import (
    transform_product,
    transform_service,
    transform_service_center,
    transform_staff_member,
)
from portal.transforms.listing import normalize_list_item, normalize_list_items
from portal.transforms.localization import extract_localized_value
from portal.transforms.slug import slugify

__all__ = [
    "build_affiliation_index",
    "extract_localized_value",
    "normalize_list_item",
    "normalize_list_items",
    "parse_boolean",
    "parse_json_value",
    "parse_number",
    "serialize_json_value",
    "slugify",
    "transform_product",
    "transform_service",
    "transform_service_center",
    "transform_staff_member",
]
