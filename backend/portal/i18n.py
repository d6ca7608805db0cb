"""
Institute Portal Backend: Request Locale & Messages
====================================================

What:  Resolves the locale of a request and translates response messages.
How:   `resolve_locale` looks at the `lang` query parameter first, then the
       Accept-Language header (highest q-value among supported locales),
       then falls back to the configured default.

Public routes always localize (`get_request_locale`). Admin routes only
localize when the caller explicitly passes `?lang=` (`get_admin_locale`);
otherwise the editor receives raw {"en": ..., "ar": ...} mappings.
"""

import logging
from contextvars import ContextVar
from typing import Dict, List, Optional, Tuple

from fastapi import Request

from portal.config import settings

logger = logging.getLogger(__name__)

# Locale of the request being handled; set by RequestContextMiddleware
locale_var: ContextVar[str] = ContextVar("locale", default="")


# ── Message catalog ───────────────────────────────────────────────────────
MESSAGES: Dict[str, Dict[str, str]] = {
    "en": {
        "common.server_error": "An internal error occurred. Please try again later.",
        "products.not_found": "Product not found",
        "products.created": "Product created successfully",
        "products.updated": "Product updated successfully",
        "products.deleted": "Product deleted successfully",
        "products.name_required": "Product name is required",
        "products.name_already_exists": "A product with this name already exists",
        "service_center.not_found": "Service center not found",
        "service_center.name_required": "Service center name is required",
        "service_center.invalid_slug": "Unable to generate a valid slug for the service center",
        "service_center.slug_exists": "A service center with this slug already exists",
        "service_center.created": "Service center created successfully",
        "service_center.updated": "Service center updated successfully",
        "service_center.deleted": "Service center deleted successfully",
        "services.not_found": "Service not found",
        "departments.not_found": "Department not found",
        "laboratories.not_found": "Laboratory not found",
    },
    "ar": {
        "common.server_error": "حدث خطأ داخلي. يرجى المحاولة لاحقاً.",
        "products.not_found": "المنتج غير موجود",
        "products.created": "تم إنشاء المنتج بنجاح",
        "products.updated": "تم تحديث المنتج بنجاح",
        "products.deleted": "تم حذف المنتج بنجاح",
        "products.name_required": "اسم المنتج مطلوب",
        "products.name_already_exists": "يوجد منتج بهذا الاسم بالفعل",
        "service_center.not_found": "مركز الخدمة غير موجود",
        "service_center.name_required": "اسم مركز الخدمة مطلوب",
        "service_center.invalid_slug": "تعذر إنشاء معرف صالح لمركز الخدمة",
        "service_center.slug_exists": "يوجد مركز خدمة بهذا المعرف بالفعل",
        "service_center.created": "تم إنشاء مركز الخدمة بنجاح",
        "service_center.updated": "تم تحديث مركز الخدمة بنجاح",
        "service_center.deleted": "تم حذف مركز الخدمة بنجاح",
        "services.not_found": "الخدمة غير موجودة",
        "departments.not_found": "القسم غير موجود",
        "laboratories.not_found": "المعمل غير موجود",
    },
}


def translate(key: str, locale: Optional[str] = None) -> str:
    """
    Message for `key` in `locale`.

    Falls back to the default locale's catalog, then to the key itself so a
    missing translation shows up in the response instead of failing it.
    """
    locale = locale or locale_var.get() or settings.default_locale
    catalog = MESSAGES.get(locale, {})
    if key in catalog:
        return catalog[key]
    default_catalog = MESSAGES.get(settings.default_locale, {})
    if key not in default_catalog:
        logger.warning("Missing translation for message key '%s'", key)
    return default_catalog.get(key, key)


# ── Locale resolution ─────────────────────────────────────────────────────

def _supported(code: Optional[str]) -> Optional[str]:
    if not code:
        return None
    code = code.strip().lower()
    return code if code in settings.supported_locales_list else None


def parse_accept_language(header: str) -> List[Tuple[str, float]]:
    """
    Parse an Accept-Language header into (primary language, quality) pairs,
    highest quality first. "en-US,en;q=0.9,ar;q=0.8" →
    [("en", 1.0), ("en", 0.9), ("ar", 0.8)]. Malformed q-values count as 0.
    """
    languages = []
    for part in header.split(","):
        pieces = part.strip().split(";")
        code = pieces[0].strip()
        if not code:
            continue
        quality = 1.0
        for param in pieces[1:]:
            param = param.strip()
            if param.startswith("q="):
                try:
                    quality = float(param[2:])
                except ValueError:
                    quality = 0.0
        languages.append((code.split("-")[0].lower(), quality))
    # sorted() is stable, so equal qualities keep header order
    return sorted(languages, key=lambda item: item[1], reverse=True)


def resolve_locale(lang: Optional[str], accept_language: Optional[str]) -> str:
    """Locale from an explicit `lang` value, then Accept-Language, then default."""
    explicit = _supported(lang)
    if explicit:
        return explicit
    if accept_language:
        for code, quality in parse_accept_language(accept_language):
            if quality > 0 and _supported(code):
                return code
    return settings.default_locale


# ── FastAPI dependencies ──────────────────────────────────────────────────

def get_request_locale(request: Request) -> str:
    """Locale for public routes. Always a supported locale."""
    return resolve_locale(
        request.query_params.get("lang"),
        request.headers.get("accept-language"),
    )


def get_admin_locale(request: Request) -> Optional[str]:
    """
    Locale for admin routes: only an explicit, supported `?lang=`.

    None means "return localized fields untouched".
    """
    return _supported(request.query_params.get("lang"))
