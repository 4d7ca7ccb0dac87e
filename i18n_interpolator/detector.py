"""
OS language auto-detection.

Detects the preferred language from environment variables:
- LANGUAGE
- LC_ALL
- LC_MESSAGES
- LANG

and matches it against the languages a catalog actually provides.
"""

from __future__ import annotations

import os
import re
from collections.abc import Collection

# Environment variables to check, in priority order
LOCALE_ENV_VARS = ["LANGUAGE", "LC_ALL", "LC_MESSAGES", "LANG"]


def _normalize(code: str) -> str:
    return code.lower().strip().replace("-", "_")


def _locale_candidates(locale_string: str) -> list[str]:
    """
    Turn a locale string into normalized candidate codes, most specific first.

    Handles formats like:
    - en_US.UTF-8
    - de-DE
    - fr.UTF-8
    - sr_RS@latin

    Returns:
        e.g. ["en_us", "en"] for "en_US.UTF-8"; empty for C/POSIX
    """
    if not locale_string:
        return []

    locale_lower = _normalize(locale_string)

    if not locale_lower or locale_lower in ("c", "posix"):
        return []

    # Remove encoding suffix (e.g., .UTF-8) and @modifier
    locale_lower = re.sub(r"\.[a-z0-9_-]+(@[a-z]+)?$", "", locale_lower)
    locale_lower = re.sub(r"@[a-z]+$", "", locale_lower)

    candidates = [locale_lower]
    if "_" in locale_lower:
        candidates.append(locale_lower.split("_")[0])
    return candidates


def _match(candidate: str, available: Collection[str]) -> str | None:
    for language in available:
        if _normalize(language) == candidate:
            return language
    return None


def detect_os_language(available: Collection[str]) -> str | None:
    """
    Detect the OS language among the available catalog languages.

    The first variable that maps onto an available language wins. LANGUAGE
    may hold several colon-separated values.

    Args:
        available: Language identifiers present in the catalog

    Returns:
        The matching language as spelled in available, or None

    Examples:
        With LANG=es_ES.UTF-8 and available {"default", "es"}: returns "es"
        With LC_ALL=pt-BR and available {"pt_BR"}: returns "pt_BR"
    """
    for var in LOCALE_ENV_VARS:
        value = os.environ.get(var, "")
        if not value:
            continue

        values = value.split(":") if var == "LANGUAGE" else [value]
        for locale_string in values:
            for candidate in _locale_candidates(locale_string):
                language = _match(candidate, available)
                if language is not None:
                    return language

    return None


def get_os_locale_info(available: Collection[str] = ()) -> dict[str, str | None]:
    """
    Get OS locale information for debugging.

    Returns:
        Dictionary with the locale environment variables and the detected language
    """
    info: dict[str, str | None] = {}
    for var in LOCALE_ENV_VARS + ["LC_CTYPE"]:
        info[var] = os.environ.get(var)

    info["detected_language"] = detect_os_language(available)

    return info
