"""
Template lookup and ${path} placeholder substitution.

Provides:
- Template lookup per language, falling back to the key itself
- Placeholder expansion from resolved variables
- Graceful handling of unresolved and malformed placeholders
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from i18n_interpolator.engine.formatter import format_value
from i18n_interpolator.engine.paths import resolve_path

logger = logging.getLogger(__name__)

DEFAULT_LANGUAGE = "default"

PLACEHOLDER_OPEN = "${"
PLACEHOLDER_CLOSE = "}"

Catalog = Mapping[str, Mapping[str, str]]


def resolve_template(catalog: Catalog, key: str, language: str) -> str:
    """
    Look up the template for a key.

    Args:
        catalog: Mapping of language -> key -> template
        key: Translation key
        language: Language to look the key up in

    Returns:
        The template, or the key itself if there is no usable entry.
        The key is still subject to placeholder substitution.
    """
    messages = catalog.get(language)
    template = messages.get(key) if isinstance(messages, Mapping) else None

    if not isinstance(template, str) or not template:
        logger.debug(f"No translation for {key!r} in language {language!r}, using key")
        return key

    return template


def substitute(template: str, variables: Any) -> str:
    """
    Expand ${path} placeholders in a template.

    Each path is resolved against variables and formatted with
    format_value(). A placeholder whose path cannot be resolved is left in
    the output unchanged; the rest of the template is still expanded.

    Args:
        template: Template text
        variables: Resolved variables, or None

    Returns:
        The expanded text

    Examples:
        >>> substitute("a=${a} b=${b}", {"a": 1})
        'a=1 b=${b}'
    """
    parts: list[str] = []
    pos = 0

    while True:
        start = template.find(PLACEHOLDER_OPEN, pos)
        if start == -1:
            parts.append(template[pos:])
            break

        parts.append(template[pos:start])
        path_start = start + len(PLACEHOLDER_OPEN)

        # Nested braces are not supported, the first "}" ends the path
        end = template.find(PLACEHOLDER_CLOSE, path_start)
        if end == -1:
            parts.append(template[start:])
            break

        path = template[path_start:end]
        result = resolve_path(variables, path)
        if result.found:
            parts.append(format_value(result.value))
        else:
            logger.debug(f"Leaving placeholder ${{{path}}} unresolved: {result.detail}")
            parts.append(template[start : end + 1])

        pos = end + 1

    return "".join(parts)


def translate(catalog: Catalog, key: str, variables: Any, language: str, debug: bool = False) -> str:
    """
    Produce the replacement text for one marker.

    Args:
        catalog: Mapping of language -> key -> template
        key: Translation key
        variables: Resolved variables, or None
        language: Language to translate into
        debug: If True, show the key instead of the translation

    Returns:
        The translated, substituted text
    """
    if debug:
        return f"[{key}]"

    return substitute(resolve_template(catalog, key, language), variables)
