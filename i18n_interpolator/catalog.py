"""
Translation catalog and document loading.

Catalogs can be given as:
- A directory with one file per language (en.yaml, fr.json, de.json5, ...)
- A single YAML/JSON/JSON5 file mapping language -> messages

Nested message mappings are flattened to dot-separated keys, so
{"install": {"success": "Done"}} provides the key "install.success".
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import json5
import yaml

from i18n_interpolator.engine.errors import CatalogError
from i18n_interpolator.engine.translator import DEFAULT_LANGUAGE

logger = logging.getLogger(__name__)

YAML_SUFFIXES = (".yaml", ".yml")
JSON_SUFFIXES = (".json",)
JSON5_SUFFIXES = (".json5",)
CATALOG_SUFFIXES = YAML_SUFFIXES + JSON_SUFFIXES + JSON5_SUFFIXES


def _parse_file(path: Path) -> Any:
    """
    Read and parse a YAML, JSON or JSON5 file based on its suffix.

    Raises:
        CatalogError: If the file cannot be read or parsed
    """
    suffix = path.suffix.lower()
    try:
        with open(path, encoding="utf-8") as f:
            if suffix in JSON_SUFFIXES:
                return json.load(f)
            if suffix in JSON5_SUFFIXES:
                return json5.load(f)
            return yaml.safe_load(f)
    except OSError as e:
        raise CatalogError(f"Cannot read {path}: {e}") from e
    except (yaml.YAMLError, ValueError) as e:
        raise CatalogError(f"Invalid syntax in {path}: {e}") from e


def flatten_messages(data: Mapping[str, Any], prefix: str = "") -> dict[str, str]:
    """
    Flatten nested message mappings into dot-separated keys.

    Args:
        data: Possibly nested mapping of messages
        prefix: Current key prefix

    Returns:
        Flat mapping of key -> template
    """
    messages: dict[str, str] = {}
    for key, value in data.items():
        full_key = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, Mapping):
            messages.update(flatten_messages(value, full_key))
        elif value is not None:
            messages[full_key] = value if isinstance(value, str) else str(value)
    return messages


def _load_directory(directory: Path) -> dict[str, dict[str, str]]:
    catalog: dict[str, dict[str, str]] = {}
    for path in sorted(directory.iterdir()):
        if not path.is_file() or path.suffix.lower() not in CATALOG_SUFFIXES:
            continue

        data = _parse_file(path)
        if data is None:
            data = {}
        if not isinstance(data, Mapping):
            raise CatalogError(
                f"{path} contains {type(data).__name__}, expected a mapping of messages"
            )

        language = path.stem
        if language in catalog:
            logger.warning(f"Duplicate catalog for language {language!r}, merging {path.name}")
        catalog.setdefault(language, {}).update(flatten_messages(data))
        logger.debug(f"Loaded {len(catalog[language])} messages for {language!r} from {path}")
    return catalog


def _load_single_file(path: Path) -> dict[str, dict[str, str]]:
    data = _parse_file(path)
    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise CatalogError(f"{path} contains {type(data).__name__}, expected a mapping of languages")

    catalog: dict[str, dict[str, str]] = {}
    for language, messages in data.items():
        if not isinstance(messages, Mapping):
            raise CatalogError(f"Messages for language {language!r} in {path} must be a mapping")
        catalog[str(language)] = flatten_messages(messages)
    return catalog


def load_catalog(path: str | Path) -> dict[str, dict[str, str]]:
    """
    Load a translation catalog.

    Args:
        path: Catalog directory or single catalog file

    Returns:
        Mapping of language -> key -> template

    Raises:
        CatalogError: If the path is missing or a file is malformed
    """
    path = Path(path).expanduser()

    if path.is_dir():
        catalog = _load_directory(path)
    elif path.is_file():
        catalog = _load_single_file(path)
    else:
        raise CatalogError(f"Catalog not found at {path}")

    if not catalog:
        logger.warning(f"Catalog at {path} has no languages")
    return catalog


def load_document(path: str | Path) -> Any:
    """
    Load a document to interpolate from a YAML, JSON or JSON5 file.

    Raises:
        CatalogError: If the file cannot be read or parsed
    """
    path = Path(path).expanduser()
    if not path.is_file():
        raise CatalogError(f"Document not found at {path}")
    return _parse_file(path)


def get_all_keys(catalog: Mapping[str, Mapping[str, str]], language: str) -> set[str]:
    """
    Get all translation keys for a language.

    Returns:
        Set of keys, empty if the language is not in the catalog
    """
    return set(catalog.get(language, {}).keys())


def get_missing_translations(
    catalog: Mapping[str, Mapping[str, str]],
    language: str,
    reference: str = DEFAULT_LANGUAGE,
) -> set[str]:
    """
    Find keys that exist in the reference language but not in the target.

    Args:
        catalog: Mapping of language -> key -> template
        language: Target language to check
        reference: Language treated as complete

    Returns:
        Set of missing translation keys
    """
    return get_all_keys(catalog, reference) - get_all_keys(catalog, language)
