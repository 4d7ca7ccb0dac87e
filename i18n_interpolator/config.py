"""
Preference persistence for i18n-interpolator.

Handles:
- Reading/writing preferences in ~/.i18n-interpolator/config.yaml
- Environment variable overrides
- Resolution of the language, catalog path, depth limit and debug flag

Writes go through a temp file and an atomic rename, guarded by a thread lock.
"""

from __future__ import annotations

import logging
import os
import threading
from collections.abc import Collection
from pathlib import Path
from typing import Any

import yaml

from i18n_interpolator.detector import detect_os_language
from i18n_interpolator.engine.interpolator import DEFAULT_MAX_DEPTH
from i18n_interpolator.engine.translator import DEFAULT_LANGUAGE

logger = logging.getLogger(__name__)

ENV_LANGUAGE = "I18N_INTERPOLATOR_LANGUAGE"
ENV_CATALOG = "I18N_INTERPOLATOR_CATALOG"
ENV_MAX_DEPTH = "I18N_INTERPOLATOR_MAX_DEPTH"
ENV_DEBUG = "I18N_INTERPOLATOR_DEBUG"


class InterpolatorConfig:
    """
    Manages interpolator preferences.

    Language resolution order:
    1. I18N_INTERPOLATOR_LANGUAGE environment variable
    2. Saved preference in ~/.i18n-interpolator/config.yaml
    3. OS-detected language
    4. "default"

    Only languages present in the catalog are accepted at each step.
    """

    def __init__(self) -> None:
        self.config_dir = Path.home() / ".i18n-interpolator"
        self.config_file = self.config_dir / "config.yaml"
        self._thread_lock = threading.Lock()

    def _load_preferences(self) -> dict[str, Any]:
        """
        Load preferences from file.

        Returns:
            Dictionary of preferences, or empty dict if the file is missing,
            empty, malformed or not a mapping
        """
        try:
            with self._thread_lock:
                if not self.config_file.exists():
                    return {}

                with open(self.config_file, encoding="utf-8") as f:
                    data = yaml.safe_load(f)

        except yaml.YAMLError as e:
            logger.warning(f"Malformed YAML in config file: {e}. Using defaults.")
            return {}
        except OSError as e:
            logger.debug(f"Could not read config file: {e}")
            return {}

        if data is None:
            return {}
        if not isinstance(data, dict):
            logger.warning(
                f"Config file contains invalid type: {type(data).__name__}, "
                "expected dict. Using defaults."
            )
            return {}
        return data

    def _save_preferences(self, preferences: dict[str, Any]) -> None:
        """
        Save preferences atomically.

        Raises:
            RuntimeError: If preferences cannot be saved
        """
        try:
            with self._thread_lock:
                self.config_dir.mkdir(mode=0o700, parents=True, exist_ok=True)
                temp_file = self.config_file.with_name(f"{self.config_file.name}.tmp")

                with open(temp_file, "w", encoding="utf-8") as f:
                    yaml.safe_dump(preferences, f, default_flow_style=False, allow_unicode=True)

                temp_file.replace(self.config_file)

        except OSError as e:
            raise RuntimeError(f"Failed to save preferences: {e}") from e

    def _update(self, key: str, value: Any) -> None:
        preferences = self._load_preferences()
        if value is None:
            if key not in preferences:
                return
            del preferences[key]
        else:
            preferences[key] = value
        self._save_preferences(preferences)

    def get_language(self, available: Collection[str]) -> str:
        """
        Get the effective language.

        Args:
            available: Languages present in the catalog

        Returns:
            Language identifier
        """
        return self._resolve_language(available)[0]

    def _resolve_language(self, available: Collection[str]) -> tuple[str, str]:
        env_lang = os.environ.get(ENV_LANGUAGE, "").strip()
        if env_lang in available:
            return env_lang, "environment"

        saved_lang = self._load_preferences().get("language")
        if isinstance(saved_lang, str) and saved_lang in available:
            return saved_lang, "config"

        detected_lang = detect_os_language(available)
        if detected_lang is not None:
            return detected_lang, "auto-detected"

        return DEFAULT_LANGUAGE, "default"

    def set_language(self, language: str) -> None:
        """
        Save the language preference.

        Raises:
            ValueError: If language is empty
        """
        language = language.strip()
        if not language:
            raise ValueError("Language must not be empty")
        self._update("language", language)
        logger.info(f"Saved language preference: {language}")

    def clear_language(self) -> None:
        """Clear the saved language preference (use auto-detection instead)."""
        self._update("language", None)

    def get_catalog_path(self) -> Path | None:
        """Get the catalog path from the environment or the saved preference."""
        env_path = os.environ.get(ENV_CATALOG, "").strip()
        if env_path:
            return Path(env_path).expanduser()

        saved_path = self._load_preferences().get("catalog")
        if isinstance(saved_path, str) and saved_path:
            return Path(saved_path).expanduser()
        return None

    def set_catalog_path(self, path: str | Path) -> None:
        """Save the catalog path preference."""
        self._update("catalog", str(Path(path).expanduser().resolve()))

    def get_max_depth(self) -> int:
        """Get the maximum nesting depth for interpolation."""
        env_depth = os.environ.get(ENV_MAX_DEPTH, "").strip()
        candidates = [env_depth, self._load_preferences().get("max_depth")]

        for candidate in candidates:
            if candidate in (None, ""):
                continue
            try:
                depth = int(candidate)
            except (TypeError, ValueError):
                logger.warning(f"Ignoring invalid max depth: {candidate!r}")
                continue
            if depth > 0:
                return depth
            logger.warning(f"Ignoring non-positive max depth: {depth}")

        return DEFAULT_MAX_DEPTH

    def is_debug(self) -> bool:
        """Check whether debug mode (markers shown as [KEY]) is enabled."""
        return os.environ.get(ENV_DEBUG, "").lower() in ("1", "true", "yes")

    def get_config_info(self, available: Collection[str]) -> dict[str, Any]:
        """
        Get detailed configuration info.

        Returns:
            Dictionary with the effective values and where the language came from
        """
        language, source = self._resolve_language(available)
        catalog_path = self.get_catalog_path()
        saved_lang = self._load_preferences().get("language")

        return {
            "language": language,
            "source": source,
            "saved_preference": saved_lang if isinstance(saved_lang, str) else None,
            "env_override": os.environ.get(ENV_LANGUAGE) or None,
            "detected_language": detect_os_language(available),
            "catalog": str(catalog_path) if catalog_path else None,
            "max_depth": self.get_max_depth(),
            "debug": self.is_debug(),
        }
