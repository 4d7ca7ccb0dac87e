"""
Recursive interpolation of i18n markers in JSON-like documents.

Walks strings, lists and mappings and replaces every
${i18n("KEY", variables)} marker with the translated template for KEY.
Markers inside a variables argument are resolved first, so their output
can be substituted into the outer template.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any, Union

from i18n_interpolator.engine.errors import RecursionLimitError, VariablesSyntaxError
from i18n_interpolator.engine.relaxed import parse_relaxed
from i18n_interpolator.engine.scanner import MarkerCall, find_marker
from i18n_interpolator.engine.translator import DEFAULT_LANGUAGE, Catalog, translate

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 100

Document = Union[str, int, float, bool, None, list["Document"], dict[str, "Document"]]


class Interpolator:
    """
    Resolves i18n markers against a translation catalog.

    The language used by interpolate() is captured once per call and passed
    down explicitly, so a call is never affected by a concurrent
    set_language(). Use with_language() or the language argument to avoid
    sharing a mutable default altogether.
    """

    def __init__(
        self,
        catalog: Catalog,
        language: str = DEFAULT_LANGUAGE,
        *,
        parser: Callable[[str], Any] = parse_relaxed,
        max_depth: int = DEFAULT_MAX_DEPTH,
        debug: bool = False,
    ):
        """
        Initialize the interpolator.

        Args:
            catalog: Mapping of language -> key -> template
            language: Default language; unknown languages become "default"
            parser: Parser for variables arguments, raising ValueError on bad input
            max_depth: Maximum document and marker nesting depth
            debug: If True, markers render as [KEY]
        """
        self._catalog = catalog
        self._parser = parser
        self._max_depth = max_depth
        self._debug = debug
        self._language = self._select_language(language)

    @property
    def language(self) -> str:
        """Get the default language."""
        return self._language

    @property
    def catalog(self) -> Catalog:
        return self._catalog

    @property
    def debug(self) -> bool:
        return self._debug

    def _select_language(self, language: str | None) -> str:
        if language is not None and language in self._catalog:
            return language
        if language is not None and language != DEFAULT_LANGUAGE:
            logger.debug(f"Unknown language {language!r}, falling back to {DEFAULT_LANGUAGE!r}")
        return DEFAULT_LANGUAGE

    def set_language(self, language: str) -> Interpolator:
        """
        Set the default language.

        Args:
            language: Language to switch to; unknown languages select "default"

        Returns:
            self, for chaining
        """
        self._language = self._select_language(language)
        return self

    def with_language(self, language: str) -> Interpolator:
        """Return a new interpolator over the same catalog fixed to language."""
        return Interpolator(
            self._catalog,
            language,
            parser=self._parser,
            max_depth=self._max_depth,
            debug=self._debug,
        )

    def interpolate(self, document: Document, language: str | None = None) -> Document:
        """
        Resolve every marker in a document.

        Args:
            document: String, number, boolean, None, list or mapping
            language: Language for this call; defaults to the current language

        Returns:
            A new document with markers replaced. Non-string scalars are
            returned unchanged.

        Raises:
            MarkerSyntaxError: If a marker is not terminated
            VariablesSyntaxError: If a variables argument is not valid JSON5
            RecursionLimitError: If nesting exceeds max_depth
        """
        lang = self._language if language is None else self._select_language(language)
        return self._interpolate(document, lang, 0)

    def interpolate_string(self, text: str, language: str | None = None) -> str:
        """Resolve every marker in a single string."""
        lang = self._language if language is None else self._select_language(language)
        return self._interpolate_string(text, lang, 0)

    def translate(self, key: str, variables: Any = None, language: str | None = None) -> str:
        """
        Translate one key with already resolved variables.

        Args:
            key: Translation key
            variables: Values for ${path} placeholders
            language: Language for this call; defaults to the current language

        Returns:
            Translated text
        """
        lang = self._language if language is None else self._select_language(language)
        return translate(self._catalog, key, variables, lang, debug=self._debug)

    def _interpolate(self, node: Any, language: str, depth: int) -> Any:
        if depth > self._max_depth:
            raise RecursionLimitError(self._max_depth)

        if isinstance(node, str):
            return self._interpolate_string(node, language, depth)
        if isinstance(node, list):
            return [self._interpolate(item, language, depth + 1) for item in node]
        if isinstance(node, tuple):
            return tuple(self._interpolate(item, language, depth + 1) for item in node)
        if isinstance(node, Mapping):
            return {key: self._interpolate(value, language, depth + 1) for key, value in node.items()}
        return node

    def _interpolate_string(self, text: str, language: str, depth: int) -> str:
        parts: list[str] = []
        pos = 0

        while True:
            call = find_marker(text, pos)
            if call is None:
                parts.append(text[pos:])
                break

            parts.append(text[pos : call.start])
            variables = self._resolve_variables(call, language, depth)
            parts.append(translate(self._catalog, call.key, variables, language, debug=self._debug))
            pos = call.end

        return "".join(parts)

    def _resolve_variables(self, call: MarkerCall, language: str, depth: int) -> Any:
        if not call.has_variables:
            return None

        try:
            parsed = self._parser(call.raw_variables)
        except ValueError as e:
            raise VariablesSyntaxError(call.key, call.raw_variables, str(e)) from e

        return self._interpolate(parsed, language, depth + 1)
