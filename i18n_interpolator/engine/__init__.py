"""
Marker interpolation engine.

Resolves ${i18n("KEY", variables)} markers embedded in JSON-like documents:
- Marker scanning with quote and parenthesis tracking
- Recursive resolution of markers nested in variables
- Template lookup with fallback to the key
- ${path} placeholder substitution with dotted/indexed paths

Usage:
    from i18n_interpolator.engine import Interpolator

    catalog = {"default": {"GREETING": "Hello, ${name}!"}}
    interpolator = Interpolator(catalog)

    interpolator.interpolate('${i18n("GREETING", {name: "Ada"})}')
    # -> "Hello, Ada!"
"""

from i18n_interpolator.engine.errors import (
    CatalogError,
    InterpolationError,
    MarkerSyntaxError,
    RecursionLimitError,
    VariablesSyntaxError,
)
from i18n_interpolator.engine.formatter import format_value
from i18n_interpolator.engine.interpolator import DEFAULT_MAX_DEPTH, Document, Interpolator
from i18n_interpolator.engine.paths import PathFailure, PathResult, resolve_path
from i18n_interpolator.engine.relaxed import parse_relaxed
from i18n_interpolator.engine.scanner import MarkerCall, find_marker, iter_markers
from i18n_interpolator.engine.translator import (
    DEFAULT_LANGUAGE,
    resolve_template,
    substitute,
    translate,
)

__all__ = [
    # Driver
    "Interpolator",
    "Document",
    "DEFAULT_LANGUAGE",
    "DEFAULT_MAX_DEPTH",
    # Building blocks
    "MarkerCall",
    "find_marker",
    "iter_markers",
    "parse_relaxed",
    "resolve_template",
    "substitute",
    "translate",
    "PathFailure",
    "PathResult",
    "resolve_path",
    "format_value",
    # Errors
    "InterpolationError",
    "MarkerSyntaxError",
    "VariablesSyntaxError",
    "RecursionLimitError",
    "CatalogError",
]
