"""
i18n-interpolator: resolve ${i18n(...)} markers in JSON-like documents.

Usage:
    from i18n_interpolator import Interpolator, load_catalog

    interpolator = Interpolator(load_catalog("locales/"), "fr")
    page = interpolator.interpolate(document)
"""

from i18n_interpolator.catalog import load_catalog, load_document
from i18n_interpolator.engine import (
    DEFAULT_LANGUAGE,
    CatalogError,
    InterpolationError,
    Interpolator,
    MarkerSyntaxError,
    RecursionLimitError,
    VariablesSyntaxError,
)

__version__ = "0.1.0"

__all__ = [
    "Interpolator",
    "DEFAULT_LANGUAGE",
    "load_catalog",
    "load_document",
    "InterpolationError",
    "MarkerSyntaxError",
    "VariablesSyntaxError",
    "RecursionLimitError",
    "CatalogError",
    "__version__",
]
