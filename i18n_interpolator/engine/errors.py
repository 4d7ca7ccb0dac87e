"""
Exceptions raised by the interpolation engine.

Only malformed input is fatal:
- MarkerSyntaxError: a marker whose call never terminates
- VariablesSyntaxError: a variables argument the relaxed parser rejects
- RecursionLimitError: nesting deeper than the configured limit

Lookup misses (unknown keys, unresolved placeholders) never raise.
All errors derive from ValueError so the CLI reports them like any other
invalid input.
"""

from __future__ import annotations


class InterpolationError(ValueError):
    """Base class for fatal interpolation errors."""


class MarkerSyntaxError(InterpolationError):
    """A marker could not be split into a key and a variables fragment."""

    def __init__(self, message: str, key: str | None = None, position: int | None = None):
        self.key = key
        self.position = position
        details = []
        if key is not None:
            details.append(f"key={key!r}")
        if position is not None:
            details.append(f"offset={position}")
        if details:
            message = f"{message} ({', '.join(details)})"
        super().__init__(message)


class VariablesSyntaxError(InterpolationError):
    """The variables argument of a marker is not valid JSON5."""

    def __init__(self, key: str, fragment: str, reason: str):
        self.key = key
        self.fragment = fragment
        self.reason = reason
        super().__init__(f"Invalid variables for i18n key {key!r}: {reason} in {fragment.strip()!r}")


class RecursionLimitError(InterpolationError):
    """Document or marker nesting exceeded the allowed depth."""

    def __init__(self, depth: int):
        self.depth = depth
        super().__init__(f"Interpolation nested deeper than {depth} levels")


class CatalogError(ValueError):
    """A translation catalog could not be loaded."""
