"""
Path lookup into resolved variables.

A path is a dot-separated list of segments, each optionally followed by a
single bracket index: "user.name", "items[0]", "a.b[2].c".

Lookups never raise. resolve_path() returns a PathResult that is either
found (with the value) or carries a PathFailure describing the miss.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

# Optional minus sign followed by ASCII digits
_INDEX_PATTERN = re.compile(r"-?[0-9]+")


class PathFailure(Enum):
    """Reasons a path cannot be resolved."""

    INDEX_NOT_INTEGER = "index_not_integer"
    NOT_A_SEQUENCE = "not_a_sequence"
    INDEX_OUT_OF_RANGE = "index_out_of_range"
    NOT_A_MAPPING = "not_a_mapping"
    KEY_NOT_FOUND = "key_not_found"


@dataclass(frozen=True)
class PathResult:
    """Outcome of a path lookup."""

    value: Any = None
    failure: PathFailure | None = None
    detail: str = ""

    @property
    def found(self) -> bool:
        return self.failure is None

    @classmethod
    def success(cls, value: Any) -> PathResult:
        return cls(value=value)

    @classmethod
    def miss(cls, failure: PathFailure, detail: str) -> PathResult:
        return cls(failure=failure, detail=detail)


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _split_indexed(segment: str) -> tuple[str, str] | None:
    """Split "name[3]" into ("name", "3"); None for a plain segment."""
    if "[" not in segment or "]" not in segment:
        return None
    name, _, rest = segment.partition("[")
    index_text = rest[:-1] if rest.endswith("]") else rest
    return name, index_text


def resolve_path(data: Any, path: str) -> PathResult:
    """
    Resolve a dotted/indexed path against a value tree.

    Args:
        data: Resolved variables (mapping, sequence or scalar)
        path: Path such as "a.b[2].c"

    Returns:
        PathResult with the value, or the first failure encountered

    Examples:
        >>> resolve_path({"a": {"b": [1, 2, 3]}}, "a.b[2]").value
        3
    """
    current = data

    for segment in path.split("."):
        indexed = _split_indexed(segment)

        if indexed is not None:
            name, index_text = indexed
            if not _INDEX_PATTERN.fullmatch(index_text):
                return PathResult.miss(
                    PathFailure.INDEX_NOT_INTEGER, f"invalid array index: {index_text}"
                )
            index = int(index_text)

            sequence = current.get(name) if isinstance(current, Mapping) else None
            if not _is_sequence(sequence):
                return PathResult.miss(PathFailure.NOT_A_SEQUENCE, f"value is not an array: {name}")

            if index < 0 or index >= len(sequence):
                return PathResult.miss(
                    PathFailure.INDEX_OUT_OF_RANGE, f"array index out of range: {index}"
                )

            current = sequence[index]
        else:
            if not isinstance(current, Mapping):
                return PathResult.miss(PathFailure.NOT_A_MAPPING, "value is not an object")

            if segment not in current:
                return PathResult.miss(PathFailure.KEY_NOT_FOUND, f"key not found: {segment}")

            current = current[segment]

    return PathResult.success(current)
