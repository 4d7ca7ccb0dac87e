"""Relaxed JSON (JSON5) parsing for marker variables."""

from __future__ import annotations

from typing import Any

import json5


def parse_relaxed(text: str) -> Any:
    """
    Parse a JSON5 value.

    Accepts unquoted and single-quoted keys, trailing commas, comments,
    hexadecimal numbers and the other JSON5 extensions.

    Raises:
        ValueError: If text is not valid JSON5
    """
    return json5.loads(text)
