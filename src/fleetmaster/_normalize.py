"""Normalization helpers.

Centralizes lenient parsing of values that arrive as form text.
"""

from __future__ import annotations

import math
from typing import Any


def safe_float(value: Any) -> float | None:
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        return None
    try:
        result = float(str(value).strip()) if isinstance(value, str) else float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(result):
        return None
    return result


def safe_int(value: Any) -> int | None:
    parsed = safe_float(value)
    if parsed is None:
        return None
    return int(parsed)


def is_blank(value: Any) -> bool:
    """Return ``True`` for ``None`` and whitespace-only strings."""
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()
