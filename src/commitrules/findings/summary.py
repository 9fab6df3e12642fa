"""Shorten offending values for finding messages."""

from __future__ import annotations

MAX_VALUE_LENGTH = 40


def summarize(value: str, limit: int = MAX_VALUE_LENGTH) -> str:
    """Quote *value*, cutting long or multi-line values down to a preview.

    Example: a 90-character subject becomes ``"first 30 chars..." (90 chars)``.
    """
    first_line, _, rest = value.partition("\n")
    if len(value) <= limit and not rest:
        return f'"{value}"'
    keep = max(limit - 10, 1)
    return f'"{first_line[:keep]}..." ({len(value)} chars)'
