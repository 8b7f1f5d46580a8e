"""Normalizer -- raw text to lowercase word tokens."""
from __future__ import annotations

import re

# letters (any script) and digits; a hyphen survives only between two word characters
_TOKEN_RE = re.compile(r"[^\W_]+(?:-[^\W_]+)*")


def normalize(text: str | None) -> list[str]:
    """Lowercase *text*, drop punctuation (keeping internal hyphens) and split into tokens.

    Empty or whitespace-only input yields an empty list.
    """
    if not text:
        return []
    return _TOKEN_RE.findall(text.lower())
