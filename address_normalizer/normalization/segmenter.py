from __future__ import annotations

import re

"""Address segmentation.

segment() splits on commas/semicolons for classification; tokenize() also
splits on whitespace and drops short noise tokens for fuzzy lookup.
"""

__all__ = [
    "segment",
    "tokenize",
]

_FRAGMENT_SPLIT = re.compile(r"[,;]")
_TOKEN_SPLIT = re.compile(r"[,;\s]+")


def segment(text: str) -> list[str]:
    """Split an address into ordered, trimmed, non-empty fragments."""
    if not text:
        return []
    return [part.strip() for part in _FRAGMENT_SPLIT.split(text) if part.strip()]


def tokenize(text: str, min_length: int = 3) -> list[str]:
    """Split an address into tokens of at least min_length characters."""
    if not text:
        return []
    return [token for token in _TOKEN_SPLIT.split(text) if len(token) >= min_length]
