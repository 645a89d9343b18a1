from __future__ import annotations

import re
from functools import lru_cache
from typing import Mapping

from .dictionary import ReferenceDictionary

"""Whole-word abbreviation expansion and dictionary-driven rewrites.

Whole word means: not preceded or followed by a word character or a hyphen.
The hyphen guard keeps "ростов" from re-expanding inside "Ростов-на-Дону";
"смск" never matches "мск". A match lying strictly inside an occurrence of
its own replacement is left alone, so "татарстан" does not re-expand inside
"Республика Татарстан".
"""

__all__ = [
    "whole_word",
    "replace_whole_word",
    "apply_corrections",
    "expand_abbreviations",
]


@lru_cache(maxsize=1024)
def whole_word(term: str) -> re.Pattern[str]:
    """Case-insensitive whole-word pattern for a literal term."""
    return re.compile(rf"(?<![\w-]){re.escape(term)}(?![\w-])", re.IGNORECASE)


@lru_cache(maxsize=1024)
def _literal(value: str) -> re.Pattern[str]:
    return re.compile(re.escape(value), re.IGNORECASE)


def replace_whole_word(text: str, term: str, replacement: str) -> str:
    """Replace whole-word occurrences of term, skipping those nested in replacement."""
    protected = [m.span() for m in _literal(replacement).finditer(text)] if replacement else []

    def _sub(m: re.Match[str]) -> str:
        start, end = m.span()
        for p_start, p_end in protected:
            if p_start <= start and end <= p_end and (p_start, p_end) != (start, end):
                return m.group(0)
        return replacement

    return whole_word(term).sub(_sub, text)


def apply_corrections(text: str, mapping: Mapping[str, str]) -> str:
    """Apply every (wrong, right) pair of mapping in iteration order."""
    for wrong, right in mapping.items():
        text = replace_whole_word(text, wrong, right)
    return text


def expand_abbreviations(text: str, dictionary: ReferenceDictionary) -> str:
    """Expand city abbreviations, then region abbreviations.

    Pairs are applied sequentially, so a canonical value produced by an
    earlier key is still visible to later keys.
    """
    for mapping in dictionary.expansion_maps():
        text = apply_corrections(text, mapping)
    return text
