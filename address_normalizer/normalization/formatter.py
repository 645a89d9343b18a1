from __future__ import annotations

import re

"""Case and format normalization.

normalize_format() is a pure, deterministic fixed point:
normalize_format(normalize_format(x)) == normalize_format(x).
"""

__all__ = [
    "normalize_format",
    "normalize_case",
    "collapse_whitespace",
    "STANDARD_ABBREVIATIONS",
    "LOWERCASE_MARKERS",
]

# Abbreviations that always carry exactly one trailing space
STANDARD_ABBREVIATIONS = ("д", "ул", "пр", "пл", "наб")

_WHITESPACE = re.compile(r"\s+")
_TOKEN_INITIAL = re.compile(r"(?<!\w)([^\W\d_])")
_NUMERIC_RANGE = re.compile(r"(?<=\d)\s*-\s*(?=\d)")
_ABBREVIATION_SPACING = re.compile(
    r"(?<!\w)(" + "|".join(STANDARD_ABBREVIATIONS) + r")\.\s*",
    re.IGNORECASE,
)
# Short forms written by the spelling corrections; kept lowercase, spacing untouched
LOWERCASE_MARKERS = ("пер", "ш", "бул", "корп", "стр", "кв", "оф")
_MARKER_CASE = re.compile(
    r"(?<![\w-])(" + "|".join(LOWERCASE_MARKERS) + r")\.",
    re.IGNORECASE,
)


def collapse_whitespace(text: str) -> str:
    return _WHITESPACE.sub(" ", text).strip()


def normalize_case(text: str) -> str:
    """Lowercase everything, then capitalize the first letter of each token."""
    return _TOKEN_INITIAL.sub(lambda m: m.group(1).upper(), text.lower())


def normalize_format(text: str) -> str:
    """Normalize case, spacing, numeric ranges and abbreviation spacing.

    Steps:
    1. lowercase + token-initial capitals (Cyrillic and Latin)
    2. collapse whitespace runs
    3. "N - M" -> "N-M"
    4. "д.", "ул.", "пр.", "пл.", "наб." rewritten lowercase with one trailing space
    5. "пер.", "ш.", "корп.", "кв." and the other LOWERCASE_MARKERS kept lowercase
    6. collapse whitespace again and trim
    """
    if not text:
        return ""
    result = normalize_case(text)
    result = _WHITESPACE.sub(" ", result)
    result = _NUMERIC_RANGE.sub("-", result)
    result = _ABBREVIATION_SPACING.sub(lambda m: f"{m.group(1).lower()}. ", result)
    result = _MARKER_CASE.sub(lambda m: f"{m.group(1).lower()}.", result)
    return collapse_whitespace(result)
