from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable

from rapidfuzz import fuzz, process, utils

from .abbreviations import replace_whole_word
from .segmenter import tokenize

"""Fuzzy spelling correction against the reference dictionary.

FuzzyIndex is built once over the canonical entries and is read-only
afterwards. Similarity is rapidfuzz's normalized Indel ratio (0-100) over
lowercased, punctuation-stripped keys; distance is 1 - score/100.
"""

__all__ = [
    "FuzzyIndex",
    "FuzzyMatch",
    "Correction",
    "CorrectionResult",
    "correct_spelling",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FuzzyMatch:
    entry: str  # canonical dictionary entry
    score: float  # similarity 0..100

    @property
    def distance(self) -> float:
        return 1.0 - self.score / 100.0

    @property
    def confidence(self) -> int:
        """Monotonic 0..100 transform of the score."""
        return round(self.score)


@dataclass(frozen=True)
class Correction:
    token: str
    replacement: str
    confidence: int


@dataclass(frozen=True)
class CorrectionResult:
    text: str
    confidence: int = 100  # worst applied correction wins
    corrections: tuple[Correction, ...] = field(default_factory=tuple)


class FuzzyIndex:
    """Approximate lookup over canonical entries.

    Keys are pre-processed once; queries are processed the same way, so the
    per-token cost is a single extractOne scan.
    """

    def __init__(self, entries: Iterable[str]) -> None:
        self._entries: tuple[str, ...] = tuple(dict.fromkeys(e for e in entries if e and e.strip()))
        self._keys: list[str] = [utils.default_process(e) for e in self._entries]

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def entries(self) -> tuple[str, ...]:
        return self._entries

    def best_match(self, token: str, max_distance: float = 1.0) -> FuzzyMatch | None:
        """Best matching entry with distance <= max_distance, or None."""
        query = utils.default_process(token)
        if not query or not self._keys:
            return None
        found = process.extractOne(
            query,
            self._keys,
            scorer=fuzz.ratio,
            processor=None,
            score_cutoff=(1.0 - max_distance) * 100.0,
        )
        if found is None:
            return None
        _key, score, idx = found
        return FuzzyMatch(entry=self._entries[idx], score=float(score))


def _with_initial_case(entry: str, token: str) -> str:
    """Capitalize entry when the token it replaces starts with a capital."""
    if token[:1].isupper():
        return entry[:1].upper() + entry[1:]
    return entry


def correct_spelling(
    text: str,
    index: FuzzyIndex,
    *,
    min_token_length: int = 3,
    max_distance: float = 0.2,
    confidence_floor: int = 85,
) -> CorrectionResult:
    """Rewrite tokens that are a confident near-match to a canonical entry.

    A correction applies only when:
    (a) a match exists, (b) its distance is below max_distance,
    (c) its confidence is strictly above confidence_floor and
    (d) the canonical entry is not already present in the text (case-insensitive).
    A capitalized token gets a capitalized replacement.
    Tokens without a qualifying match are left untouched.
    """
    corrected = text
    confidence = 100
    applied: list[Correction] = []
    for token in tokenize(text, min_token_length):
        match = index.best_match(token, max_distance)
        if match is None or match.distance >= max_distance:
            continue
        if match.confidence <= confidence_floor:
            continue
        if match.entry.lower() in corrected.lower():
            continue
        replacement = _with_initial_case(match.entry, token)
        rewritten = replace_whole_word(corrected, token, replacement)
        if rewritten == corrected:
            continue
        logger.debug("spelling: %r -> %r (confidence=%d)", token, replacement, match.confidence)
        corrected = rewritten
        confidence = min(confidence, match.confidence)
        applied.append(Correction(token=token, replacement=replacement, confidence=match.confidence))
    return CorrectionResult(text=corrected, confidence=confidence, corrections=tuple(applied))
