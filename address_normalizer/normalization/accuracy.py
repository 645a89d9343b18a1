from __future__ import annotations

import re

from ..models.address_record import AccuracyLevel

"""Accuracy tier detection over the whole normalized string.

Independent of the component classifier: its own patterns, strict priority
apartment > house > street, and STREET when nothing matches.
"""

__all__ = [
    "ACCURACY_RULES",
    "classify_accuracy",
]

_APARTMENT = re.compile(r"(?<!\w)(?:кв\.?\s*\d+|квартира\s*\d+|оф\.?\s*\d+|офис\s*\d+)", re.IGNORECASE)
_HOUSE = re.compile(
    r"(?<!\w)(?:д\.?\s*\d+[a-zа-яё]?|дом\s*\d+|корп\.?\s*\d+|стр\.?\s*\d+)",
    re.IGNORECASE,
)
_STREET = re.compile(
    r"(?<!\w)(?:ул\.|пр\.|проспект|пер\.|переулок|ш\.|шоссе|бул\.|бульвар|наб\.|набережная|пл\.|площадь)",
    re.IGNORECASE,
)

ACCURACY_RULES: tuple[tuple[re.Pattern[str], AccuracyLevel], ...] = (
    (_APARTMENT, AccuracyLevel.APARTMENT),
    (_HOUSE, AccuracyLevel.HOUSE),
    (_STREET, AccuracyLevel.STREET),
)


def classify_accuracy(normalized: str) -> AccuracyLevel:
    for pattern, level in ACCURACY_RULES:
        if pattern.search(normalized):
            return level
    return AccuracyLevel.STREET
