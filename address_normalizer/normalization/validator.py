from __future__ import annotations

import re
from dataclasses import dataclass

from ..models.config_models import ValidationMode
from .dictionary import ReferenceDictionary

"""Minimal well-formedness checks for a normalized address.

The structured mode only guards against empty or garbage input; it does not
require a house number or a dictionary hit. The dictionary mode adds the
stricter "must contain a known entry" rule.
"""

__all__ = [
    "TOO_SHORT",
    "MISSING_NAME",
    "NOT_IN_DICTIONARY",
    "ValidationResult",
    "validate",
]

TOO_SHORT = "too-short"
MISSING_NAME = "missing-name"
NOT_IN_DICTIONARY = "not-in-dictionary"

MESSAGES = {
    TOO_SHORT: "Адрес слишком короткий",
    MISSING_NAME: "Адрес должен содержать название",
    NOT_IN_DICTIONARY: "Адрес не содержит известного населённого пункта или улицы",
}

_NAME_LETTER = re.compile(r"[а-яё]", re.IGNORECASE)


@dataclass(frozen=True)
class ValidationResult:
    is_valid: bool
    code: str | None = None
    message: str | None = None

    @staticmethod
    def fail(code: str) -> ValidationResult:
        return ValidationResult(is_valid=False, code=code, message=MESSAGES[code])


VALID = ValidationResult(is_valid=True)


def _mentions_known_name(normalized: str, dictionary: ReferenceDictionary) -> bool:
    lowered = normalized.lower()
    return any(name.lower() in lowered for name in dictionary.known_names())


def validate(
    normalized: str,
    *,
    min_length: int = 3,
    mode: ValidationMode = ValidationMode.STRUCTURED,
    dictionary: ReferenceDictionary | None = None,
) -> ValidationResult:
    """Validate a normalized address string.

    Raises:
        ValueError: dictionary mode requested without a dictionary
    """
    if not normalized or len(normalized) < min_length:
        return ValidationResult.fail(TOO_SHORT)
    if not _NAME_LETTER.search(normalized):
        return ValidationResult.fail(MISSING_NAME)
    if mode is ValidationMode.DICTIONARY:
        if dictionary is None:
            raise ValueError("dictionary validation mode requires a reference dictionary")
        if not _mentions_known_name(normalized, dictionary):
            return ValidationResult.fail(NOT_IN_DICTIONARY)
    return VALID
