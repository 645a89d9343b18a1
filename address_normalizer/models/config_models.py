from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

"""Config dataclasses for the batch address normalizer.

These are the typed, immutable settings produced by config.loader and shared
read-only by every row-processing call. Every field has a default so that a
run without a config file behaves exactly like the built-in reference setup.
"""

__all__ = [
    "ValidationMode",
    "ValidationSettings",
    "FuzzySettings",
    "ComponentDefaults",
    "ReaderSettings",
    "DictionaryExtensions",
    "NormalizerConfig",
]


class ValidationMode(Enum):
    """Validator strictness.

    - STRUCTURED: length + alphabet checks only
    - DICTIONARY: additionally require a known dictionary entry in the address
    """
    STRUCTURED = "structured"
    DICTIONARY = "dictionary"


@dataclass(frozen=True)
class ValidationSettings:
    mode: ValidationMode = ValidationMode.STRUCTURED
    min_length: int = 3


@dataclass(frozen=True)
class FuzzySettings:
    """Spelling corrector thresholds.

    A correction applies only when distance < max_distance and the derived
    confidence (0-100) is strictly above confidence_floor.
    """
    min_token_length: int = 3  # tokens of 2 chars or less are never looked up
    max_distance: float = 0.2
    confidence_floor: int = 85


@dataclass(frozen=True)
class ComponentDefaults:
    """Placeholder values substituted for unresolved components."""
    region: str = "Москва"
    municipal_district: str = "-"
    settlement: str = "Москва"
    street: str = "ул. Примерная"
    house: str = "1"
    apartment: str = "-"


@dataclass(frozen=True)
class ReaderSettings:
    sheet: str | int = 0  # sheet name or 0-based index for .xlsx/.xls
    csv_encoding: str = "utf-8-sig"  # also reads plain utf-8
    csv_delimiter: str = ","


@dataclass(frozen=True)
class DictionaryExtensions:
    """Additional reference data merged over the built-in dictionary."""
    canonical_entries: tuple[str, ...] = ()
    city_abbreviations: dict[str, str] = field(default_factory=dict)
    region_names: dict[str, str] = field(default_factory=dict)
    spelling_corrections: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class NormalizerConfig:
    """Root configuration object for a normalization run."""
    validation: ValidationSettings = field(default_factory=ValidationSettings)
    fuzzy: FuzzySettings = field(default_factory=FuzzySettings)
    defaults: ComponentDefaults = field(default_factory=ComponentDefaults)
    reader: ReaderSettings = field(default_factory=ReaderSettings)
    dictionary: DictionaryExtensions = field(default_factory=DictionaryExtensions)
    strict_defaults: bool = False  # defaulted components downgrade records to warning
    confidence_sentinel: int = 200  # "fully normalized" marker
    logs_dir: str = "./logs"
