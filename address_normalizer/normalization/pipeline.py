from __future__ import annotations

import random
from dataclasses import dataclass, field

from ..models.address_record import AccuracyLevel, AddressComponents, AddressRecord
from ..models.config_models import NormalizerConfig
from .abbreviations import apply_corrections, expand_abbreviations
from .accuracy import classify_accuracy
from .assembler import assemble_record
from .classifier import classify_components
from .dictionary import ReferenceDictionary, build_reference_dictionary
from .formatter import collapse_whitespace, normalize_format
from .fuzzy import Correction, FuzzyIndex, correct_spelling
from .validator import validate

"""Per-row normalization pipeline.

Data flows strictly downward:
format -> typo fixes -> abbreviation expansion -> known misspellings
-> fuzzy correction -> known misspellings again
-> components / accuracy -> validation -> record.

NormalizationContext bundles everything shared by rows; it is built once and
never mutated, so rows can be processed in any order.
"""

__all__ = [
    "NormalizationContext",
    "NormalizedAddress",
    "build_context",
    "normalize_address",
    "process_address",
]


@dataclass(frozen=True)
class NormalizationContext:
    dictionary: ReferenceDictionary
    index: FuzzyIndex
    config: NormalizerConfig = field(default_factory=NormalizerConfig)


@dataclass(frozen=True)
class NormalizedAddress:
    normalized: str
    components: AddressComponents
    accuracy: AccuracyLevel
    confidence: int = 100  # lowest fuzzy correction confidence
    corrections: tuple[Correction, ...] = ()


def build_context(config: NormalizerConfig | None = None) -> NormalizationContext:
    """Build the shared dictionary and fuzzy index once per process."""
    cfg = config or NormalizerConfig()
    dictionary = build_reference_dictionary(cfg.dictionary)
    return NormalizationContext(
        dictionary=dictionary,
        index=FuzzyIndex(dictionary.canonical_entries),
        config=cfg,
    )


def normalize_address(text: str, context: NormalizationContext) -> NormalizedAddress:
    dictionary = context.dictionary
    fuzzy = context.config.fuzzy

    normalized = normalize_format(text.strip())
    normalized = apply_corrections(normalized, dictionary.typo_fixes)
    normalized = expand_abbreviations(normalized, dictionary)
    normalized = apply_corrections(normalized, dictionary.spelling_corrections)
    corrected = correct_spelling(
        normalized,
        context.index,
        min_token_length=fuzzy.min_token_length,
        max_distance=fuzzy.max_distance,
        confidence_floor=fuzzy.confidence_floor,
    )
    # fuzzy hits on long street-type words still need their short form
    normalized = apply_corrections(corrected.text, dictionary.spelling_corrections)
    normalized = collapse_whitespace(normalized)

    return NormalizedAddress(
        normalized=normalized,
        components=classify_components(normalized),
        accuracy=classify_accuracy(normalized),
        confidence=corrected.confidence,
        corrections=corrected.corrections,
    )


def process_address(
    record_id: int,
    original: str,
    context: NormalizationContext,
    *,
    rng: random.Random | None = None,
) -> AddressRecord:
    """Normalize, validate and assemble one row's address text."""
    cfg = context.config
    result = normalize_address(original, context)
    validation = validate(
        result.normalized,
        min_length=cfg.validation.min_length,
        mode=cfg.validation.mode,
        dictionary=context.dictionary,
    )
    return assemble_record(
        record_id=record_id,
        original=original,
        normalized=result.normalized,
        components=result.components,
        accuracy=result.accuracy,
        validation=validation,
        defaults=cfg.defaults,
        confidence_sentinel=cfg.confidence_sentinel,
        correction_confidence=result.confidence,
        strict=cfg.strict_defaults,
        rng=rng,
    )
